"""Trace store: addresses, writes and enumerates trace files."""

from __future__ import annotations

from ..exceptions import JobNotFoundError, TraceNotFoundError
from ..models import TraceAddress, step_pattern
from ..models.address import TRACE_SUFFIX, is_valid_job_id
from .base import FileSystem


class TraceStore:
    """Reads and writes traces at ``<job_id>/tr_stp_<step>_vid_<vertex_id>.tr``.

    The directory layout is the only index. The store holds no mutable
    state besides its filesystem handle, so concurrent reads are safe.
    """

    def __init__(self, filesystem: FileSystem) -> None:
        self.filesystem = filesystem

    def write(self, job_id: str, step_number: int, vertex_id: str, data: bytes) -> TraceAddress:
        """Write ``data`` at the address, replacing any existing trace."""
        address = TraceAddress(job_id=job_id, step_number=step_number, vertex_id=vertex_id)
        with self.filesystem.open_write(address.path) as handle:
            handle.write(data)
        return address

    def read(self, job_id: str, step_number: int, vertex_id: str) -> bytes:
        """Read the trace at the address.

        Raises ``TraceNotFoundError`` if it is absent or the address is not valid.
        """
        try:
            address = TraceAddress(job_id=job_id, step_number=step_number, vertex_id=vertex_id)
        except ValueError as exc:
            raise TraceNotFoundError(f"Invalid trace address: {exc}") from exc
        try:
            with self.filesystem.open_read(address.path) as handle:
                return handle.read()
        except FileNotFoundError as exc:
            raise TraceNotFoundError(f"No trace at {address.path}") from exc

    def list_vertices(self, job_id: str, step_number: int) -> set[str]:
        """Vertex ids captured for ``(job_id, step_number)``.

        Entries that are not traces of that step are skipped.
        Raises ``JobNotFoundError`` if the job directory does not exist.
        """
        pattern = step_pattern(step_number)
        vertices: set[str] = set()
        for name in self._list_job(job_id):
            match = pattern.fullmatch(name)
            if match is not None:
                vertices.add(match.group(1))
        return vertices

    def list_steps(self, job_id: str) -> set[int]:
        steps: set[int] = set()
        for name in self._list_job(job_id):
            try:
                steps.add(TraceAddress.from_path(f"{job_id}/{name}").step_number)
            except ValueError:
                continue
        return steps

    def list_jobs(self) -> list[str]:
        return [name for name in self.filesystem.list_dir("") if self.filesystem.is_dir(name)]

    def _list_job(self, job_id: str) -> list[str]:
        if not is_valid_job_id(job_id) or not self.filesystem.is_dir(job_id):
            raise JobNotFoundError(f"No trace directory for job {job_id!r}")
        return [name for name in self.filesystem.list_dir(job_id) if name.endswith(TRACE_SUFFIX)]
