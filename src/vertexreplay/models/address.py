"""Trace addresses and their mapping to storage paths."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

TRACE_SUFFIX = ".tr"
_RESERVED_NAMES = frozenset({".", ".."})
_TRACE_NAME = re.compile(r"tr_stp_(\d+)_vid_(.*)\.tr")


def is_valid_job_id(job_id: str) -> bool:
    return bool(job_id) and "/" not in job_id and job_id not in _RESERVED_NAMES


def trace_file_name(step_number: int, vertex_id: str) -> str:
    return f"tr_stp_{step_number}_vid_{vertex_id}{TRACE_SUFFIX}"


def step_pattern(step_number: int) -> re.Pattern[str]:
    """Pattern matching trace file names of one step; group 1 is the vertex id."""
    return re.compile(rf"tr_stp_{step_number}_vid_(.*)\.tr")


class TraceAddress(BaseModel):
    """(job, step, vertex) triple identifying a trace. The path is the index."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    job_id: str = Field(min_length=1)
    step_number: int = Field(ge=0)
    vertex_id: str = Field(min_length=1)

    @field_validator("job_id", "vertex_id")
    @classmethod
    def _no_path_separator(cls, value: str) -> str:
        if "/" in value:
            raise ValueError(f"must not contain '/': {value!r}")
        return value

    @field_validator("job_id")
    @classmethod
    def _not_a_relative_directory(cls, value: str) -> str:
        if value in _RESERVED_NAMES:
            raise ValueError(f"must not be a relative directory name: {value!r}")
        return value

    @property
    def file_name(self) -> str:
        return trace_file_name(self.step_number, self.vertex_id)

    @property
    def path(self) -> str:
        return f"{self.job_id}/{self.file_name}"

    @classmethod
    def from_path(cls, path: str) -> TraceAddress:
        """Invert ``path``. Raises ``ValueError`` if it is not a trace path."""
        job_id, _, file_name = path.strip("/").rpartition("/")
        match = _TRACE_NAME.fullmatch(file_name)
        if not job_id or match is None:
            raise ValueError(f"Not a trace path: {path!r}")
        return cls(job_id=job_id, step_number=int(match.group(1)), vertex_id=match.group(2))

    def __str__(self) -> str:
        return self.path
