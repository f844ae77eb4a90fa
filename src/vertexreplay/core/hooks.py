"""Event hook protocol for observing capture outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import TraceAddress


@runtime_checkable
class RecorderHook(Protocol):
    """Protocol for receiving capture events, e.g. to feed logs or metrics.

    Hook methods must not raise; exceptions are swallowed by the dispatcher.
    """

    def on_trace_written(self, address: TraceAddress) -> None: ...
    def on_capture_failed(
        self, job_id: str, step_number: int, vertex_id: str, error: BaseException
    ) -> None: ...
    def on_anomaly_dropped(self, job_id: str, step_number: int, vertex_id: str) -> None: ...


class NullHook:
    """No-op hook. Useful as a reference implementation and in tests."""

    def on_trace_written(self, address: TraceAddress) -> None:
        pass

    def on_capture_failed(
        self, job_id: str, step_number: int, vertex_id: str, error: BaseException
    ) -> None:
        pass

    def on_anomaly_dropped(self, job_id: str, step_number: int, vertex_id: str) -> None:
        pass
