"""Configuration of what a worker captures."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DebugConfig(BaseModel):
    """Validated capture configuration. Passed via DI to a Recorder.

    ``None`` for an allow-list means "not configured". Subclasses may
    override ``is_vertex_value_correct`` and ``is_message_correct`` to
    report integrity violations as anomalies.
    """

    steps_to_debug: set[int] | None = None
    vertices_to_debug: set[str] | None = None
    debug_neighbors: bool = False
    num_random_vertices: int | None = Field(default=None, ge=1)
    max_captures: int = Field(default=10, ge=0)
    max_anomaly_reports: int = Field(default=5, ge=0)
    capture_exceptions: bool = True
    check_vertex_value_integrity: bool = False
    check_message_integrity: bool = False

    def is_vertex_value_correct(self, vertex_id: object, value: object) -> bool:
        return True

    def is_message_correct(
        self, src_id: object, dst_id: object, message: object, step_number: int
    ) -> bool:
        return True
