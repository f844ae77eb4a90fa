"""vertexreplay — record/replay debugging for vertex-centric graph computations.

Convenience API (delegates to a default Recorder instance):
    vertexreplay.configure(...)   -> set up the default recorder
    vertexreplay.capture(...)     -> capture a scenario if the policy approves

DI API (construct your own Recorder):
    from vertexreplay.core import DebugConfig, Recorder
    from vertexreplay.storage import LocalFileSystem, TraceStore
    recorder = Recorder(config=DebugConfig(...), store=TraceStore(LocalFileSystem(root)))
    recorder.capture(job_id, scenario)

Read side:
    from vertexreplay.query import TraceQuery
    query = TraceQuery(store, registry)
    query.list_vertices(job_id, step)
"""

from __future__ import annotations

from .core import DebugConfig, NullHook, Recorder, RecorderHook
from .models import Scenario, TraceAddress
from .query import ScenarioView, TraceQuery
from .storage import FileSystem, LocalFileSystem, MemoryFileSystem, TraceStore
from .values import TypeRegistry

_default_recorder: Recorder | None = None


def configure(
    *,
    storage: str | FileSystem = "memory",
    steps_to_debug: list[int] | None = None,
    vertices_to_debug: list[str] | None = None,
    debug_neighbors: bool = False,
    num_random_vertices: int | None = None,
    max_captures: int = 10,
    max_anomaly_reports: int = 5,
    capture_exceptions: bool = True,
    hooks: list[RecorderHook] | None = None,
) -> Recorder:
    """Configure and return the default global Recorder instance."""
    global _default_recorder
    config = DebugConfig(
        steps_to_debug=set(steps_to_debug) if steps_to_debug is not None else None,
        vertices_to_debug=set(vertices_to_debug) if vertices_to_debug is not None else None,
        debug_neighbors=debug_neighbors,
        num_random_vertices=num_random_vertices,
        max_captures=max_captures,
        max_anomaly_reports=max_anomaly_reports,
        capture_exceptions=capture_exceptions,
    )
    store = TraceStore(_resolve_storage(storage))
    _default_recorder = Recorder(config=config, store=store, hooks=hooks)
    return _default_recorder


def capture(job_id: str, scenario: Scenario) -> TraceAddress | None:
    """Capture ``scenario`` using the default Recorder."""
    global _default_recorder
    if _default_recorder is None:
        _default_recorder = Recorder()
    return _default_recorder.capture(job_id, scenario)


def _reset_default_recorder() -> None:
    """Reset the default recorder. Used by test fixtures."""
    global _default_recorder
    _default_recorder = None


def _resolve_storage(storage: str | FileSystem) -> FileSystem:
    if not isinstance(storage, str):
        return storage
    if storage == "memory":
        return MemoryFileSystem()
    if storage.startswith("file://"):
        return LocalFileSystem(storage.removeprefix("file://"))
    raise ValueError(
        "Unsupported storage value. Use 'memory', 'file://<path>', or a FileSystem instance."
    )


__all__ = [
    "DebugConfig",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "NullHook",
    "Recorder",
    "RecorderHook",
    "Scenario",
    "ScenarioView",
    "TraceAddress",
    "TraceQuery",
    "TraceStore",
    "TypeRegistry",
    "capture",
    "configure",
]
