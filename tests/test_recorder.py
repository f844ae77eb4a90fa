from __future__ import annotations

import warnings

import pytest

import vertexreplay
from vertexreplay.core import DebugConfig, NullHook, Recorder
from vertexreplay.models import Scenario, TraceAddress
from vertexreplay.query import TraceQuery
from vertexreplay.storage import MemoryFileSystem, TraceStore
from vertexreplay.values import IntValue, TextValue, TypeRegistry


class _RecordingHook:
    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def on_trace_written(self, address: TraceAddress) -> None:
        self.events.append(("written", address.path))

    def on_capture_failed(
        self, job_id: str, step_number: int, vertex_id: str, error: BaseException
    ) -> None:
        self.events.append(("failed", job_id, str(step_number), vertex_id, type(error).__name__))

    def on_anomaly_dropped(self, job_id: str, step_number: int, vertex_id: str) -> None:
        self.events.append(("dropped", job_id, str(step_number), vertex_id))


class _BrokenHook(NullHook):
    def on_trace_written(self, address: TraceAddress) -> None:
        raise RuntimeError("hook crashed!")


class _FailingFileSystem(MemoryFileSystem):
    def open_write(self, path: str):  # type: ignore[override]
        raise OSError("disk full")


class _CappedValues(DebugConfig):
    def is_vertex_value_correct(self, vertex_id: object, value: object) -> bool:
        return value.get() <= vertex_id.get()  # type: ignore[attr-defined]

    def is_message_correct(
        self, src_id: object, dst_id: object, message: object, step_number: int
    ) -> bool:
        return message.get() <= src_id.get()  # type: ignore[attr-defined]


def test_capture_writes_approved_scenario(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    store = TraceStore(MemoryFileSystem())
    recorder = Recorder(store=store)

    address = recorder.capture("job42", example_scenario)

    assert address == TraceAddress(job_id="job42", step_number=3, vertex_id="7")
    assert TraceQuery(store, registry).load_scenario("job42", 3, "7") == example_scenario


def test_capture_skips_rejected_scenario(example_scenario: Scenario) -> None:
    store = TraceStore(MemoryFileSystem())
    recorder = Recorder(config=DebugConfig(vertices_to_debug={"1"}), store=store)

    assert recorder.capture("job42", example_scenario) is None
    assert recorder.state.captures == 0


def test_capture_uses_scenario_neighbors_for_neighbor_rule(example_scenario: Scenario) -> None:
    config = DebugConfig(vertices_to_debug={"9"}, debug_neighbors=True)
    recorder = Recorder(config=config)

    assert recorder.capture("job42", example_scenario) is not None


def test_write_failure_does_not_propagate(example_scenario: Scenario) -> None:
    hook = _RecordingHook()
    recorder = Recorder(store=TraceStore(_FailingFileSystem()), hooks=[hook])

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        address = recorder.capture("job42", example_scenario)

    assert address is None
    assert any("failed to write trace" in str(w.message) for w in caught)
    assert hook.events == [("failed", "job42", "3", "7", "OSError")]


def test_marshal_failure_does_not_propagate(example_scenario: Scenario) -> None:
    example_scenario.add_inbound_message(TextValue("wrong type"))
    recorder = Recorder()

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        assert recorder.capture("job42", example_scenario) is None

    assert any("Trace data has been dropped" in str(w.message) for w in caught)


def test_hooks_receive_written_address_and_broken_hook_is_harmless(
    example_scenario: Scenario,
) -> None:
    hook = _RecordingHook()
    recorder = Recorder(hooks=[_BrokenHook(), hook])

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        address = recorder.capture("job42", example_scenario)

    assert address is not None
    assert hook.events == [("written", "job42/tr_stp_3_vid_7.tr")]
    assert any("hook error" in str(w.message) for w in caught)


def test_capture_exception_records_fault_until_ceiling(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    store = TraceStore(MemoryFileSystem())
    hook = _RecordingHook()
    recorder = Recorder(
        config=DebugConfig(max_captures=0, max_anomaly_reports=1), store=store, hooks=[hook]
    )

    first = recorder.capture_exception("job42", example_scenario, ValueError("boom"))
    second = recorder.capture_exception("job42", example_scenario, ValueError("again"))

    assert first is not None
    assert second is None
    assert recorder.state.anomalies_dropped == 1
    assert hook.events[-1] == ("dropped", "job42", "3", "7")
    loaded = TraceQuery(store, registry).load_scenario("job42", 3, "7")
    assert loaded.exception is not None
    assert loaded.exception.message == "boom"


def test_capture_exception_disabled(example_scenario: Scenario) -> None:
    recorder = Recorder(config=DebugConfig(capture_exceptions=False))
    assert recorder.capture_exception("job42", example_scenario, ValueError("x")) is None
    assert recorder.state.anomalies == 0


def test_integrity_violations_are_recorded(example_scenario: Scenario) -> None:
    store = TraceStore(MemoryFileSystem())
    config = _CappedValues(check_vertex_value_integrity=True, check_message_integrity=True)
    recorder = Recorder(config=config, store=store)

    violations = recorder.check_integrity("job42", example_scenario)

    assert violations == [
        "message 10 from 7 to 3 is incorrect",
        "message 11 from 7 to 9 is incorrect",
    ]
    assert store.list_vertices("job42", 3) == {"7"}
    assert recorder.state.anomalies == 1


def test_integrity_checks_pass_without_recording(example_scenario: Scenario) -> None:
    store = TraceStore(MemoryFileSystem())
    config = _CappedValues(check_vertex_value_integrity=True)
    recorder = Recorder(config=config, store=store)

    example_scenario.set_vertex_value_after(IntValue(7))
    assert recorder.check_integrity("job42", example_scenario) == []
    assert store.list_jobs() == []


def test_configure_and_capture_with_default_recorder(example_scenario: Scenario) -> None:
    filesystem = MemoryFileSystem()
    recorder = vertexreplay.configure(storage=filesystem, vertices_to_debug=["7"])

    assert vertexreplay.capture("job42", example_scenario) is not None
    assert recorder.store.list_vertices("job42", 3) == {"7"}


def test_capture_without_configure_uses_memory_default(example_scenario: Scenario) -> None:
    assert vertexreplay.capture("job42", example_scenario) is not None


def test_configure_rejects_unknown_storage() -> None:
    with pytest.raises(ValueError, match="Unsupported storage"):
        vertexreplay.configure(storage="s3://bucket")
