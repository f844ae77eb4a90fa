from __future__ import annotations

import warnings
from pathlib import Path
from typing import BinaryIO

import msgpack
import pytest

from vertexreplay.exceptions import (
    CodecError,
    TraceLoadError,
    TypeConstraintError,
    UnresolvedTypeError,
)
from vertexreplay.models import Scenario
from vertexreplay.serializers import (
    load_scenario_file,
    save_scenario,
    scenario_from_bytes,
    scenario_to_bytes,
)
from vertexreplay.values import IntValue, NullValue, TextValue, TypeRegistry


class UnorderedId:
    """Writable but without ordering, so unusable as a vertex id."""

    def __init__(self) -> None:
        self.value = 0

    def write(self, out: BinaryIO) -> None:
        out.write(bytes([self.value]))

    def read_fields(self, inp: BinaryIO) -> None:
        self.value = inp.read(1)[0]


class ByteId(UnorderedId):
    """One-byte ordered vertex id."""

    def __lt__(self, other: object) -> bool:
        return isinstance(other, ByteId) and self.value < other.value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ByteId) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)


def test_scenario_roundtrip_preserves_every_field(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    loaded = scenario_from_bytes(scenario_to_bytes(example_scenario), registry)

    assert loaded == example_scenario
    context = loaded.context
    assert context.step_number == 3
    assert context.vertex_id == IntValue(7)
    assert context.vertex_value_before == IntValue(5)
    assert context.vertex_value_after == IntValue(6)
    assert [(n.neighbor_id, n.edge_value) for n in context.neighbors] == [
        (IntValue(3), None),
        (IntValue(9), IntValue(1)),
    ]
    assert context.inbound_messages == [IntValue(2), IntValue(4)]
    assert [(m.destination_id, m.message) for m in context.outbound_messages] == [
        (IntValue(3), IntValue(10)),
        (IntValue(9), IntValue(11)),
    ]


def test_roundtrip_with_null_edge_type_and_text_messages(
    registry: TypeRegistry, computation: type
) -> None:
    scenario = Scenario.for_computation(
        computation,
        vertex_id_type=TextValue,
        vertex_value_type=IntValue,
        edge_value_type=NullValue,
        inbound_message_type=TextValue,
        outbound_message_type=IntValue,
        step_number=0,
        vertex_id=TextValue("a"),
        vertex_value_before=IntValue(0),
        vertex_value_after=IntValue(1),
    )
    for name in ("c", "b", "d"):
        scenario.add_neighbor(TextValue(name))
    scenario.add_inbound_message(TextValue("hello"))
    scenario.add_outbound_message(TextValue("d"), IntValue(1))
    scenario.add_outbound_message(TextValue("c"), IntValue(2))

    loaded = scenario_from_bytes(scenario_to_bytes(scenario), registry)

    assert loaded == scenario
    assert [str(n) for n in loaded.context.neighbor_ids] == ["c", "b", "d"]
    assert all(n.edge_value is None for n in loaded.context.neighbors)


def test_exception_info_roundtrip(example_scenario: Scenario, registry: TypeRegistry) -> None:
    try:
        raise KeyError("missing neighbor")
    except KeyError as exc:
        example_scenario.set_exception(exc)

    loaded = scenario_from_bytes(scenario_to_bytes(example_scenario), registry)

    assert loaded.exception is not None
    assert loaded.exception.exception_type == "KeyError"
    assert "missing neighbor" in loaded.exception.message
    assert "Traceback" in loaded.exception.stack_trace


def test_unordered_vertex_id_type_is_rejected(registry: TypeRegistry, computation: type) -> None:
    registry.register(UnorderedId)
    scenario = Scenario.for_computation(
        computation,
        vertex_id_type=UnorderedId,
        vertex_value_type=IntValue,
        inbound_message_type=IntValue,
        step_number=1,
        vertex_id=UnorderedId(),
        vertex_value_before=IntValue(0),
        vertex_value_after=IntValue(0),
    )
    data = scenario_to_bytes(scenario)

    with pytest.raises(TypeConstraintError, match="vertex_id_type"):
        scenario_from_bytes(data, registry)


def test_unregistered_type_name_is_unresolved(example_scenario: Scenario) -> None:
    data = scenario_to_bytes(example_scenario)

    with pytest.raises(UnresolvedTypeError, match="MinLabelComputation") as info:
        scenario_from_bytes(data, TypeRegistry())
    assert info.value.field == "computation_type"


def test_value_of_wrong_type_fails_on_write(example_scenario: Scenario) -> None:
    example_scenario.add_inbound_message(TextValue("oops"))

    with pytest.raises(CodecError, match=r"context\.inbound_messages\[2\]"):
        scenario_to_bytes(example_scenario)


def test_missing_value_fails_on_write(example_scenario: Scenario) -> None:
    example_scenario.set_vertex_value_after(None)

    with pytest.raises(CodecError, match="vertex_value_after"):
        scenario_to_bytes(example_scenario)


def test_corrupt_value_bytes_fail_whole_record(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    payload = msgpack.unpackb(scenario_to_bytes(example_scenario), raw=False)
    payload["context"]["neighbors"][1]["edge_value"] = b"\x01"
    data = msgpack.packb(payload, use_bin_type=True)

    with pytest.raises(CodecError, match=r"context\.neighbors\[1\]\.edge_value") as info:
        scenario_from_bytes(data, registry)
    assert info.value.field == "context.neighbors[1].edge_value"


def test_malformed_record_raises_load_error(registry: TypeRegistry) -> None:
    with pytest.raises(TraceLoadError, match="Failed to parse"):
        scenario_from_bytes(b"NOT A TRACE AT ALL", registry)


def test_truncated_record_raises_load_error(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    data = scenario_to_bytes(example_scenario)

    with pytest.raises(TraceLoadError):
        scenario_from_bytes(data[: len(data) // 2], registry)


def test_wrong_shape_record_raises_load_error(registry: TypeRegistry) -> None:
    with pytest.raises(TraceLoadError):
        scenario_from_bytes(msgpack.packb(["just", "a", "list"]), registry)


def test_schema_version_mismatch_warns_but_parses(
    example_scenario: Scenario, registry: TypeRegistry
) -> None:
    payload = msgpack.unpackb(scenario_to_bytes(example_scenario), raw=False)
    payload["schema_version"] = "0.99.0"
    payload["unknown_future_field"] = "should be ignored"
    data = msgpack.packb(payload, use_bin_type=True)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        loaded = scenario_from_bytes(data, registry)

    assert loaded.context == example_scenario.context
    warning_messages = [str(w.message) for w in caught]
    assert any("0.99.0" in msg and "differs" in msg for msg in warning_messages)


def test_save_and_load_scenario_file(
    tmp_path: Path, example_scenario: Scenario, registry: TypeRegistry
) -> None:
    output = save_scenario(example_scenario, tmp_path / "nested" / "scenario.tr")

    assert output.exists()
    assert load_scenario_file(output, registry) == example_scenario


def test_truncated_user_vertex_id_raises_codec_error(
    registry: TypeRegistry, computation: type
) -> None:
    registry.register(ByteId)
    scenario = Scenario.for_computation(
        computation,
        vertex_id_type=ByteId,
        vertex_value_type=IntValue,
        inbound_message_type=IntValue,
        step_number=1,
        vertex_id=ByteId(),
        vertex_value_before=IntValue(0),
        vertex_value_after=IntValue(0),
    )
    payload = msgpack.unpackb(scenario_to_bytes(scenario), raw=False)
    payload["context"]["vertex_id"] = b""

    with pytest.raises(CodecError) as info:
        scenario_from_bytes(msgpack.packb(payload, use_bin_type=True), registry)
    assert info.value.field == "context.vertex_id"
