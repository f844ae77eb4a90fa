"""Binary marshaling of scenarios through a canonical MessagePack schema."""

from __future__ import annotations

import warnings
from pathlib import Path

import msgpack  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import CodecError, TraceLoadError
from ..models import (
    CURRENT_SCHEMA_VERSION,
    Context,
    ExceptionInfo,
    Neighbor,
    OutboundMessage,
    Scenario,
)
from ..values import NullValue, TypeRegistry, TypeSlot, qualified_name
from .codec import decode, encode

_UINT64_MAX = 2**64 - 1
_NULL_NAME = qualified_name(NullValue)


class NeighborRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    neighbor_id: bytes
    edge_value: bytes | None = None


class OutMessageRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    destination_id: bytes
    message: bytes


class ExceptionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str
    exception_type: str = ""
    stack_trace: str = ""


class ContextRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    step_number: int = Field(ge=0, le=_UINT64_MAX)
    vertex_id: bytes
    vertex_value_before: bytes = b""
    vertex_value_after: bytes = b""
    neighbors: list[NeighborRecord] = Field(default_factory=list)
    inbound_messages: list[bytes] = Field(default_factory=list)
    outbound_messages: list[OutMessageRecord] = Field(default_factory=list)


class ScenarioRecord(BaseModel):
    """On-disk layout. Values are opaque bytes named by the ``*_type`` fields."""

    model_config = ConfigDict(extra="ignore")

    schema_version: str = CURRENT_SCHEMA_VERSION
    computation_type: str
    vertex_id_type: str
    vertex_value_type: str
    edge_value_type: str
    inbound_message_type: str
    outbound_message_type: str
    context: ContextRecord
    exception: ExceptionRecord | None = None


def scenario_to_bytes(scenario: Scenario) -> bytes:
    """Encode ``scenario``. Raises ``CodecError`` naming the offending field."""
    record = scenario_to_record(scenario)
    return msgpack.packb(record.model_dump(), use_bin_type=True)


def scenario_from_bytes(data: bytes, registry: TypeRegistry | None = None) -> Scenario:
    """Decode a scenario, resolving its types through ``registry``.

    Raises ``TraceLoadError`` for an unparseable record, ``UnresolvedTypeError``
    or ``TypeConstraintError`` for bad type names, and ``CodecError`` for
    values that do not decode against their type. Nothing is returned on failure.
    """
    try:
        payload = msgpack.unpackb(data, raw=False)
        record = ScenarioRecord.model_validate(payload)
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
        raise TraceLoadError(f"Failed to parse scenario record: {exc}") from exc
    if record.schema_version != CURRENT_SCHEMA_VERSION:
        warnings.warn(
            f"Trace schema version {record.schema_version!r} differs from "
            f"current {CURRENT_SCHEMA_VERSION!r}. "
            "Some fields may be missing or ignored.",
            stacklevel=2,
        )
    return scenario_from_record(record, registry or TypeRegistry())


def scenario_to_record(scenario: Scenario) -> ScenarioRecord:
    def _encode(value: object, slot: TypeSlot, field: str) -> bytes:
        expected = scenario.descriptor(slot).name
        if value is None:
            if expected == _NULL_NAME:
                return b""
            raise CodecError(f"missing value of type {expected}", field=field)
        actual = qualified_name(type(value))
        if actual != expected:
            raise CodecError(f"value of type {actual} where {expected} is declared", field=field)
        return encode(value, field=field)

    context = scenario.context
    neighbors = []
    for index, neighbor in enumerate(context.neighbors):
        prefix = f"context.neighbors[{index}]"
        edge_value = None
        if neighbor.edge_value is not None:
            edge_value = _encode(neighbor.edge_value, TypeSlot.EDGE_VALUE, f"{prefix}.edge_value")
        neighbors.append(
            NeighborRecord(
                neighbor_id=_encode(
                    neighbor.neighbor_id, TypeSlot.VERTEX_ID, f"{prefix}.neighbor_id"
                ),
                edge_value=edge_value,
            )
        )
    outbound = []
    for index, out in enumerate(context.outbound_messages):
        prefix = f"context.outbound_messages[{index}]"
        outbound.append(
            OutMessageRecord(
                destination_id=_encode(
                    out.destination_id, TypeSlot.VERTEX_ID, f"{prefix}.destination_id"
                ),
                message=_encode(out.message, TypeSlot.OUTBOUND_MESSAGE, f"{prefix}.message"),
            )
        )

    exception = None
    if scenario.exception is not None:
        exception = ExceptionRecord(**scenario.exception.model_dump())

    return ScenarioRecord(
        computation_type=scenario.computation_type.name,
        vertex_id_type=scenario.vertex_id_type.name,
        vertex_value_type=scenario.vertex_value_type.name,
        edge_value_type=scenario.edge_value_type.name,
        inbound_message_type=scenario.inbound_message_type.name,
        outbound_message_type=scenario.outbound_message_type.name,
        context=ContextRecord(
            step_number=context.step_number,
            vertex_id=_encode(context.vertex_id, TypeSlot.VERTEX_ID, "context.vertex_id"),
            vertex_value_before=_encode(
                context.vertex_value_before, TypeSlot.VERTEX_VALUE, "context.vertex_value_before"
            ),
            vertex_value_after=_encode(
                context.vertex_value_after, TypeSlot.VERTEX_VALUE, "context.vertex_value_after"
            ),
            neighbors=neighbors,
            inbound_messages=[
                _encode(message, TypeSlot.INBOUND_MESSAGE, f"context.inbound_messages[{index}]")
                for index, message in enumerate(context.inbound_messages)
            ],
            outbound_messages=outbound,
        ),
        exception=exception,
    )


def scenario_from_record(record: ScenarioRecord, registry: TypeRegistry) -> Scenario:
    types = {
        slot: registry.resolve_for_slot(getattr(record, slot.value), slot) for slot in TypeSlot
    }
    vertex_id_type = types[TypeSlot.VERTEX_ID]
    vertex_value_type = types[TypeSlot.VERTEX_VALUE]
    edge_value_type = types[TypeSlot.EDGE_VALUE]

    raw = record.context
    neighbors = []
    for index, neighbor in enumerate(raw.neighbors):
        prefix = f"context.neighbors[{index}]"
        edge_value = None
        if neighbor.edge_value is not None and edge_value_type is not NullValue:
            edge_value = decode(neighbor.edge_value, edge_value_type, field=f"{prefix}.edge_value")
        neighbors.append(
            Neighbor(
                neighbor_id=decode(
                    neighbor.neighbor_id, vertex_id_type, field=f"{prefix}.neighbor_id"
                ),
                edge_value=edge_value,
            )
        )
    outbound = [
        OutboundMessage(
            destination_id=decode(
                out.destination_id,
                vertex_id_type,
                field=f"context.outbound_messages[{index}].destination_id",
            ),
            message=decode(
                out.message,
                types[TypeSlot.OUTBOUND_MESSAGE],
                field=f"context.outbound_messages[{index}].message",
            ),
        )
        for index, out in enumerate(raw.outbound_messages)
    ]
    context = Context(
        step_number=raw.step_number,
        vertex_id=decode(raw.vertex_id, vertex_id_type, field="context.vertex_id"),
        vertex_value_before=decode(
            raw.vertex_value_before, vertex_value_type, field="context.vertex_value_before"
        ),
        vertex_value_after=decode(
            raw.vertex_value_after, vertex_value_type, field="context.vertex_value_after"
        ),
        neighbors=neighbors,
        inbound_messages=[
            decode(
                message,
                types[TypeSlot.INBOUND_MESSAGE],
                field=f"context.inbound_messages[{index}]",
            )
            for index, message in enumerate(raw.inbound_messages)
        ],
        outbound_messages=outbound,
    )

    exception = None
    if record.exception is not None:
        exception = ExceptionInfo(**record.exception.model_dump())

    return Scenario(
        **{slot.value: registry.descriptor(getattr(record, slot.value)) for slot in TypeSlot},
        context=context,
        exception=exception,
    )


def save_scenario(scenario: Scenario, path: str | Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(scenario_to_bytes(scenario))
    return output_path


def load_scenario_file(path: str | Path, registry: TypeRegistry | None = None) -> Scenario:
    """Load a scenario from a local trace file.

    Raises the errors of ``scenario_from_bytes``,
    or ``FileNotFoundError`` / ``OSError`` if the file is inaccessible.
    """
    return scenario_from_bytes(Path(path).read_bytes(), registry)

