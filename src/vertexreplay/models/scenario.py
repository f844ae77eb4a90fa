"""Scenario model: one vertex's activity during one computation step."""

from __future__ import annotations

import traceback
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..values import NullValue, TypeDescriptor, TypeSlot


class Neighbor(BaseModel):
    """Outgoing edge of the captured vertex. ``edge_value`` is None for the null edge type."""

    model_config = ConfigDict(strict=True, extra="ignore")

    neighbor_id: Any
    edge_value: Any = None


class OutboundMessage(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    destination_id: Any
    message: Any


class ExceptionInfo(BaseModel):
    """Fault raised by the user logic while computing the captured vertex."""

    model_config = ConfigDict(strict=True, extra="ignore")

    message: str
    exception_type: str = ""
    stack_trace: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExceptionInfo:
        return cls(
            message=str(exc),
            exception_type=exc.__class__.__name__,
            stack_trace="".join(traceback.format_exception(exc)),
        )


class Context(BaseModel):
    """Payload of a scenario. Sequence order reflects edge and message arrival order."""

    model_config = ConfigDict(strict=True, extra="ignore")

    step_number: int = Field(ge=0)
    vertex_id: Any
    vertex_value_before: Any = None
    vertex_value_after: Any = None
    neighbors: list[Neighbor] = Field(default_factory=list)
    inbound_messages: list[Any] = Field(default_factory=list)
    outbound_messages: list[OutboundMessage] = Field(default_factory=list)

    @property
    def neighbor_ids(self) -> list[Any]:
        return [neighbor.neighbor_id for neighbor in self.neighbors]


class Scenario(BaseModel):
    """Captured unit: the types involved plus the vertex's context for one step."""

    model_config = ConfigDict(strict=True, extra="ignore")

    computation_type: TypeDescriptor
    vertex_id_type: TypeDescriptor
    vertex_value_type: TypeDescriptor
    edge_value_type: TypeDescriptor
    inbound_message_type: TypeDescriptor
    outbound_message_type: TypeDescriptor
    context: Context
    exception: ExceptionInfo | None = None

    @classmethod
    def for_computation(
        cls,
        computation_type: type,
        *,
        vertex_id_type: type,
        vertex_value_type: type,
        edge_value_type: type = NullValue,
        inbound_message_type: type,
        outbound_message_type: type | None = None,
        step_number: int,
        vertex_id: object,
        vertex_value_before: object = None,
        vertex_value_after: object = None,
    ) -> Scenario:
        """Start a scenario on the write path; neighbors and messages are added afterwards."""
        return cls(
            computation_type=TypeDescriptor.of(computation_type),
            vertex_id_type=TypeDescriptor.of(vertex_id_type),
            vertex_value_type=TypeDescriptor.of(vertex_value_type),
            edge_value_type=TypeDescriptor.of(edge_value_type),
            inbound_message_type=TypeDescriptor.of(inbound_message_type),
            outbound_message_type=TypeDescriptor.of(outbound_message_type or inbound_message_type),
            context=Context(
                step_number=step_number,
                vertex_id=vertex_id,
                vertex_value_before=vertex_value_before,
                vertex_value_after=vertex_value_after,
            ),
        )

    def descriptor(self, slot: TypeSlot) -> TypeDescriptor:
        return getattr(self, slot.value)

    def add_neighbor(self, neighbor_id: object, edge_value: object = None) -> None:
        self.context.neighbors.append(Neighbor(neighbor_id=neighbor_id, edge_value=edge_value))

    def add_inbound_message(self, message: object) -> None:
        self.context.inbound_messages.append(message)

    def add_outbound_message(self, destination_id: object, message: object) -> None:
        self.context.outbound_messages.append(
            OutboundMessage(destination_id=destination_id, message=message)
        )

    def set_vertex_value_after(self, value: object) -> None:
        self.context.vertex_value_after = value

    def set_exception(self, exc: BaseException) -> None:
        self.exception = ExceptionInfo.from_exception(exc)
