"""Type descriptors: the persisted, resolvable names of value types."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from .builtin import BUILTIN_TYPES


class TypeKind(StrEnum):
    BUILTIN = "builtin"
    EXTERNAL = "external"


class TypeSlot(StrEnum):
    """Position a type occupies in a scenario. Each slot has a required capability."""

    COMPUTATION = "computation_type"
    VERTEX_ID = "vertex_id_type"
    VERTEX_VALUE = "vertex_value_type"
    EDGE_VALUE = "edge_value_type"
    INBOUND_MESSAGE = "inbound_message_type"
    OUTBOUND_MESSAGE = "outbound_message_type"


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeDescriptor(BaseModel):
    """Reference to a concrete type by its fully-qualified name."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    kind: TypeKind
    name: str

    @classmethod
    def of(cls, value_type: type) -> TypeDescriptor:
        kind = TypeKind.BUILTIN if value_type in BUILTIN_TYPES else TypeKind.EXTERNAL
        return cls(kind=kind, name=qualified_name(value_type))

    @property
    def short_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    def __str__(self) -> str:
        return self.name
