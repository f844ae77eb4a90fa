"""Registry resolving persisted type names back to loadable types."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from ..exceptions import TypeConstraintError, UnresolvedTypeError
from .base import is_computation, is_writable, is_writable_comparable
from .builtin import BUILTIN_TYPES, NullValue
from .descriptor import TypeDescriptor, TypeKind, TypeSlot, qualified_name

T = TypeVar("T", bound=type)

_BUILTINS: dict[str, type] = {qualified_name(cls): cls for cls in BUILTIN_TYPES}

_SLOT_REQUIREMENTS: dict[TypeSlot, tuple[Callable[[type], bool], str]] = {
    TypeSlot.COMPUTATION: (is_computation, "a Computation (compute method)"),
    TypeSlot.VERTEX_ID: (is_writable_comparable, "a WritableComparable (ordering and equality)"),
    TypeSlot.VERTEX_VALUE: (is_writable, "a Writable"),
    TypeSlot.EDGE_VALUE: (is_writable, "a Writable"),
    TypeSlot.INBOUND_MESSAGE: (is_writable, "a Writable"),
    TypeSlot.OUTBOUND_MESSAGE: (is_writable, "a Writable"),
}


class TypeRegistry:
    """Built-in value kinds plus the external types the host application registers.

    Only registered names resolve; nothing is imported on demand.
    """

    def __init__(self, types: list[type] | None = None) -> None:
        self._external: dict[str, type] = {}
        for value_type in types or []:
            self.register(value_type)

    def register(self, value_type: T) -> T:
        """Register an external type. Returns it so it can be used as a decorator."""
        if not isinstance(value_type, type):
            raise TypeError(f"Expected a class, got {value_type!r}")
        name = qualified_name(value_type)
        if name in _BUILTINS:
            return value_type
        existing = self._external.get(name)
        if existing is not None and existing is not value_type:
            raise ValueError(f"A different type is already registered as {name!r}")
        self._external[name] = value_type
        return value_type

    def __contains__(self, name: object) -> bool:
        return name in _BUILTINS or name in self._external

    def descriptor(self, name: str) -> TypeDescriptor:
        self.resolve(name)
        kind = TypeKind.BUILTIN if name in _BUILTINS else TypeKind.EXTERNAL
        return TypeDescriptor(kind=kind, name=name)

    def resolve(self, name: str) -> type:
        value_type = _BUILTINS.get(name) or self._external.get(name)
        if value_type is None:
            raise UnresolvedTypeError(name)
        return value_type

    def resolve_for_slot(self, name: str, slot: TypeSlot) -> type:
        """Resolve ``name`` and check the capability ``slot`` requires."""
        try:
            value_type = self.resolve(name)
        except UnresolvedTypeError as exc:
            raise UnresolvedTypeError(name, field=slot.value) from exc
        check_slot(value_type, slot)
        return value_type


def check_slot(value_type: type, slot: TypeSlot) -> None:
    predicate, requirement = _SLOT_REQUIREMENTS[slot]
    if slot == TypeSlot.VERTEX_ID and value_type is NullValue:
        raise TypeConstraintError(f"{slot.value}: the null sentinel cannot identify a vertex")
    if not predicate(value_type):
        raise TypeConstraintError(
            f"{slot.value}: type {qualified_name(value_type)} is not {requirement}"
        )
