"""Value types, capability protocols and the type registry."""

from .base import (
    Computation,
    Writable,
    WritableComparable,
    is_computation,
    is_writable,
    is_writable_comparable,
)
from .builtin import (
    BUILTIN_TYPES,
    BooleanValue,
    DoubleValue,
    FloatValue,
    IntArrayValue,
    IntValue,
    LongValue,
    NullValue,
    TextValue,
)
from .descriptor import TypeDescriptor, TypeKind, TypeSlot, qualified_name
from .registry import TypeRegistry, check_slot

__all__ = [
    "BUILTIN_TYPES",
    "BooleanValue",
    "Computation",
    "DoubleValue",
    "FloatValue",
    "IntArrayValue",
    "IntValue",
    "LongValue",
    "NullValue",
    "TextValue",
    "TypeDescriptor",
    "TypeKind",
    "TypeRegistry",
    "TypeSlot",
    "Writable",
    "WritableComparable",
    "check_slot",
    "is_computation",
    "is_writable",
    "is_writable_comparable",
    "qualified_name",
]
