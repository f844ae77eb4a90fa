"""Capability protocols for user-defined value and computation types."""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class Writable(Protocol):
    """A value type that owns its binary layout.

    Implementations must be constructible without arguments; the decoder
    builds an empty instance and then calls ``read_fields`` on it.
    """

    def write(self, out: BinaryIO) -> None: ...
    def read_fields(self, inp: BinaryIO) -> None: ...


@runtime_checkable
class WritableComparable(Writable, Protocol):
    """A ``Writable`` that also supports equality and ordering (vertex ids)."""

    def __lt__(self, other: object) -> bool: ...


@runtime_checkable
class Computation(Protocol):
    """User logic run once per vertex per computation step."""

    def compute(self, vertex: object, messages: Iterable[object]) -> None: ...


def is_writable(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, Writable)


def is_writable_comparable(cls: type) -> bool:
    # object supplies __lt__ and __eq__, so the protocol check alone is not enough.
    if not is_writable(cls):
        return False
    return cls.__lt__ is not object.__lt__ and cls.__eq__ is not object.__eq__


def is_computation(cls: type) -> bool:
    return isinstance(cls, type) and callable(getattr(cls, "compute", None))
