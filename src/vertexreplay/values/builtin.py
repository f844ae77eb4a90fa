"""Built-in value kinds with fixed big-endian layouts."""

from __future__ import annotations

import struct
from functools import total_ordering
from typing import BinaryIO, ClassVar


def _read_exact(inp: BinaryIO, size: int) -> bytes:
    data = inp.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


class NullValue:
    """Sentinel for "no value". Has no bytes and decodes to absence."""

    def write(self, out: BinaryIO) -> None:
        pass

    def read_fields(self, inp: BinaryIO) -> None:
        pass

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NullValue)

    def __hash__(self) -> int:
        return 0

    def __repr__(self) -> str:
        return "NullValue()"

    def __str__(self) -> str:
        return "(null)"


@total_ordering
class _ScalarValue:
    _format: ClassVar[struct.Struct]
    _default: ClassVar[object] = 0

    def __init__(self, value: object = None) -> None:
        self.value = self._default if value is None else self._coerce(value)

    @staticmethod
    def _coerce(value: object) -> object:
        return value

    def write(self, out: BinaryIO) -> None:
        try:
            out.write(self._format.pack(self.value))
        except struct.error as exc:
            raise ValueError(f"{self.value!r} does not fit {type(self).__name__}") from exc

    def read_fields(self, inp: BinaryIO) -> None:
        (self.value,) = self._format.unpack(_read_exact(inp, self._format.size))

    def get(self) -> object:
        return self.value

    def set(self, value: object) -> None:
        self.value = self._coerce(value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value  # type: ignore[attr-defined]

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value  # type: ignore[attr-defined,operator]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self) -> str:
        return str(self.value)


class BooleanValue(_ScalarValue):
    _format = struct.Struct(">?")
    _default = False

    @staticmethod
    def _coerce(value: object) -> object:
        return bool(value)


class IntValue(_ScalarValue):
    _format = struct.Struct(">i")

    @staticmethod
    def _coerce(value: object) -> object:
        return int(value)  # type: ignore[call-overload]


class LongValue(_ScalarValue):
    _format = struct.Struct(">q")

    @staticmethod
    def _coerce(value: object) -> object:
        return int(value)  # type: ignore[call-overload]


class FloatValue(_ScalarValue):
    _format = struct.Struct(">f")
    _default = 0.0

    @staticmethod
    def _coerce(value: object) -> object:
        return float(value)  # type: ignore[arg-type]


class DoubleValue(_ScalarValue):
    _format = struct.Struct(">d")
    _default = 0.0

    @staticmethod
    def _coerce(value: object) -> object:
        return float(value)  # type: ignore[arg-type]


_LENGTH = struct.Struct(">I")


class TextValue(_ScalarValue):
    """UTF-8 string prefixed by its byte length."""

    _default = ""

    @staticmethod
    def _coerce(value: object) -> object:
        return str(value)

    def write(self, out: BinaryIO) -> None:
        encoded = str(self.value).encode("utf-8")
        out.write(_LENGTH.pack(len(encoded)))
        out.write(encoded)

    def read_fields(self, inp: BinaryIO) -> None:
        (length,) = _LENGTH.unpack(_read_exact(inp, _LENGTH.size))
        self.value = _read_exact(inp, length).decode("utf-8")


@total_ordering
class IntArrayValue:
    """Ordered list of int32 values prefixed by the item count."""

    _item = struct.Struct(">i")

    def __init__(self, values: list[int] | None = None) -> None:
        self.values: list[int] = list(values or [])

    def write(self, out: BinaryIO) -> None:
        out.write(_LENGTH.pack(len(self.values)))
        for item in self.values:
            out.write(self._item.pack(item))

    def read_fields(self, inp: BinaryIO) -> None:
        (count,) = _LENGTH.unpack(_read_exact(inp, _LENGTH.size))
        raw = _read_exact(inp, count * self._item.size)
        self.values = [item for (item,) in self._item.iter_unpack(raw)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntArrayValue):
            return NotImplemented
        return self.values == other.values

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, IntArrayValue):
            return NotImplemented
        return self.values < other.values

    def __hash__(self) -> int:
        return hash(tuple(self.values))

    def __repr__(self) -> str:
        return f"IntArrayValue({self.values!r})"

    def __str__(self) -> str:
        return "[" + ", ".join(str(item) for item in self.values) + "]"


BUILTIN_TYPES: tuple[type, ...] = (
    NullValue,
    BooleanValue,
    IntValue,
    LongValue,
    FloatValue,
    DoubleValue,
    TextValue,
    IntArrayValue,
)
