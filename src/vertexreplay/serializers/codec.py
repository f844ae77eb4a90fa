"""Typed value codec: bytes <-> value objects, driven by the value's own layout."""

from __future__ import annotations

import io

from ..exceptions import CodecError
from ..values import NullValue, Writable, qualified_name


def encode(value: object, *, field: str | None = None) -> bytes:
    """Serialize ``value`` with its own ``write`` method."""
    if not isinstance(value, Writable):
        raise CodecError(
            f"{qualified_name(type(value))} does not implement write/read_fields",
            field=field,
        )
    buffer = io.BytesIO()
    try:
        value.write(buffer)
    except CodecError:
        raise
    except Exception as exc:
        raise CodecError(f"Failed to encode {value!r}: {exc}", field=field) from exc
    return buffer.getvalue()


def decode(data: bytes, value_type: type, *, field: str | None = None) -> object | None:
    """Build an empty ``value_type`` and populate it from ``data``.

    The null sentinel always decodes to ``None``. Trailing bytes are an error.
    """
    if value_type is NullValue:
        return None
    try:
        value = value_type()
    except Exception as exc:
        raise CodecError(
            f"Cannot default-construct {qualified_name(value_type)}: {exc}", field=field
        ) from exc
    if not isinstance(value, Writable):
        raise CodecError(
            f"{qualified_name(value_type)} does not implement write/read_fields", field=field
        )
    buffer = io.BytesIO(data)
    try:
        value.read_fields(buffer)
    except CodecError:
        raise
    except Exception as exc:
        raise CodecError(
            f"Malformed bytes for {qualified_name(value_type)}: {exc}", field=field
        ) from exc
    remaining = len(data) - buffer.tell()
    if remaining:
        raise CodecError(
            f"{remaining} trailing bytes after {qualified_name(value_type)}", field=field
        )
    return value
