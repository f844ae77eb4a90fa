"""Public exception types for vertexreplay."""

from __future__ import annotations


class VertexReplayError(Exception):
    """Base class for all vertexreplay exceptions."""


class CodecError(VertexReplayError):
    """Raised when a value cannot be encoded or decoded against its type.

    ``field`` names the scenario field that failed, when known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        if field is not None:
            message = f"{field}: {message}"
        super().__init__(message)


class UnresolvedTypeError(VertexReplayError):
    """Raised when a persisted type name is not known to the type registry."""

    def __init__(self, name: str, *, field: str | None = None) -> None:
        self.name = name
        self.field = field
        where = f" (field {field})" if field is not None else ""
        super().__init__(f"Cannot resolve type {name!r}{where}")


class TypeConstraintError(VertexReplayError):
    """Raised when a resolved type lacks the capability its slot requires."""


class TraceLoadError(VertexReplayError):
    """Raised when a trace record cannot be parsed."""


class TraceNotFoundError(VertexReplayError):
    """Raised when no trace exists at the requested address."""


class JobNotFoundError(VertexReplayError):
    """Raised when the trace directory of a job does not exist."""
