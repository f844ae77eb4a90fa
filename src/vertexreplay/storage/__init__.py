"""Storage backends and the trace store."""

from .base import FileSystem
from .file import LocalFileSystem
from .memory import MemoryFileSystem
from .trace_store import TraceStore

__all__ = ["FileSystem", "LocalFileSystem", "MemoryFileSystem", "TraceStore"]
