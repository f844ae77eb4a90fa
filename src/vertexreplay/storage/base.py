"""Filesystem abstraction the trace store runs on."""

from __future__ import annotations

from typing import BinaryIO, Protocol


class FileSystem(Protocol):
    """Byte-addressable store with directory listing.

    Paths are ``/``-separated and relative to the filesystem's root.
    Handles returned by ``open_*`` are context managers.
    """

    def open_write(self, path: str) -> BinaryIO: ...
    def open_read(self, path: str) -> BinaryIO: ...
    def list_dir(self, path: str) -> list[str]: ...
    def is_dir(self, path: str) -> bool: ...
