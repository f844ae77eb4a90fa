"""In-memory filesystem backend."""

from __future__ import annotations

import io
from typing import BinaryIO


class _PendingFile(io.BytesIO):
    """Buffer that publishes its contents to the owning filesystem on close."""

    def __init__(self, files: dict[str, bytes], path: str) -> None:
        super().__init__()
        self._files = files
        self._path = path

    def close(self) -> None:
        if not self.closed:
            self._files[self._path] = self.getvalue()
        super().close()


class MemoryFileSystem:
    """In-memory filesystem. Good for tests and short-lived scripts."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def open_write(self, path: str) -> BinaryIO:
        return _PendingFile(self._files, path.strip("/"))

    def open_read(self, path: str) -> BinaryIO:
        key = path.strip("/")
        if key not in self._files:
            raise FileNotFoundError(path)
        return io.BytesIO(self._files[key])

    def list_dir(self, path: str) -> list[str]:
        prefix = path.strip("/")
        if prefix and not self.is_dir(prefix):
            raise FileNotFoundError(path)
        prefix = f"{prefix}/" if prefix else ""
        names = {
            key[len(prefix) :].split("/", 1)[0] for key in self._files if key.startswith(prefix)
        }
        return sorted(names)

    def is_dir(self, path: str) -> bool:
        prefix = path.strip("/")
        if not prefix:
            return True
        return any(key.startswith(f"{prefix}/") for key in self._files)
