"""Local (or mounted shared) filesystem backend."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO


class LocalFileSystem:
    """Stores files under a root directory. Suitable for NFS-style shared mounts."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        relative = path.strip("/")
        target = (self.root / relative) if relative else self.root
        root = self.root.resolve()
        resolved = target.resolve()
        if resolved != root and root not in resolved.parents:
            raise PermissionError(f"Path escapes the trace root {self.root}: {path!r}")
        return target

    def open_write(self, path: str) -> BinaryIO:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target.open("wb")

    def open_read(self, path: str) -> BinaryIO:
        return self._resolve(path).open("rb")

    def list_dir(self, path: str) -> list[str]:
        return sorted(entry.name for entry in self._resolve(path).iterdir())

    def is_dir(self, path: str) -> bool:
        return self._resolve(path).is_dir()

    def __repr__(self) -> str:
        return f"LocalFileSystem({str(self.root)!r})"
