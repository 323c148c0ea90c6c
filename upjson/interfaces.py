from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """
    Byte-level persistence the store runs on. One path holds one whole document.
    """

    def exists(self, path: Path) -> bool:
        ...

    def read_all(self, path: Path) -> bytes:
        """Return the full content. Raises StorageError on failure."""
        ...

    def write_all(self, path: Path, data: bytes) -> None:
        """Replace the full content; returns once the bytes are durable. Raises StorageError."""
        ...

    def extension_of(self, path: Path) -> str:
        ...
