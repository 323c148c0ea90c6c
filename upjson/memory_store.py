from __future__ import annotations

from pathlib import Path

from .errors import StorageError
from .interfaces import FileSystem


class InMemoryFileSystem(FileSystem):
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.fail_writes = False

    def exists(self, path: Path) -> bool:
        return str(path) in self.files

    def read_all(self, path: Path) -> bytes:
        try:
            return self.files[str(path)]
        except KeyError:
            raise StorageError(f"Could not read {path}: no such file") from None

    def write_all(self, path: Path, data: bytes) -> None:
        if self.fail_writes:
            raise StorageError(f"Could not write {path}: writes disabled")
        self.files[str(path)] = bytes(data)

    def extension_of(self, path: Path) -> str:
        return path.suffix
