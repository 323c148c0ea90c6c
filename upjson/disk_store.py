from __future__ import annotations

from pathlib import Path

from .errors import StorageError
from .interfaces import FileSystem
from .json_store import atomic_write_bytes


class DiskFileSystem(FileSystem):
    """
    Real files on the local disk.

    - Writes atomically (temp file + replace), fsync'd unless disabled.
    - OSError is reported as StorageError.
    """

    def __init__(self, *, fsync: bool = True) -> None:
        self._fsync = fsync

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_all(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e.strerror or e}") from e

    def write_all(self, path: Path, data: bytes) -> None:
        try:
            atomic_write_bytes(path, data, fsync=self._fsync)
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e.strerror or e}") from e

    def extension_of(self, path: Path) -> str:
        return path.suffix
