from __future__ import annotations

import contextlib
import threading
from pathlib import Path
from typing import Iterator


class WriterLocks:
    """
    One re-entrant writer lock per store file, shared by every Store in the process.

    A store operation holds its file's lock for the whole read -> mutate -> write
    cycle. Re-entrant so composite operations (ensure -> has/set) nest.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._by_file: dict[Path, threading.RLock] = {}

    def __len__(self) -> int:
        return len(self._by_file)

    @staticmethod
    def _normalize(path: Path) -> Path:
        return Path(path).expanduser().resolve()

    def lock_for(self, path: Path) -> threading.RLock:
        file = self._normalize(path)
        with self._guard:
            return self._by_file.setdefault(file, threading.RLock())

    @contextlib.contextmanager
    def writer(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield


WRITER_LOCKS = WriterLocks()
