from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from upjson import DiskFileSystem, InMemoryFileSystem, Store  # noqa: E402


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "db.json"


@pytest.fixture
def store(db_path: Path) -> Store:
    """
    Initialized disk-backed store in a temp directory. fsync is off to keep tests fast.
    """
    s = Store(db_path, file_system=DiskFileSystem(fsync=False))
    s.init()
    return s


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    return InMemoryFileSystem()


@pytest.fixture
def memory_store(memory_fs: InMemoryFileSystem, tmp_path: Path) -> Store:
    s = Store(tmp_path / "mem.json", file_system=memory_fs)
    s.init()
    return s


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """
    Strip UPJSON_* variables so settings tests see defaults.
    """
    for name in ("UPJSON_PATH", "UPJSON_INDENT", "UPJSON_FSYNC", "UPJSON_DEBUG_LOG_OPERATIONS"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
