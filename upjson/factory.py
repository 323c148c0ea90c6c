from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from .async_store import AsyncStore
from .disk_store import DiskFileSystem
from .settings import get_settings
from .store import Store

logger = logging.getLogger(__name__)


def open_store(path: str | Path | None = None, *, env_file: str | None = "local.env") -> Store:
    """
    Build a disk-backed Store from environment settings.

    An explicit path wins over UPJSON_PATH. The returned store still needs init().
    """
    if env_file:
        load_dotenv(env_file)
    settings = get_settings()
    store = Store(
        path if path is not None else settings.path,
        file_system=DiskFileSystem(fsync=settings.fsync),
        indent=settings.indent,
        debug_log_operations=settings.debug_log_operations,
    )
    logger.debug("UPJSON OPEN: %s (fsync=%s, indent=%s)", store.path, settings.fsync, settings.indent)
    return store


def open_async_store(path: str | Path | None = None, *, env_file: str | None = "local.env") -> AsyncStore:
    return AsyncStore(open_store(path, env_file=env_file))
