from __future__ import annotations

from .async_store import AsyncStore
from .disk_store import DiskFileSystem
from .errors import (
    IllegalOperation,
    InvalidFormat,
    InvalidKey,
    InvalidValue,
    NotFound,
    NotInitialized,
    StorageError,
    UPJSONError,
    ValidationError,
)
from .factory import open_async_store, open_store
from .interfaces import FileSystem
from .memory_store import InMemoryFileSystem
from .models import Entry, SearchOptions
from .settings import Settings, get_settings
from .store import MARKER_KEY, Store

__all__ = [
    "Store",
    "AsyncStore",
    "open_store",
    "open_async_store",
    "FileSystem",
    "DiskFileSystem",
    "InMemoryFileSystem",
    "SearchOptions",
    "Entry",
    "Settings",
    "get_settings",
    "MARKER_KEY",
    "UPJSONError",
    "InvalidFormat",
    "InvalidKey",
    "InvalidValue",
    "NotInitialized",
    "NotFound",
    "IllegalOperation",
    "ValidationError",
    "StorageError",
]
