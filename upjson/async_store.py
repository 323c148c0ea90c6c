from __future__ import annotations

import asyncio
from typing import Any

from .models import Entry, SearchOptions
from .store import _MISSING, Store


class AsyncStore:
    """
    Async wrapper around Store.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O; the
    per-path lock inside Store still lets only one operation touch the file at a time.
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @property
    def store(self) -> Store:
        return self._store

    async def init(self) -> bool:
        return await asyncio.to_thread(self._store.init)

    async def set(self, key: str, value: Any = _MISSING) -> str:
        return await asyncio.to_thread(self._store.set, key, value)

    async def get(self, key: str) -> Any:
        return await asyncio.to_thread(self._store.get, key)

    async def find(self, search_options: SearchOptions | dict[str, Any] | None = None) -> Entry | list[Entry]:
        return await asyncio.to_thread(self._store.find, search_options)

    async def push(self, key: str, value: Any = _MISSING) -> str:
        return await asyncio.to_thread(self._store.push, key, value)

    async def add(self, key: str, value: Any = 1) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.add, key, value)

    async def subtract(self, key: str, value: Any = 1) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.subtract, key, value)

    async def delete(self, key: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.delete, key)

    async def clear(self) -> bool:
        return await asyncio.to_thread(self._store.clear)

    async def keys(self) -> list[str]:
        return await asyncio.to_thread(self._store.keys)

    async def values(self) -> list[Any]:
        return await asyncio.to_thread(self._store.values)

    async def all(self) -> list[Entry]:
        return await asyncio.to_thread(self._store.all)

    async def has(self, key: str) -> bool:
        return await asyncio.to_thread(self._store.has, key)

    async def ensure(self, key: str, value: Any = _MISSING) -> bool | str:
        return await asyncio.to_thread(self._store.ensure, key, value)

    async def filter(self, key: str, search_options: SearchOptions | dict[str, Any] | None = None) -> dict[str, Any]:
        return await asyncio.to_thread(self._store.filter, key, search_options)

    async def count(self) -> int:
        return await asyncio.to_thread(self._store.count)
