from __future__ import annotations

import asyncio
import json

import pytest

from upjson import AsyncStore, DiskFileSystem, NotFound, Store


def test_async_store_basic_flow(db_path):
    async def _run():
        db = AsyncStore(Store(db_path, file_system=DiskFileSystem(fsync=False)))

        assert await db.init() is True
        await db.set("fruits", ["apple"])
        await db.push("fruits", ["orange", "banana"])
        assert await db.get("fruits") == ["apple", "orange", "banana"]

        await db.set("n", 1)
        await db.add("n", 4)
        await db.subtract("n")
        assert await db.get("n") == 4

        await db.filter("fruits", {"function": lambda f: "an" in f, "findAll": True})
        assert await db.get("fruits") == ["orange", "banana"]

        first = await db.find({"function": lambda k: k == "n", "findAll": False})
        assert first.value == 4

        assert await db.keys() == ["fruits", "n"]
        assert await db.values() == [["orange", "banana"], 4]
        assert [e.key for e in await db.all()] == ["fruits", "n"]
        assert await db.count() == 2
        assert await db.has("n") is True

        assert await db.ensure("n", 0) is True
        assert json.loads(await db.ensure("m", 0))["m"] == 0

        await db.delete("m")
        with pytest.raises(NotFound):
            await db.get("m")

        assert await db.clear() is True

    asyncio.run(_run())


def test_async_concurrent_sets_all_persist(db_path):
    async def _run():
        db = AsyncStore(Store(db_path, file_system=DiskFileSystem(fsync=False)))
        await db.init()
        await asyncio.gather(*(db.set(f"k{i}", i) for i in range(10)))
        return await db.count()

    assert asyncio.run(_run()) == 10
