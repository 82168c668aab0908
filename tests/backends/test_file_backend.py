import asyncio
from pathlib import Path

import pytest

from file_cachex.backends import AsyncFileBackend
from file_cachex.backends import BaseCacheBackend
from file_cachex.cache import FileCache
from file_cachex.exceptions import InvalidKeyError


@pytest.fixture
def file_backend(file_cache: FileCache) -> AsyncFileBackend:
    return AsyncFileBackend(file_cache)


def test_file_backend_is_cache_backend(file_backend: AsyncFileBackend) -> None:
    assert isinstance(file_backend, BaseCacheBackend)


@pytest.mark.asyncio
async def test_file_backend_set_get(file_backend: AsyncFileBackend):
    value = {"response": b"test_value", "media_type": "application/json"}

    assert await file_backend.set("test_key", value, 60)

    assert await file_backend.get("test_key") == value
    assert await file_backend.has("test_key")


@pytest.mark.asyncio
async def test_file_backend_get_nonexistent_key(file_backend: AsyncFileBackend):
    assert await file_backend.get("nonexistent_key") is None
    assert await file_backend.get("nonexistent_key", "default") == "default"


@pytest.mark.asyncio
async def test_file_backend_delete(file_backend: AsyncFileBackend):
    await file_backend.set("test_key", "test_value")

    assert await file_backend.delete("test_key")

    assert await file_backend.get("test_key") is None


@pytest.mark.asyncio
async def test_file_backend_clear(file_backend: AsyncFileBackend):
    await file_backend.set("test_key1", "test_value1")
    await file_backend.set("test_key2", "test_value2")

    assert await file_backend.clear()

    assert await file_backend.get("test_key1") is None
    assert await file_backend.get("test_key2") is None


@pytest.mark.asyncio
async def test_file_backend_ttl_expiry(file_backend: AsyncFileBackend, clock):
    await file_backend.set("test_key", "test_value", ttl=1)

    clock.advance(2)

    assert await file_backend.get("test_key") is None


@pytest.mark.asyncio
async def test_file_backend_multiple(file_backend: AsyncFileBackend):
    values = {"key1": 1, "key2": [2]}

    assert await file_backend.set_multiple(values)
    assert await file_backend.get_multiple(["key1", "key2", "key3"]) == {
        "key1": 1,
        "key2": [2],
        "key3": None,
    }

    assert await file_backend.delete_multiple(["key1", "key2"])
    assert await file_backend.get_multiple(["key1", "key2"]) == {
        "key1": None,
        "key2": None,
    }


@pytest.mark.asyncio
async def test_file_backend_invalid_key(file_backend: AsyncFileBackend):
    with pytest.raises(InvalidKeyError):
        await file_backend.get("invalid:key")

    with pytest.raises(InvalidKeyError):
        await file_backend.set_multiple({"valid": 1, "in/valid": 2})

    assert not await file_backend.has("valid")


@pytest.mark.asyncio
async def test_file_backend_concurrent_tasks(tmp_path: Path):
    backend = AsyncFileBackend(FileCache(tmp_path / "cache", directory_level=2))

    async def worker(i: int) -> bool:
        ok = True
        for _ in range(10):
            ok = await backend.set("k", i) and ok
            ok = await backend.delete("k") and ok
        return ok

    results = await asyncio.gather(*(worker(i) for i in range(100)))

    assert all(results)
