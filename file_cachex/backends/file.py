import asyncio
from collections.abc import Iterable
from collections.abc import Mapping
from logging import getLogger
from typing import Any

from file_cachex.cache import FileCache
from file_cachex.types import TTL

from .base import BaseCacheBackend

logger = getLogger(__name__)


class AsyncFileBackend(BaseCacheBackend):
    """Async file cache backend.

    Every call runs the synchronous :class:`FileCache` operation in a worker
    thread, so the event loop never blocks on filesystem I/O.
    """

    def __init__(self, cache: FileCache) -> None:
        self.cache = cache
        logger.info("Using file cache backend at <%s>", cache.config.cache_path)

    async def get(self, key: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self.cache.get, key, default)

    async def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        return await asyncio.to_thread(self.cache.set, key, value, ttl)

    async def delete(self, key: str) -> bool:
        return await asyncio.to_thread(self.cache.delete, key)

    async def clear(self) -> bool:
        return await asyncio.to_thread(self.cache.clear)

    async def has(self, key: str) -> bool:
        return await asyncio.to_thread(self.cache.has, key)

    async def get_multiple(
        self, keys: Iterable[str], default: Any = None
    ) -> dict[str, Any]:
        return await asyncio.to_thread(self.cache.get_multiple, keys, default)

    async def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        return await asyncio.to_thread(self.cache.set_multiple, values, ttl)

    async def delete_multiple(self, keys: Iterable[str]) -> bool:
        return await asyncio.to_thread(self.cache.delete_multiple, keys)
