from abc import ABC
from abc import abstractmethod
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from file_cachex.types import TTL


class BaseCacheBackend(ABC):
    """Base class for all async cache backends."""

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a cached value."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store a value in the cache."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a value from the cache."""

    @abstractmethod
    async def clear(self) -> bool:
        """Clear all cached values."""

    @abstractmethod
    async def has(self, key: str) -> bool:
        """Check whether an unexpired value is cached."""

    @abstractmethod
    async def get_multiple(
        self, keys: Iterable[str], default: Any = None
    ) -> dict[str, Any]:
        """Retrieve several cached values."""

    @abstractmethod
    async def set_multiple(self, values: Mapping[str, Any], ttl: TTL = None) -> bool:
        """Store several values in the cache."""

    @abstractmethod
    async def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Remove several values from the cache."""
