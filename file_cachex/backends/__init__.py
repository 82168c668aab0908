"""Cache backend implementations for File-CacheX."""

from .base import BaseCacheBackend
from .file import AsyncFileBackend

__all__ = [
    "AsyncFileBackend",
    "BaseCacheBackend",
]
