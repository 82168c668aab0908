"""File-CacheX: A filesystem-backed key-value cache with TTL expiration."""

from .backends import AsyncFileBackend as AsyncFileBackend
from .backends import BaseCacheBackend as BaseCacheBackend
from .cache import FileCache as FileCache
from .codecs import OrjsonCodec as OrjsonCodec
from .codecs import PickleCodec as PickleCodec
from .config import FileCacheConfig as FileCacheConfig

__all__ = [
    "AsyncFileBackend",
    "BaseCacheBackend",
    "FileCache",
    "FileCacheConfig",
    "OrjsonCodec",
    "PickleCodec",
]
