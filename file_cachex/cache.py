"""File cache storing every value in its own file.

Each entry lives at ``{cache_path}/{shard...}/{key}{suffix}``. The file
content is the encoded value and the file modification time is the instant
the entry expires. Expired files are removed by a garbage collection that
runs with a small probability on every write.
"""

import math
import random
from collections.abc import Iterable
from collections.abc import Mapping
from datetime import timedelta
from logging import getLogger
from pathlib import Path
from typing import Any

from .codecs import Codec
from .codecs import PickleCodec
from .config import FileCacheConfig
from .exceptions import InvalidArgumentError
from .exceptions import InvalidKeyError
from .exceptions import SerializationError
from .storage import EntryStore
from .storage import GarbageCollector
from .storage import ensure_directory
from .storage import resolve_path
from .types import EXPIRATION_EXPIRED
from .types import RESERVED_KEY_CHARACTERS
from .types import TTL
from .types import TTL_INFINITY
from .types import Clock
from .types import SystemClock

logger = getLogger(__name__)


class FileCache:
    """Cache backed by one file per key.

    Instances are immutable; the ``with_*`` methods return a reconfigured
    copy. No I/O happens until the first operation, and the cache directory
    is only created by a write.

    Args:
        cache_path: Directory that holds the cache files
        codec: Converts values to bytes and back (defaults to pickle)
        clock: Source of the current time (defaults to the system clock)
        rng: Random generator rolling the garbage collection probability
        **options: Remaining :class:`FileCacheConfig` fields
    """

    def __init__(
        self,
        cache_path: str | Path,
        *,
        codec: Codec | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        **options: Any,
    ) -> None:
        self._init(FileCacheConfig(cache_path=cache_path, **options), codec, clock, rng)

    @classmethod
    def from_config(
        cls,
        config: FileCacheConfig,
        *,
        codec: Codec | None = None,
        clock: Clock | None = None,
        rng: random.Random | None = None,
    ) -> "FileCache":
        """Create a cache from a prebuilt configuration."""
        cache = cls.__new__(cls)
        cache._init(config, codec, clock, rng)
        return cache

    def _init(
        self,
        config: FileCacheConfig,
        codec: Codec | None,
        clock: Clock | None,
        rng: random.Random | None,
    ) -> None:
        self._config = config
        self.codec = codec or PickleCodec()
        self.clock = clock or SystemClock()
        self._rng = rng
        self._store = EntryStore(self.clock)
        self._gc = GarbageCollector(self.clock, rng)

    @property
    def config(self) -> FileCacheConfig:
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for ``key``, or ``default`` on a miss."""
        self._validate_key(key)
        payload = self._store.read(self.get_cache_file(key))
        if payload is None:
            return default

        try:
            return self.codec.decode(payload)
        except SerializationError as e:
            logger.warning("Discarding unreadable cache entry %r: %s", key, e)
            return default

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store ``value`` under ``key``.

        A TTL of zero or less deletes the entry instead. Without a TTL the
        entry is kept for one year.

        Returns:
            Whether the entry was written (or deleted, for a non-positive TTL)

        Raises:
            InvalidKeyError: If the key is invalid
            CacheError: If a cache directory could not be provisioned or a
                triggered garbage collection failed
        """
        self._validate_key(key)
        expiration = self.ttl_to_expiration(ttl)
        self._gc.maybe_collect(self._config.cache_path, self._config.gc_probability)

        if expiration == EXPIRATION_EXPIRED:
            return self._delete(key)

        payload = self.codec.encode(value)
        file = self.get_cache_file(key)
        ensure_directory(file.parent, self._config.directory_mode)
        return self._store.write(file, payload, expiration, self._config.file_mode)

    def delete(self, key: str) -> bool:
        """Remove ``key``; removing a missing key succeeds."""
        self._validate_key(key)
        return self._delete(key)

    def clear(self) -> bool:
        """Remove every entry and sub-directory of the cache directory."""
        self._gc.purge(self._config.cache_path, expired_only=False)
        return True

    def has(self, key: str) -> bool:
        """Return whether ``key`` holds an unexpired entry."""
        self._validate_key(key)
        return self._store.exists_fresh(self.get_cache_file(key))

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return a mapping of every key to its cached value or ``default``."""
        keys = self._to_list(keys)
        self._validate_keys(keys)
        return {key: self.get(key, default) for key in keys}

    def set_multiple(
        self, values: Mapping[str, Any] | Iterable[tuple[str, Any]], ttl: TTL = None
    ) -> bool:
        """Store every key/value pair; failures of single entries are ignored."""
        values = self._to_dict(values)
        self._validate_keys(values)
        self.normalize_ttl(ttl)

        for key, value in values.items():
            self.set(key, value, ttl)

        return True

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Remove every key; failures of single entries are ignored."""
        keys = self._to_list(keys)
        self._validate_keys(keys)

        for key in keys:
            self._delete(key)

        return True

    def get_cache_file(self, key: str) -> Path:
        """Return the path of the file storing ``key``."""
        return resolve_path(
            self._config.cache_path,
            key,
            self._config.directory_level,
            self._config.file_suffix,
        )

    def with_file_suffix(self, file_suffix: str) -> "FileCache":
        return self._with(file_suffix=file_suffix)

    def with_file_mode(self, file_mode: int | None) -> "FileCache":
        return self._with(file_mode=file_mode)

    def with_directory_mode(self, directory_mode: int) -> "FileCache":
        return self._with(directory_mode=directory_mode)

    def with_directory_level(self, directory_level: int) -> "FileCache":
        return self._with(directory_level=directory_level)

    def with_gc_probability(self, gc_probability: int) -> "FileCache":
        return self._with(gc_probability=gc_probability)

    def ttl_to_expiration(self, ttl: TTL) -> int:
        """Convert ``ttl`` to an absolute UNIX timestamp.

        Returns:
            The expiration timestamp, or ``EXPIRATION_EXPIRED`` if the TTL is
            zero or negative
        """
        seconds = self.normalize_ttl(ttl)

        if seconds is None:
            return self.clock.now() + TTL_INFINITY

        if seconds <= 0:
            return EXPIRATION_EXPIRED

        return self.clock.now() + seconds

    @staticmethod
    def normalize_ttl(ttl: TTL) -> int | None:
        """Convert ``ttl`` to whole seconds, None meaning no expiration.

        Raises:
            InvalidArgumentError: If the TTL is not a timedelta, an int, a
                finite float or a string holding an int
        """
        if ttl is None:
            return None

        if isinstance(ttl, timedelta):
            return int(ttl.total_seconds())

        if isinstance(ttl, str):
            try:
                return int(ttl.strip())
            except ValueError:
                msg = f"Invalid TTL value: {ttl!r}"
                raise InvalidArgumentError(msg) from None

        if isinstance(ttl, int) and not isinstance(ttl, bool):
            return ttl

        if isinstance(ttl, float):
            if not math.isfinite(ttl):
                msg = f"Invalid TTL value: {ttl!r}"
                raise InvalidArgumentError(msg)
            return int(ttl)

        msg = f"Invalid TTL type: {type(ttl).__name__}"
        raise InvalidArgumentError(msg)

    def _delete(self, key: str) -> bool:
        return self._store.delete(self.get_cache_file(key))

    def _with(self, **changes: Any) -> "FileCache":
        return self.from_config(
            self._config.replace(**changes),
            codec=self.codec,
            clock=self.clock,
            rng=self._rng,
        )

    @staticmethod
    def _validate_key(key: Any) -> None:
        if (
            not isinstance(key, str)
            or key == ""
            or not RESERVED_KEY_CHARACTERS.isdisjoint(key)
        ):
            msg = f"Invalid key value: {key!r}"
            raise InvalidKeyError(msg)

    def _validate_keys(self, keys: Iterable[Any]) -> None:
        for key in keys:
            self._validate_key(key)

    @staticmethod
    def _to_list(keys: Any) -> list[Any]:
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
            msg = f"Iterable of keys is expected, got {type(keys).__name__}"
            raise InvalidArgumentError(msg)
        return list(keys)

    @staticmethod
    def _to_dict(values: Any) -> dict[Any, Any]:
        if isinstance(values, Mapping):
            return dict(values.items())
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            msg = f"Mapping of values is expected, got {type(values).__name__}"
            raise InvalidArgumentError(msg)
        try:
            return dict(values)
        except (TypeError, ValueError) as e:
            msg = f"Iterable of (key, value) pairs is expected: {e}"
            raise InvalidArgumentError(msg) from e
