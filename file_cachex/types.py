"""Type definitions and type aliases for File-CacheX."""

import time
from datetime import timedelta
from typing import Protocol
from typing import Union

# Characters a key must never contain
RESERVED_KEY_CHARACTERS = frozenset("{}()/\\@:")

# "No expiration" is stored as one year ahead so the mtime stays representable
TTL_INFINITY = 31536000

# Sentinel expiration returned for a TTL of zero or less
EXPIRATION_EXPIRED = -1

GC_PROBABILITY_SCALE = 1_000_000

TTL = Union[timedelta, int, float, str, None]


class Clock(Protocol):
    """Source of the current UNIX time in whole seconds."""

    def now(self) -> int: ...


class SystemClock:
    """Clock backed by the system wall clock."""

    def now(self) -> int:
        return int(time.time())
