import time
from pathlib import Path

import pytest

from file_cachex.cache import FileCache


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: int | None = None) -> None:
        self.time = int(time.time()) if now is None else now

    def now(self) -> int:
        return self.time

    def advance(self, seconds: int = 1) -> None:
        self.time += seconds


class FixedRandom:
    """Random stub whose rolls always return ``value``."""

    def __init__(self, value: int) -> None:
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def file_cache(cache_dir: Path, clock: FrozenClock) -> FileCache:
    return FileCache(cache_dir, clock=clock)


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    return FixedRandom
