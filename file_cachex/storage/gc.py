"""Probabilistic removal of expired cache files."""

import os
import random
from collections.abc import Callable
from logging import getLogger
from pathlib import Path

from file_cachex.exceptions import PurgeError
from file_cachex.types import GC_PROBABILITY_SCALE
from file_cachex.types import Clock
from file_cachex.types import SystemClock

logger = getLogger(__name__)


class GarbageCollector:
    """Sweeps a cache directory tree for expired entries.

    Args:
        clock: Time source used to decide whether a file has expired
        rng: Random generator used to roll the collection probability
    """

    def __init__(
        self, clock: Clock | None = None, rng: random.Random | None = None
    ) -> None:
        self.clock = clock or SystemClock()
        self.rng = rng or random.SystemRandom()

    def maybe_collect(self, base: str | Path, probability: int) -> bool:
        """Run :meth:`collect` with ``probability`` parts per million.

        Returns:
            Whether a collection ran
        """
        if self.rng.randint(0, GC_PROBABILITY_SCALE) >= probability:
            return False
        self.collect(base)
        return True

    def collect(self, base: str | Path) -> None:
        """Remove every expired cache file under ``base``."""
        logger.info("Collecting expired cache files under %s", base)
        self.purge(base, expired_only=True)

    def purge(self, base: str | Path, *, expired_only: bool) -> None:
        """Remove cache files under ``base``.

        Children are handled before their directory. With ``expired_only``
        only files whose expiration has passed are removed and directories
        are kept; otherwise every file and sub-directory is removed. Entries
        whose name starts with a dot are never touched.

        Raises:
            PurgeError: If a file or directory could not be removed
        """
        self._sweep(Path(base), expired_only, self.clock.now())

    def _sweep(self, directory: Path, expired_only: bool, now: int) -> None:
        try:
            entries = list(os.scandir(directory))
        except (FileNotFoundError, NotADirectoryError):
            return
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return

        for entry in entries:
            if entry.name.startswith("."):
                continue

            if entry.is_dir(follow_symlinks=False):
                self._sweep(Path(entry.path), expired_only, now)
                if not expired_only:
                    _remove(os.rmdir, entry.path)
            elif not expired_only or _mtime(entry) < now:
                _remove(os.unlink, entry.path)


def _mtime(entry: os.DirEntry) -> float:
    try:
        return entry.stat(follow_symlinks=False).st_mtime
    except FileNotFoundError:
        # Already gone; the removal below is a no-op.
        return float("-inf")


def _remove(operation: Callable[[str], None], path: str) -> None:
    try:
        operation(path)
    except FileNotFoundError:
        logger.debug("%s was already removed", path)
    except OSError as e:
        raise PurgeError(path, e.strerror or str(e)) from e
