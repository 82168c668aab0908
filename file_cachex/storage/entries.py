"""Reading, writing and deleting individual cache entry files.

An entry is a single file: its content is the encoded value and its
modification time is the instant the entry expires. Cross-process
coordination relies on advisory ``flock`` locks scoped to the entry file,
shared for reads and exclusive for writes. Failures caused by another
process removing the file first are treated as benign.
"""

import os
from collections.abc import Callable
from logging import getLogger
from pathlib import Path
from typing import Any

from file_cachex.types import Clock
from file_cachex.types import SystemClock

if os.name == "posix":
    import fcntl
else:  # pragma: no cover
    fcntl = None

logger = getLogger(__name__)


def _lock(fd: int, *, exclusive: bool) -> None:
    if fcntl is not None:
        fcntl.flock(fd, fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)


def _unlock(fd: int) -> None:
    if fcntl is not None:
        fcntl.flock(fd, fcntl.LOCK_UN)


class EntryStore:
    """File-level operations on cache entries."""

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or SystemClock()

    def exists_fresh(self, path: str | Path, now: int | None = None) -> bool:
        """Return whether ``path`` is a file whose expiration lies after ``now``."""
        if now is None:
            now = self.clock.now()
        try:
            return Path(path).is_file() and os.stat(path).st_mtime > now
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.debug("Could not stat cache file %s: %s", path, e)
            return False

    def read(self, path: str | Path, now: int | None = None) -> bytes | None:
        """Return the payload stored at ``path``, or None if missing or expired.

        Expired files are left in place for garbage collection.
        """
        if not self.exists_fresh(path, now):
            return None

        try:
            with open(path, "rb") as f:
                _lock(f.fileno(), exclusive=False)
                try:
                    return f.read()
                finally:
                    _unlock(f.fileno())
        except FileNotFoundError:
            logger.debug("Cache file %s vanished before it could be read", path)
            return None
        except OSError as e:
            logger.warning("Failed to read cache file %s: %s", path, e)
            return None

    def write(
        self,
        path: str | Path,
        payload: bytes,
        expires_at: int,
        file_mode: int | None = None,
    ) -> bool:
        """Store ``payload`` at ``path`` and mark it to expire at ``expires_at``.

        Returns:
            False if any step failed for a reason other than the file having
            been removed concurrently
        """
        self._renew_foreign_file(path)

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT, 0o666)
            with os.fdopen(fd, "wb") as f:
                _lock(f.fileno(), exclusive=True)
                try:
                    f.truncate(0)
                    f.write(payload)
                    f.flush()
                finally:
                    _unlock(f.fileno())
        except OSError as e:
            logger.warning("Failed to write cache file %s: %s", path, e)
            return False

        if file_mode is not None and not self._apply(os.chmod, path, file_mode):
            return False

        return self._apply(os.utime, path, (expires_at, expires_at))

    def delete(self, path: str | Path) -> bool:
        """Remove the entry at ``path``; a missing entry counts as deleted."""
        if not os.path.exists(path):
            return True

        try:
            os.unlink(path)
        except FileNotFoundError:
            logger.debug("Cache file %s was deleted concurrently", path)
        except OSError as e:
            logger.warning("Failed to delete cache file %s: %s", path, e)
            return False
        return True

    def _renew_foreign_file(self, path: str | Path) -> None:
        # Changing mode or mtime of a file owned by another user fails, so
        # such a file is removed and written from scratch.
        if not hasattr(os, "geteuid"):
            return
        try:
            if os.stat(path).st_uid == os.geteuid():
                return
            os.unlink(path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.debug("Could not remove foreign-owned cache file %s: %s", path, e)
            return
        logger.debug("Removed cache file %s owned by another user", path)

    @staticmethod
    def _apply(
        operation: Callable[..., None], path: str | Path, argument: Any
    ) -> bool:
        try:
            operation(path, argument)
        except FileNotFoundError:
            logger.debug(
                "Cache file %s vanished before %s", path, operation.__name__
            )
        except OSError as e:
            logger.warning(
                "%s failed on cache file %s: %s", operation.__name__, path, e
            )
            return False
        return True
