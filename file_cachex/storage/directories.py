"""Race-tolerant creation of cache directories."""

import os
from logging import getLogger
from pathlib import Path

from file_cachex.exceptions import DirectoryConflictError
from file_cachex.exceptions import DirectoryCreateError

logger = getLogger(__name__)


def ensure_directory(path: str | Path, mode: int) -> None:
    """Make sure ``path`` exists as a directory.

    Missing directories are created top-down, one level at a time, and each
    one gets ``mode`` applied explicitly since ``os.mkdir`` honours the umask.
    A directory created concurrently by another process counts as success.

    Raises:
        DirectoryConflictError: If ``path`` or one of its parents is a file
        DirectoryCreateError: If the OS refuses to create a directory
    """
    path = Path(path)
    if path.is_dir():
        return

    missing: list[Path] = []
    current = path
    while not current.is_dir():
        if current.exists():
            raise DirectoryConflictError(str(current))
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent

    for directory in reversed(missing):
        _create(directory, mode)


def _create(directory: Path, mode: int) -> None:
    try:
        os.mkdir(directory, mode)
    except FileExistsError:
        if directory.is_dir():
            logger.debug("Directory %s was created concurrently", directory)
            return
        raise DirectoryConflictError(str(directory)) from None
    except OSError as e:
        raise DirectoryCreateError(str(directory), e.strerror or str(e)) from e

    try:
        os.chmod(directory, mode)
    except OSError as e:
        logger.debug("Could not set mode %o on %s: %s", mode, directory, e)
