"""Mapping of cache keys to file paths."""

from pathlib import Path


def resolve_path(
    base: str | Path, key: str, directory_level: int, suffix: str
) -> Path:
    """Return the file path for ``key`` under ``base``.

    With ``directory_level`` of 1 or more, level ``i`` adds a directory named
    after the two characters of the key at offset ``2 * i``. Keys too short to
    fill a level simply stop adding directories, so ``"012"`` at level 2 maps
    to ``01/2/012<suffix>``.
    """
    path = Path(base)

    for i in range(directory_level):
        prefix = key[i * 2 : i * 2 + 2]
        if prefix:
            path /= prefix

    return path / f"{key}{suffix}"
