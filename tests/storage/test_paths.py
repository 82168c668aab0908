from pathlib import Path

import pytest

from file_cachex.storage.paths import resolve_path

BASE = Path("/var/cache/app")


@pytest.mark.parametrize(
    ("key", "directory_level", "expected"),
    [
        ("0123456789", 1, "01/0123456789.bin"),
        ("0123456789", 2, "01/23/0123456789.bin"),
        ("0123456789", 3, "01/23/45/0123456789.bin"),
        ("012", 2, "01/2/012.bin"),
        ("0", 1, "0/0.bin"),
        ("0", 3, "0/0.bin"),
        ("a", 0, "a.bin"),
        ("abcdef", 0, "abcdef.bin"),
    ],
)
def test_resolve_path(key: str, directory_level: int, expected: str) -> None:
    assert resolve_path(BASE, key, directory_level, ".bin") == BASE / expected


def test_resolve_path_uses_suffix() -> None:
    path = resolve_path(BASE, "a", 1, ".test")
    assert path == BASE / "a" / "a.test"
    assert str(path).endswith(".test")


def test_resolve_path_accepts_string_base() -> None:
    assert resolve_path("/tmp/c", "key", 1, "") == Path("/tmp/c/ke/key")


def test_resolve_path_is_deterministic() -> None:
    assert resolve_path(BASE, "abcd", 2, ".bin") == resolve_path(
        BASE, "abcd", 2, ".bin"
    )


def test_keys_sharing_prefix_share_directory() -> None:
    first = resolve_path(BASE, "abcd", 1, ".bin")
    second = resolve_path(BASE, "abxyz", 1, ".bin")

    assert first.parent == second.parent
    assert first != second
