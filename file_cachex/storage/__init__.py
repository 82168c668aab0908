"""Filesystem primitives backing the file cache."""

from .directories import ensure_directory
from .entries import EntryStore
from .gc import GarbageCollector
from .paths import resolve_path

__all__ = [
    "EntryStore",
    "GarbageCollector",
    "ensure_directory",
    "resolve_path",
]
