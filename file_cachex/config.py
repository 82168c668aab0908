"""File cache configuration settings."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .types import GC_PROBABILITY_SCALE


class FileCacheConfig(BaseModel):
    """File cache configuration settings.

    Instances are immutable; use :meth:`replace` to derive a changed copy.
    """

    model_config = ConfigDict(frozen=True)

    # Storage location
    cache_path: Path = Field(
        ...,
        description="Directory that holds the cache files",
    )
    file_suffix: str = Field(
        default=".bin",
        description="Suffix appended to every cache file name",
    )
    directory_level: int = Field(
        default=1,
        ge=0,
        description="Number of sub-directory levels used to shard cache files (usually no bigger than 3)",
    )

    # Permissions
    directory_mode: int = Field(
        default=0o775,
        ge=0,
        le=0o7777,
        description="Permission applied to newly created directories; no umask is applied",
    )
    file_mode: int | None = Field(
        default=None,
        ge=0,
        le=0o7777,
        description="Permission applied to written cache files (None = leave to the environment)",
    )

    # Garbage collection
    gc_probability: int = Field(
        default=10,
        ge=0,
        le=GC_PROBABILITY_SCALE,
        description="Probability in parts per million that a write triggers garbage collection (0 = never)",
    )

    def replace(self, **changes: Any) -> "FileCacheConfig":
        """Return a validated copy with ``changes`` applied."""
        return type(self)(**{**self.model_dump(), **changes})
