class CacheXError(Exception):
    """Base class for all exceptions in File-CacheX."""


class CacheError(CacheXError):
    """Exception raised for structural cache failures."""


class DirectoryConflictError(CacheError):
    """A path that must be a cache directory exists as a regular file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'Cache path "{path}" exists and is not a directory.')


class DirectoryCreateError(CacheError):
    """A cache directory could not be created."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'Failed to create cache directory "{path}": {reason}')


class PurgeError(CacheError):
    """Garbage collection could not remove a file or directory."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to remove '{path}': {reason}")


class InvalidArgumentError(CacheXError, ValueError):
    """Exception raised for invalid arguments passed to the cache."""


class InvalidKeyError(InvalidArgumentError):
    """Exception raised for an empty, non-string or reserved-character key."""


class SerializationError(CacheXError):
    """Exception raised when a codec fails to encode or decode a value."""
