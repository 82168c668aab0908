"""Pluggable value codecs turning cached values into bytes and back."""

import pickle
from typing import Any
from typing import Protocol

import orjson

from .exceptions import SerializationError


class Codec(Protocol):
    """Converts cached values to the bytes stored on disk."""

    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes) -> Any: ...


class PickleCodec:
    """Codec for arbitrary picklable Python objects.

    Every decode builds a fresh object, so values read from the cache never
    share state with the caller's original or with each other.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def encode(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            msg = f"Failed to pickle value of type {type(value).__name__}: {e}"
            raise SerializationError(msg) from e

    def decode(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)  # noqa: S301
        except Exception as e:
            msg = f"Failed to unpickle cached payload: {e}"
            raise SerializationError(msg) from e


class OrjsonCodec:
    """Codec for JSON-compatible values using orjson."""

    def __init__(self, option: int | None = None) -> None:
        self.option = option

    def encode(self, value: Any) -> bytes:
        try:
            return orjson.dumps(value, option=self.option)
        except TypeError as e:
            msg = f"Failed to serialize value to JSON: {e}"
            raise SerializationError(msg) from e

    def decode(self, data: bytes) -> Any:
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            msg = f"Failed to deserialize JSON payload: {e}"
            raise SerializationError(msg) from e
