"""Exception hierarchy for redis-derive.

All recoverable errors inherit from RedisDeriveError, allowing catch-all handling:

    try:
        user = User.from_redis_value(value)
    except RedisDeriveError as e:
        print(f"redis-derive error: {e}")

Exception hierarchy:
    RedisDeriveError (base)
    ├── ConfigurationError  - Malformed redis_serializer attribute
    ├── SchemaError         - Invalid schema file
    ├── CodecNotFoundError  - Codec name cannot be resolved
    └── RedisDecodeError    - Response cannot be decoded into the type

    SerializationPanic      - Codec failed while encoding (fatal)

SerializationPanic derives from RuntimeError, not RedisDeriveError: the
argument-writer interface has no failure channel, so an encode failure is
not meant to be handled alongside ordinary decode errors.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Kind tag carried by RedisDecodeError."""

    TYPE_MISMATCH = "TypeMismatch"


class RedisDeriveError(Exception):
    """Base exception for all redis-derive errors."""


class ConfigurationError(RedisDeriveError):
    """Raised when the redis_serializer attribute payload is malformed."""

    def __init__(self, message: str, *, attribute: str | None = None) -> None:
        self.attribute = attribute
        if attribute is not None:
            message = f"{message} (in {attribute})"
        super().__init__(message)


class SchemaError(RedisDeriveError):
    """Raised when a schema file cannot be loaded or validated."""


class CodecNotFoundError(RedisDeriveError):
    """Raised when a codec name does not resolve to a codec module."""


class RedisDecodeError(RedisDeriveError):
    """Raised when a Redis response cannot be decoded into the target type.

    Carries a kind tag, a short description and a detail string, mirroring
    the (kind, description, detail) triple of Redis client errors.
    """

    def __init__(self, kind: ErrorKind, description: str, detail: str) -> None:
        self.kind = kind
        self.description = description
        self.detail = detail
        super().__init__(f"{description}: {detail}")


class SerializationPanic(RuntimeError):
    """Raised when a codec fails to serialize a value for a Redis command."""


__all__ = [
    "ErrorKind",
    "RedisDeriveError",
    "ConfigurationError",
    "SchemaError",
    "CodecNotFoundError",
    "RedisDecodeError",
    "SerializationPanic",
]
