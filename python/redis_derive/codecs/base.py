"""Codec contract shared by the built-in codecs.

A codec is anything exposing two free callables:

    serialize(value) -> bytes
    deserialize(data, into) -> value

`into` is the class the adapter decodes into; codecs that don't need it
may ignore it. Modules qualify as codecs as well as objects, so a user
module with these two functions can be named in redis_serializer(...).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter


@runtime_checkable
class Codec(Protocol):
    def serialize(self, value: Any) -> bytes: ...

    def deserialize(self, data: bytes, into: Any) -> Any: ...


@lru_cache(maxsize=256)
def type_adapter(tp: Any) -> TypeAdapter[Any]:
    """Return a cached pydantic TypeAdapter for a type."""
    return TypeAdapter(tp)


__all__ = ["Codec", "type_adapter"]
