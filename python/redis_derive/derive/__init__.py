"""Adapter derivation for classes.

Decorators:
    from_redis_value: install `cls.from_redis_value(value)`
    to_redis_args:    install `instance.write_redis_args(out)`
    redis_model:      install both

Example:
    from pydantic import BaseModel
    from redis_derive import redis_model

    @redis_model
    class User(BaseModel):
        name: str
        age: int

        class Meta:
            redis_serializer = "json"

    client.set("user:1", *encode_args(User(name="Ada", age=36)))
    user = decode_value(User, client.get("user:1"))

Each decorated class records its adapters in `__redis_adapters__`, which
the code generator uses to find derived classes in a module.
"""

from __future__ import annotations

from typing import TypeVar

from redis_derive.core.descriptor import TypeDescriptor
from redis_derive.core.introspect import describe
from redis_derive.derive.adapter import GeneratedAdapter
from redis_derive.derive.bounds import compose_bounds
from redis_derive.derive.config import extract_codec
from redis_derive.derive.decode import DecodeAdapter, generate_decode
from redis_derive.derive.encode import EncodeAdapter, generate_encode
from redis_derive.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=type)

ADAPTERS_ATTRIBUTE = "__redis_adapters__"


def derive(descriptor: TypeDescriptor) -> tuple[DecodeAdapter, EncodeAdapter]:
    """Generate both adapters of a type from a single configuration pass."""
    codec = extract_codec(descriptor.attributes)
    decode = generate_decode(
        descriptor, codec, compose_bounds(descriptor, DecodeAdapter.capability)
    )
    encode = generate_encode(
        descriptor, codec, compose_bounds(descriptor, EncodeAdapter.capability)
    )
    return decode, encode


def _record(cls: type, adapter: GeneratedAdapter) -> None:
    existing = tuple(
        a for a in cls.__dict__.get(ADAPTERS_ATTRIBUTE, ()) if type(a) is not type(adapter)
    )
    setattr(cls, ADAPTERS_ATTRIBUTE, existing + (adapter,))


def _bind(cls: T, adapter: GeneratedAdapter) -> T:
    adapter.bind(cls)
    _record(cls, adapter)
    logger.debug(
        "bound adapter",
        type=adapter.descriptor.name,
        method=adapter.method_name,
        codec=adapter.codec.name,
    )
    return cls


def from_redis_value(cls: T) -> T:
    """Class decorator installing the decode adapter."""
    return _bind(cls, generate_decode(describe(cls)))


def to_redis_args(cls: T) -> T:
    """Class decorator installing the encode adapter."""
    return _bind(cls, generate_encode(describe(cls)))


def redis_model(cls: T) -> T:
    """Class decorator installing both adapters."""
    decode, encode = derive(describe(cls))
    _bind(cls, decode)
    return _bind(cls, encode)


def adapters_of(cls: type) -> tuple[GeneratedAdapter, ...]:
    """Return the adapters derived for a class."""
    return tuple(cls.__dict__.get(ADAPTERS_ATTRIBUTE, ()))


__all__ = [
    "ADAPTERS_ATTRIBUTE",
    "derive",
    "from_redis_value",
    "to_redis_args",
    "redis_model",
    "adapters_of",
    "DecodeAdapter",
    "EncodeAdapter",
    "GeneratedAdapter",
    "generate_decode",
    "generate_encode",
]
