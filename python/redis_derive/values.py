"""Redis response values.

A Redis reply takes one of a fixed set of shapes. Each shape is a small
frozen dataclass; `Value` is the union of all of them:

    Nil()                  - missing key / null reply
    Int(42)                - integer reply
    Data(b"...")           - bulk string (byte blob)
    Bulk([Int(1), Nil()])  - array reply of nested values
    Status("QUEUED")       - simple string reply
    Okay()                 - the "OK" simple string reply
    ErrorReply("ERR ...")  - error reply

Decode adapters only look at the variant: `Data` is handed to the codec,
everything else is a type mismatch.

Raw replies as returned by redis-py (None, int, bytes, str, list,
exception instances) are converted with `from_response()`, and
`decode_value(User, client.get(key))` converts and decodes in one step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Nil:
    """Null reply."""


@dataclass(frozen=True, slots=True)
class Int:
    value: int


@dataclass(frozen=True, slots=True)
class Data:
    """Bulk string reply."""

    data: bytes


@dataclass(frozen=True, slots=True)
class Bulk:
    """Array reply."""

    items: tuple[Value, ...]

    def __init__(self, items: Any = ()) -> None:
        object.__setattr__(self, "items", tuple(items))


@dataclass(frozen=True, slots=True)
class Status:
    value: str


@dataclass(frozen=True, slots=True)
class Okay:
    """The OK status reply."""


@dataclass(frozen=True, slots=True)
class ErrorReply:
    message: str


Value = Union[Nil, Int, Data, Bulk, Status, Okay, ErrorReply]

VALUE_TYPES: tuple[type, ...] = (Nil, Int, Data, Bulk, Status, Okay, ErrorReply)


def from_response(raw: Any) -> Value:
    """Convert a raw redis-py reply into a Value.

    Values that already are Value variants are returned unchanged.
    `str` replies are status replies unless they equal "OK"; bytes
    replies are always bulk strings (clients configured without
    decode_responses return bulk strings as bytes).
    """
    if isinstance(raw, VALUE_TYPES):
        return raw
    if raw is None:
        return Nil()
    # bool is an int subclass; redis-py turns some integer replies into bools
    if isinstance(raw, bool):
        return Int(int(raw))
    if isinstance(raw, int):
        return Int(raw)
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return Data(bytes(raw))
    if isinstance(raw, str):
        if raw == "OK":
            return Okay()
        return Status(raw)
    if isinstance(raw, BaseException):
        return ErrorReply(str(raw))
    if isinstance(raw, (list, tuple)):
        return Bulk(from_response(item) for item in raw)
    raise TypeError(f"Unsupported Redis reply type: {type(raw).__name__}")


def decode_value(into: Any, raw: Any) -> Any:
    """Decode a raw redis-py reply into `into` with its decode adapter.

    The client must return bulk strings as bytes. With redis-py's
    `decode_responses=True` they arrive as `str`, are taken for status
    replies and always fail to decode, whatever the codec.
    """
    decode = getattr(into, "from_redis_value", None)
    if decode is None:
        raise TypeError(
            f"{getattr(into, '__name__', into)!s} has no decode adapter; decorate it with @from_redis_value"
        )
    return decode(from_response(raw))


__all__ = [
    "Nil",
    "Int",
    "Data",
    "Bulk",
    "Status",
    "Okay",
    "ErrorReply",
    "Value",
    "VALUE_TYPES",
    "from_response",
    "decode_value",
]
