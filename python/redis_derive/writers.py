"""Argument sinks for encode adapters.

An encode adapter writes each serialized value through `write_arg()`.
Anything with that method works as a sink; ArgsBuffer is the stock one
and collects the arguments in a list, ready to be splatted into a
redis-py command:

    client.set("user:1", *encode_args(user))
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RedisWrite(Protocol):
    """Sink accepting a single argument write."""

    def write_arg(self, arg: bytes) -> None: ...


class ArgsBuffer:
    """Collects written arguments in order."""

    def __init__(self) -> None:
        self.args: list[bytes] = []

    def write_arg(self, arg: bytes) -> None:
        self.args.append(bytes(arg))

    def __len__(self) -> int:
        return len(self.args)

    def __iter__(self):
        return iter(self.args)


def encode_args(value: Any) -> list[bytes]:
    """Return the Redis command arguments produced by an encodable value."""
    write = getattr(value, "write_redis_args", None)
    if write is None:
        raise TypeError(
            f"{type(value).__name__} has no encode adapter; decorate it with @to_redis_args"
        )
    out = ArgsBuffer()
    write(out)
    return out.args


__all__ = ["RedisWrite", "ArgsBuffer", "encode_args"]
