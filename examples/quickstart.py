"""redis-derive Quickstart Example.

Demonstrates basic usage:
- Deriving adapters with decorators
- Choosing a codec per type
- Generic models
- Decode errors
- Rendering adapters as source

A dict-backed store stands in for a Redis client so the example runs
without a server. With redis-py the calls are the same:

    client.set("user:1", *encode_args(user))
    decode_value(User, client.get("user:1"))

Usage:
    python examples/quickstart.py
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from redis_derive import (
    RedisDecodeError,
    decode_value,
    describe,
    encode_args,
    redis_model,
)
from redis_derive.codegen import render_adapters

T = TypeVar("T")


# =============================================================================
# Model Definitions
# =============================================================================

@redis_model
class User(BaseModel):
    """Stored with the default msgpack codec."""

    name: str
    age: int


@redis_model
class Session(BaseModel):
    """Stored as JSON."""

    token: str
    user: str

    class Meta:
        redis_serializer = "json"


@redis_model
class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int


# =============================================================================
# Store (for demo purposes)
# =============================================================================

class DictStore:
    """Minimal SET/GET store returning redis-py style replies."""

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def set(self, key: str, value: bytes) -> str:
        self._data[key] = value
        return "OK"

    def get(self, key: str) -> Any:
        return self._data.get(key)


# =============================================================================
# Main Demo
# =============================================================================

def main() -> None:
    store = DictStore()

    print("=" * 60)
    print("redis-derive Quickstart")
    print("=" * 60)

    print("\n1. Writing values...")
    store.set("user:1", *encode_args(User(name="Ada Lovelace", age=36)))
    store.set("session:abc", *encode_args(Session(token="abc", user="user:1")))
    store.set("page:1", *encode_args(Page[int](items=[1, 2, 3], total=3)))
    print(f"   user:1      = {store.get('user:1')!r}")
    print(f"   session:abc = {store.get('session:abc')!r}")

    print("\n2. Reading values...")
    print(f"   {decode_value(User, store.get('user:1'))}")
    print(f"   {decode_value(Session, store.get('session:abc'))}")
    print(f"   {decode_value(Page[int], store.get('page:1'))}")

    print("\n3. Decode errors...")
    try:
        decode_value(User, store.get("missing"))
    except RedisDecodeError as e:
        print(f"   {e.kind.value}: {e.detail}")
    try:
        decode_value(Session, store.get("user:1"))
    except RedisDecodeError as e:
        print(f"   {e.kind.value}: {e.detail}")

    print("\n4. Generated source for Page...")
    print(render_adapters(describe(Page)))


if __name__ == "__main__":
    main()
