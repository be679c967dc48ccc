"""Tests for the encode adapter (typed value -> Redis argument)."""

from __future__ import annotations

from typing import Generic, TypeVar

import msgpack
import pytest
from pydantic import BaseModel

from redis_derive import (
    ArgsBuffer,
    Data,
    RedisDeriveError,
    SerializationPanic,
    encode_args,
    redis_model,
    to_redis_args,
)
from redis_derive.codecs import binary, text

T = TypeVar("T")


@redis_model
class Item(BaseModel):
    sku: str
    quantity: int


@to_redis_args
class JsonItem(BaseModel):
    sku: str

    class Meta:
        redis_serializer = "json"


@to_redis_args
class Recorded(BaseModel):
    value: int

    class Meta:
        redis_serializer = "recording"


@to_redis_args
class Broken(BaseModel):
    value: int

    class Meta:
        redis_serializer = "failing"


@redis_model
class Box(BaseModel, Generic[T]):
    content: T


class CountingWriter:
    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def write_arg(self, arg: bytes) -> None:
        self.writes.append(arg)


class TestEncode:
    def test_writes_exactly_one_argument(self):
        item = Item(sku="A-1", quantity=3)
        out = CountingWriter()

        result = item.write_redis_args(out)

        assert result is None
        assert out.writes == [binary.serialize(item)]

    def test_default_codec_is_msgpack(self):
        item = Item(sku="A-1", quantity=3)
        (arg,) = encode_args(item)
        assert msgpack.unpackb(arg) == {"sku": "A-1", "quantity": 3}

    def test_configured_codec(self):
        item = JsonItem(sku="B-2")
        assert encode_args(item) == [text.serialize(item)]
        assert encode_args(item) == [b'{"sku":"B-2"}']

    def test_named_codec_is_invoked(self, recording_codec):
        value = Recorded(value=5)

        args = encode_args(value)

        assert recording_codec.calls == [("serialize", value)]
        assert args == [b"recorded:0"]

    def test_generic_instance(self):
        box = Box[int](content=9)
        assert encode_args(box) == [binary.serialize(box)]

    def test_round_trip(self):
        item = Item(sku="C-3", quantity=1)
        (arg,) = encode_args(item)
        assert Item.from_redis_value(Data(arg)) == item

    def test_args_buffer(self):
        out = ArgsBuffer()
        Item(sku="D", quantity=0).write_redis_args(out)
        Item(sku="E", quantity=1).write_redis_args(out)
        assert len(out) == 2
        assert list(out) == out.args


class TestEncodeFailure:
    def test_codec_failure_is_fatal(self, failing_codec):
        out = CountingWriter()

        with pytest.raises(SerializationPanic) as exc_info:
            Broken(value=1).write_redis_args(out)

        assert out.writes == []
        assert "Broken" in str(exc_info.value)
        assert "failing" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_panic_is_not_a_recoverable_error(self, failing_codec):
        with pytest.raises(SerializationPanic) as exc_info:
            encode_args(Broken(value=1))

        assert not isinstance(exc_info.value, RedisDeriveError)

    def test_encode_args_requires_adapter(self):
        with pytest.raises(TypeError, match="no encode adapter"):
            encode_args(object())
