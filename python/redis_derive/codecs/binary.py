"""MessagePack codec, the default.

Values are dumped to JSON-compatible data by pydantic and packed with
msgpack; decoding validates the unpacked data against the target type.
"""

from __future__ import annotations

from typing import Any

import msgpack

from redis_derive.codecs.base import type_adapter

name = "msgpack"


def serialize(value: Any) -> bytes:
    data = type_adapter(type(value)).dump_python(value, mode="json")
    return msgpack.packb(data, use_bin_type=True)


def deserialize(data: bytes, into: Any) -> Any:
    return type_adapter(into).validate_python(msgpack.unpackb(data, raw=False))
