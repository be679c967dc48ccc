"""JSON codec backed by pydantic's JSON serializer."""

from __future__ import annotations

from typing import Any

from redis_derive.codecs.base import type_adapter

name = "json"


def serialize(value: Any) -> bytes:
    return type_adapter(type(value)).dump_json(value)


def deserialize(data: bytes, into: Any) -> Any:
    return type_adapter(into).validate_json(data)
