"""Tests for building descriptors from classes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

import pytest
from pydantic import BaseModel

from redis_derive import (
    Attribute,
    Bound,
    ConfigurationError,
    GenericParam,
    ParamKind,
    describe,
    from_redis_value,
    redis_model,
    to_redis_args,
)
from redis_derive.derive import adapters_of

K = TypeVar("K")
V = TypeVar("V")


class Plain(BaseModel):
    value: int


class Mapping(BaseModel, Generic[K, V]):
    pairs: list[tuple[K, V]]


@dataclass
class Box(Generic[K]):
    content: K


class Configured(BaseModel):
    value: int

    class Meta:
        redis_serializer = "json"
        redis_where = ("Configured: Hashable",)


class TestDescribe:
    def test_plain_class(self):
        descriptor = describe(Plain)

        assert descriptor.name == "Plain"
        assert descriptor.params == ()
        assert not descriptor.where
        assert descriptor.attributes == ()
        assert descriptor.module == __name__
        assert descriptor.instantiated == "Plain"

    def test_pydantic_generic_parameters(self):
        descriptor = describe(Mapping)

        assert descriptor.params == (GenericParam("K"), GenericParam("V"))
        assert all(p.kind is ParamKind.TYPE for p in descriptor.params)
        assert descriptor.instantiated == "Mapping[K, V]"

    def test_parametrized_pydantic_model_describes_origin(self):
        descriptor = describe(Mapping[int, str])

        assert descriptor.name == "Mapping"
        assert descriptor.instantiated == "Mapping[K, V]"

    def test_typing_generic_parameters(self):
        assert describe(Box).params == (GenericParam("K"),)

    def test_meta_configuration(self):
        descriptor = describe(Configured)

        assert descriptor.attributes == (
            Attribute(("redis_serializer",), "(json)", location=f"{__name__}.Configured.Meta"),
        )
        assert descriptor.where.bounds == (Bound("Configured", "Hashable"),)

    def test_invalid_where(self):
        class BadWhere(BaseModel):
            class Meta:
                redis_where = ("no capability",)

        with pytest.raises(ConfigurationError, match="redis_where"):
            describe(BadWhere)


class TestDecorators:
    def test_redis_model_records_both_adapters(self):
        @redis_model
        class Both(BaseModel):
            value: int

        kinds = [type(a).__name__ for a in adapters_of(Both)]
        assert kinds == ["DecodeAdapter", "EncodeAdapter"]

    def test_decorators_stack(self):
        @to_redis_args
        @from_redis_value
        class Stacked(BaseModel):
            value: int

        adapters = adapters_of(Stacked)
        assert [a.method_name for a in adapters] == ["from_redis_value", "write_redis_args"]

    def test_where_clause_of_generic_model(self):
        @redis_model
        class Envelope(BaseModel, Generic[K]):
            body: K

        decode, encode = adapters_of(Envelope)
        assert decode.where.as_strings() == ("Envelope[K]: DeserializeOwned",)
        assert encode.where.as_strings() == ("Envelope[K]: Serialize",)
        assert Envelope.from_redis_value.__func__.__where__ == decode.where.as_strings()
        assert Envelope.write_redis_args.__where__ == encode.where.as_strings()

    def test_non_generic_model_has_empty_where(self):
        @redis_model
        class Flat(BaseModel):
            value: int

        assert Flat.write_redis_args.__where__ == ()

    @pytest.mark.parametrize("codec", ["", "a b", "a.b", "1"])
    def test_malformed_meta_fails_at_decoration(self, codec):
        with pytest.raises(ConfigurationError):

            @redis_model
            class Bad(BaseModel):
                value: int

                class Meta:
                    redis_serializer = codec

    def test_non_string_meta_fails_at_decoration(self):
        import json

        with pytest.raises(ConfigurationError):

            @from_redis_value
            class Bad(BaseModel):
                value: int

                class Meta:
                    redis_serializer = json

    def test_adapters_are_not_inherited(self):
        @redis_model
        class Parent(BaseModel):
            value: int

        class Child(Parent):
            pass

        assert adapters_of(Child) == ()
        assert len(adapters_of(Parent)) == 2
