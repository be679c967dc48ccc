"""Tests for the codec registry and the built-in codecs."""

from __future__ import annotations

import sys
import types
from datetime import datetime

import pytest
from pydantic import BaseModel, ValidationError

from redis_derive.codecs import (
    Codec,
    register_codec,
    registered_codecs,
    reset_codecs,
    resolve_codec,
    unregister_codec,
)
from redis_derive.codecs import binary, text
from redis_derive.exceptions import CodecNotFoundError


class Event(BaseModel):
    name: str
    at: datetime
    tags: list[str] = []


EVENT = Event(name="deploy", at=datetime(2024, 5, 1, 12, 30), tags=["prod"])


class TestRegistry:
    def test_builtins(self):
        codecs = registered_codecs()
        assert codecs["msgpack"] is binary
        assert codecs["json"] is text

    def test_register_and_resolve(self, recording_codec):
        assert resolve_codec("recording") is recording_codec

    def test_register_twice_requires_overwrite(self, recording_codec):
        with pytest.raises(ValueError, match="already registered"):
            register_codec("recording", object())

        replacement = object()
        register_codec("recording", replacement, overwrite=True)
        assert resolve_codec("recording") is replacement

    def test_register_same_codec_is_noop(self, recording_codec):
        register_codec("recording", recording_codec)
        assert resolve_codec("recording") is recording_codec

    def test_register_rejects_non_identifier(self):
        with pytest.raises(ValueError, match="identifier"):
            register_codec("my.codec", object())

    def test_unregister(self, recording_codec):
        unregister_codec("recording")
        unregister_codec("recording")
        assert "recording" not in registered_codecs()

    def test_reset_restores_builtins(self):
        unregister_codec("json")
        register_codec("extra", object())

        reset_codecs()

        assert set(registered_codecs()) == {"msgpack", "json"}

    def test_registered_codecs_is_a_copy(self):
        registered_codecs()["bogus"] = object()
        assert "bogus" not in registered_codecs()


class TestResolve:
    def test_resolves_from_defining_module(self, monkeypatch):
        owner = types.ModuleType("owner_models")
        owner.local_codec = binary
        monkeypatch.setitem(sys.modules, "owner_models", owner)

        assert resolve_codec("local_codec", "owner_models") is binary

    def test_registry_takes_precedence(self, monkeypatch):
        owner = types.ModuleType("owner_models")
        owner.json = object()
        monkeypatch.setitem(sys.modules, "owner_models", owner)

        assert resolve_codec("json", "owner_models") is text

    def test_resolves_by_import(self, monkeypatch):
        module = types.ModuleType("importable_codec")
        monkeypatch.setitem(sys.modules, "importable_codec", module)

        assert resolve_codec("importable_codec") is module

    def test_not_found(self):
        with pytest.raises(CodecNotFoundError, match="no_such_codec_module"):
            resolve_codec("no_such_codec_module", "also_missing")


class TestBuiltinCodecs:
    @pytest.mark.parametrize("codec", [binary, text], ids=["msgpack", "json"])
    def test_round_trip(self, codec):
        assert codec.deserialize(codec.serialize(EVENT), Event) == EVENT

    @pytest.mark.parametrize("codec", [binary, text], ids=["msgpack", "json"])
    def test_satisfies_protocol(self, codec):
        assert isinstance(codec, Codec)

    def test_msgpack_rejects_invalid_data(self):
        with pytest.raises(ValidationError):
            binary.deserialize(binary.serialize({"name": "x"}), Event)

    def test_json_output(self):
        assert text.serialize({"a": 1}) == b'{"a":1}'

    def test_builtin_values(self):
        assert binary.deserialize(binary.serialize([1, 2]), list[int]) == [1, 2]
