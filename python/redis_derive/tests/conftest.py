from __future__ import annotations

import logging
from typing import Any

import pytest

from redis_derive.codecs import register_codec, reset_codecs
from redis_derive.log import ROOT_LOGGER


class RecordingCodec:
    """Codec that records every call and stores values as repr-tagged bytes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.values: dict[bytes, Any] = {}

    def serialize(self, value: Any) -> bytes:
        self.calls.append(("serialize", value))
        data = f"recorded:{len(self.values)}".encode()
        self.values[data] = value
        return data

    def deserialize(self, data: bytes, into: Any) -> Any:
        self.calls.append(("deserialize", data))
        if data not in self.values:
            raise ValueError(f"unknown payload {data!r}")
        return self.values[data]


class FailingCodec:
    def serialize(self, value: Any) -> bytes:
        raise TypeError(f"cannot serialize {type(value).__name__}")

    def deserialize(self, data: bytes, into: Any) -> Any:
        raise ValueError("cannot deserialize")


@pytest.fixture(autouse=True)
def clean_codecs():
    """Restore the built-in codec registry around each test."""
    reset_codecs()
    yield
    reset_codecs()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers and levels installed by CLI runs."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def recording_codec() -> RecordingCodec:
    codec = RecordingCodec()
    register_codec("recording", codec)
    return codec


@pytest.fixture
def failing_codec() -> FailingCodec:
    codec = FailingCodec()
    register_codec("failing", codec)
    return codec
