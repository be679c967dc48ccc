"""Codec registry and resolution.

Codec names map to codec modules. Built-in codecs:

    msgpack   - pydantic + MessagePack (default)
    json      - pydantic JSON

Resolution order for resolve_codec(name, module):
    1. the registry (built-ins and register_codec())
    2. an attribute named `name` in the type's defining module
    3. importlib.import_module(name)

Functions:
    register_codec(name, codec, overwrite=False)
    unregister_codec(name)
    registered_codecs() -> dict[str, Any]
    reset_codecs(): restore the built-ins only (used in tests)
    resolve_codec(name, module=None) -> codec
"""

from __future__ import annotations

import importlib
import sys
from typing import Any

from redis_derive.codecs import binary, text
from redis_derive.codecs.base import Codec, type_adapter
from redis_derive.exceptions import CodecNotFoundError
from redis_derive.log import get_logger

logger = get_logger(__name__)

_BUILTIN_CODECS: dict[str, Any] = {
    binary.name: binary,
    text.name: text,
}

_CODECS: dict[str, Any] = dict(_BUILTIN_CODECS)


def register_codec(name: str, codec: Any, *, overwrite: bool = False) -> None:
    """Register a codec under a name usable in redis_serializer(...)."""
    if not name.isidentifier():
        raise ValueError(f"Codec name must be an identifier, got {name!r}")
    existing = _CODECS.get(name)
    if existing is codec:
        return
    if existing is not None and not overwrite:
        raise ValueError(f"Codec '{name}' is already registered")
    _CODECS[name] = codec


def unregister_codec(name: str) -> None:
    """Remove a codec from the registry if present."""
    _CODECS.pop(name, None)


def registered_codecs() -> dict[str, Any]:
    """Return a copy of the codec mapping."""
    return dict(_CODECS)


def reset_codecs() -> None:
    """Drop every registered codec except the built-ins."""
    _CODECS.clear()
    _CODECS.update(_BUILTIN_CODECS)


def resolve_codec(name: str, module: str | None = None) -> Any:
    """Resolve a codec name to the codec it refers to."""
    codec = _CODECS.get(name)
    if codec is not None:
        return codec

    if module is not None:
        owner = sys.modules.get(module)
        if owner is not None and hasattr(owner, name):
            logger.debug("codec resolved from module", codec=name, module=module)
            return getattr(owner, name)

    try:
        codec = importlib.import_module(name)
    except ImportError as e:
        raise CodecNotFoundError(
            f"Codec '{name}' is not registered"
            + (f", not defined in {module}" if module else "")
            + " and cannot be imported"
        ) from e
    logger.debug("codec resolved by import", codec=name)
    return codec


__all__ = [
    "Codec",
    "type_adapter",
    "register_codec",
    "unregister_codec",
    "registered_codecs",
    "reset_codecs",
    "resolve_codec",
]
