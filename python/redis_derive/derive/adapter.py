"""Base class shared by the decode and encode adapters.

A generated adapter closes over the descriptor of the subject type, the
codec it delegates to and the constraint clause it requires. It can be
rendered as Python source (render) or turned into a function and
installed on a live class (bind). Both forms share the same behavior and
error messages.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from redis_derive.core.descriptor import (
    Capability,
    CodecReference,
    ConstraintClause,
    TypeDescriptor,
)

INCOMPATIBLE_TYPE = "Response was of incompatible type"

# (module, name, alias) of every runtime name rendered adapters refer to.
# Aliases are private so that subject types never shadow them.
RUNTIME_IMPORTS = (
    ("redis_derive.codecs", "resolve_codec", "_resolve_codec"),
    ("redis_derive.exceptions", "ErrorKind", "_ErrorKind"),
    ("redis_derive.exceptions", "RedisDecodeError", "_RedisDecodeError"),
    ("redis_derive.exceptions", "SerializationPanic", "_SerializationPanic"),
    ("redis_derive.values", "Data", "_Data"),
    ("redis_derive.values", "Value", "_Value"),
    ("redis_derive.writers", "RedisWrite", "_RedisWrite"),
)

RUNTIME_ALIASES = frozenset(alias for _, _, alias in RUNTIME_IMPORTS)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def codec_failure_detail(type_name: str, codec_name: str, value: Any) -> str:
    return f"Response type not deserializable to {type_name} with {codec_name}. (response was {value!r})"


def shape_failure_detail(type_name: str, value: Any) -> str:
    return f"Response type was not deserializable to {type_name}. (response was {value!r})"


@dataclass(frozen=True, slots=True)
class GeneratedAdapter:
    descriptor: TypeDescriptor
    codec: CodecReference
    where: ConstraintClause

    capability: ClassVar[Capability]
    method_name: ClassVar[str]

    @property
    def function_name(self) -> str:
        return f"{snake_case(self.descriptor.name)}_{self.method_name}"

    def render(self, ref: str | None = None) -> str:
        """Render the adapter as Python source.

        `ref` is the expression the source uses for the subject type; it
        defaults to the type name and differs when the type is imported
        under an alias.
        """
        raise NotImplementedError

    def build(self) -> Callable[..., Any]:
        """Build the adapter as a plain function."""
        raise NotImplementedError

    def install(self, cls: type, func: Callable[..., Any]) -> None:
        raise NotImplementedError

    def bind(self, cls: type) -> type:
        """Build the adapter and install it on `cls`."""
        func = self.build()
        func.__name__ = self.function_name
        func.__qualname__ = self.function_name
        func.__where__ = self.where.as_strings()  # type: ignore[attr-defined]
        self.install(cls, func)
        return cls

    def _render_where(self) -> str:
        return f"{self.function_name}.__where__ = {self.where.as_strings()!r}"


__all__ = [
    "INCOMPATIBLE_TYPE",
    "RUNTIME_ALIASES",
    "RUNTIME_IMPORTS",
    "GeneratedAdapter",
    "codec_failure_detail",
    "shape_failure_detail",
    "snake_case",
]
