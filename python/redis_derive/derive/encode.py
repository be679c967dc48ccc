"""Encode adapter generator: typed value -> Redis command argument.

The generated adapter becomes `instance.write_redis_args(out)`. It
serializes the instance with the configured codec and writes the buffer
through a single `out.write_arg()` call.

Writers have no failure channel, so a codec error is not reported as a
RedisDeriveError: it raises SerializationPanic and nothing is written.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from redis_derive.codecs import resolve_codec
from redis_derive.core.descriptor import (
    Capability,
    CodecReference,
    ConstraintClause,
    TypeDescriptor,
)
from redis_derive.derive.adapter import GeneratedAdapter
from redis_derive.derive.bounds import compose_bounds
from redis_derive.derive.config import extract_codec
from redis_derive.exceptions import SerializationPanic
from redis_derive.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class EncodeAdapter(GeneratedAdapter):
    capability = Capability.SERIALIZE
    method_name = "write_redis_args"

    def build(self) -> Callable[..., Any]:
        type_name = self.descriptor.name
        codec_name = self.codec.name
        module = self.descriptor.module

        def write_redis_args(instance: Any, out: Any) -> None:
            codec = resolve_codec(codec_name, module)
            try:
                buf = codec.serialize(instance)
            except Exception as e:
                raise SerializationPanic(
                    f"Failed to serialize {type_name} with {codec_name}: {e}"
                ) from e
            out.write_arg(buf)

        return write_redis_args

    def install(self, cls: type, func: Callable[..., Any]) -> None:
        setattr(cls, self.method_name, func)

    def render(self, ref: str | None = None) -> str:
        name = self.descriptor.name
        ref = ref or name
        codec = self.codec.name
        func = self.function_name
        return f'''\
def {func}(self: {ref}, out: _RedisWrite) -> None:
    """Write {name} as a single Redis argument with the {codec} codec."""
    codec = _resolve_codec("{codec}", {ref}.__module__)
    try:
        buf = codec.serialize(self)
    except Exception as e:
        raise _SerializationPanic(f"Failed to serialize {name} with {codec}: {{e}}") from e
    out.write_arg(buf)


{self._render_where()}
{ref}.{self.method_name} = {func}
'''


def generate_encode(
    descriptor: TypeDescriptor,
    codec: CodecReference | None = None,
    where: ConstraintClause | None = None,
) -> EncodeAdapter:
    """Generate the encode adapter of a type."""
    if codec is None:
        codec = extract_codec(descriptor.attributes)
    if where is None:
        where = compose_bounds(descriptor, EncodeAdapter.capability)
    logger.debug(
        "generated encode adapter",
        type=descriptor.name,
        codec=codec.name,
        where=where.render(),
    )
    return EncodeAdapter(descriptor, codec, where)


__all__ = ["EncodeAdapter", "generate_encode"]
