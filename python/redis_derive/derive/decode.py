"""Decode adapter generator: Redis response -> typed value.

The generated adapter becomes `cls.from_redis_value(value)`:

    Data(bytes)   -> codec.deserialize(bytes, cls), or a TYPE_MISMATCH
                     RedisDecodeError naming the type and the codec
    anything else -> TYPE_MISMATCH RedisDecodeError naming the type

The codec name only appears in the first message. Both messages embed the
repr of the response.
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
from redis_derive.derive.adapter import (
    INCOMPATIBLE_TYPE,
    GeneratedAdapter,
    codec_failure_detail,
    shape_failure_detail,
)
from redis_derive.derive.bounds import compose_bounds
from redis_derive.derive.config import extract_codec
from redis_derive.exceptions import ErrorKind, RedisDecodeError
from redis_derive.log import get_logger
from redis_derive.values import Data

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class DecodeAdapter(GeneratedAdapter):
    capability = Capability.DESERIALIZE_OWNED
    method_name = "from_redis_value"

    def build(self) -> Callable[..., Any]:
        type_name = self.descriptor.name
        codec_name = self.codec.name
        module = self.descriptor.module

        def from_redis_value(cls: type, value: Any) -> Any:
            if isinstance(value, Data):
                codec = resolve_codec(codec_name, module)
                try:
                    return codec.deserialize(value.data, cls)
                except Exception as e:
                    raise RedisDecodeError(
                        ErrorKind.TYPE_MISMATCH,
                        INCOMPATIBLE_TYPE,
                        codec_failure_detail(type_name, codec_name, value),
                    ) from e
            raise RedisDecodeError(
                ErrorKind.TYPE_MISMATCH,
                INCOMPATIBLE_TYPE,
                shape_failure_detail(type_name, value),
            )

        return from_redis_value

    def install(self, cls: type, func: Callable[..., Any]) -> None:
        setattr(cls, self.method_name, classmethod(func))

    def render(self, ref: str | None = None) -> str:
        name = self.descriptor.name
        ref = ref or name
        codec = self.codec.name
        func = self.function_name
        return f'''\
def {func}(cls: type[{ref}], value: _Value) -> {ref}:
    """Decode {name} from a Redis response with the {codec} codec."""
    if isinstance(value, _Data):
        codec = _resolve_codec("{codec}", {ref}.__module__)
        try:
            return codec.deserialize(value.data, cls)
        except Exception as e:
            raise _RedisDecodeError(
                _ErrorKind.TYPE_MISMATCH,
                "{INCOMPATIBLE_TYPE}",
                f"Response type not deserializable to {name} with {codec}. (response was {{value!r}})",
            ) from e
    raise _RedisDecodeError(
        _ErrorKind.TYPE_MISMATCH,
        "{INCOMPATIBLE_TYPE}",
        f"Response type was not deserializable to {name}. (response was {{value!r}})",
    )


{self._render_where()}
{ref}.{self.method_name} = classmethod({func})
'''


def generate_decode(
    descriptor: TypeDescriptor,
    codec: CodecReference | None = None,
    where: ConstraintClause | None = None,
) -> DecodeAdapter:
    """Generate the decode adapter of a type.

    The codec and constraint clause are computed from the descriptor when
    not supplied.
    """
    if codec is None:
        codec = extract_codec(descriptor.attributes)
    if where is None:
        where = compose_bounds(descriptor, DecodeAdapter.capability)
    logger.debug(
        "generated decode adapter",
        type=descriptor.name,
        codec=codec.name,
        where=where.render(),
    )
    return DecodeAdapter(descriptor, codec, where)


__all__ = ["DecodeAdapter", "generate_decode"]
