"""redis-derive: Redis encode/decode adapters for Python types.

Decorate a class to read it from and write it to Redis through a codec:

    from pydantic import BaseModel
    from redis_derive import decode_value, encode_args, redis_model

    @redis_model
    class User(BaseModel):
        name: str
        age: int

    client.set("user:1", *encode_args(User(name="Ada", age=36)))
    user = decode_value(User, client.get("user:1"))

The codec defaults to msgpack and is chosen per type:

    class User(BaseModel):
        ...

        class Meta:
            redis_serializer = "json"

The same adapters can be rendered as Python source with redis_derive.codegen
or the `redis-derive` command line tool.
"""

import logging

from .codecs import register_codec, resolve_codec, unregister_codec
from .core import (
    DEFAULT_CODEC,
    Attribute,
    Bound,
    Capability,
    CodecReference,
    ConstraintClause,
    GenericParam,
    ParamKind,
    TypeDescriptor,
    describe,
)
from .derive import (
    DecodeAdapter,
    EncodeAdapter,
    derive,
    from_redis_value,
    generate_decode,
    generate_encode,
    redis_model,
    to_redis_args,
)
from .exceptions import (
    CodecNotFoundError,
    ConfigurationError,
    ErrorKind,
    RedisDecodeError,
    RedisDeriveError,
    SchemaError,
    SerializationPanic,
)
from .values import (
    Bulk,
    Data,
    ErrorReply,
    Int,
    Nil,
    Okay,
    Status,
    Value,
    decode_value,
    from_response,
)
from .writers import ArgsBuffer, RedisWrite, encode_args

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "register_codec",
    "resolve_codec",
    "unregister_codec",
    "DEFAULT_CODEC",
    "Attribute",
    "Bound",
    "Capability",
    "CodecReference",
    "ConstraintClause",
    "GenericParam",
    "ParamKind",
    "TypeDescriptor",
    "describe",
    "DecodeAdapter",
    "EncodeAdapter",
    "derive",
    "from_redis_value",
    "generate_decode",
    "generate_encode",
    "redis_model",
    "to_redis_args",
    "CodecNotFoundError",
    "ConfigurationError",
    "ErrorKind",
    "RedisDecodeError",
    "RedisDeriveError",
    "SchemaError",
    "SerializationPanic",
    "Bulk",
    "Data",
    "ErrorReply",
    "Int",
    "Nil",
    "Okay",
    "Status",
    "Value",
    "decode_value",
    "from_response",
    "ArgsBuffer",
    "RedisWrite",
    "encode_args",
]
