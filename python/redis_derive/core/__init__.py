"""Type descriptors and class introspection."""

from .descriptor import (
    DEFAULT_CODEC,
    SERIALIZER_ATTRIBUTE,
    Attribute,
    Bound,
    Capability,
    CodecReference,
    ConstraintClause,
    GenericParam,
    ParamKind,
    TypeDescriptor,
)
from .introspect import describe

__all__ = [
    "DEFAULT_CODEC",
    "SERIALIZER_ATTRIBUTE",
    "Attribute",
    "Bound",
    "Capability",
    "CodecReference",
    "ConstraintClause",
    "GenericParam",
    "ParamKind",
    "TypeDescriptor",
    "describe",
]
