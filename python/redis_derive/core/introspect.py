"""Class introspection: build a TypeDescriptor from a live Python class.

Type parameters are read, in order of preference, from:
    - PEP 695 `__type_params__` (class Page[T]: ...)
    - pydantic generic metadata (class Page(BaseModel, Generic[T]))
    - typing `__parameters__` (class Page(Generic[T]))

Configuration is read from the class's `Meta`:

    class User(BaseModel):
        name: str

        class Meta:
            redis_serializer = "json"
            redis_where = ("User: Hashable",)

`redis_serializer` becomes the attribute redis_serializer(json). Values
that are not strings are passed through unparenthesized so that the
configuration extractor rejects them.
"""

from __future__ import annotations

from typing import Any

from redis_derive.core.descriptor import (
    SERIALIZER_ATTRIBUTE,
    Attribute,
    Bound,
    ConstraintClause,
    GenericParam,
    ParamKind,
    TypeDescriptor,
)
from redis_derive.exceptions import ConfigurationError


def _origin_class(cls: type) -> type:
    """Return the unparametrized class for pydantic generic models."""
    metadata = getattr(cls, "__pydantic_generic_metadata__", None)
    if metadata and metadata.get("origin") is not None:
        return metadata["origin"]
    return cls


def _type_parameters(cls: type) -> tuple[Any, ...]:
    params = cls.__dict__.get("__type_params__") or ()
    if params:
        return tuple(params)
    metadata = getattr(cls, "__pydantic_generic_metadata__", None)
    if metadata and metadata.get("parameters"):
        return tuple(metadata["parameters"])
    return tuple(getattr(cls, "__parameters__", ()))


def _meta_location(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}.Meta"


def _serializer_attribute(cls: type, meta: Any) -> Attribute | None:
    if not hasattr(meta, SERIALIZER_ATTRIBUTE):
        return None
    value = getattr(meta, SERIALIZER_ATTRIBUTE)
    tokens = f"({value})" if isinstance(value, str) else repr(value)
    return Attribute((SERIALIZER_ATTRIBUTE,), tokens, location=_meta_location(cls))


def _where_clause(cls: type, meta: Any) -> ConstraintClause:
    raw = getattr(meta, "redis_where", None)
    if not raw:
        return ConstraintClause()
    if isinstance(raw, str):
        raw = (raw,)
    try:
        return ConstraintClause(tuple(Bound.parse(item) for item in raw))
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigurationError(
            f"Invalid redis_where: {e}", attribute=_meta_location(cls)
        ) from e


def describe(cls: type) -> TypeDescriptor:
    """Build the TypeDescriptor of a class."""
    origin = _origin_class(cls)
    params = tuple(
        GenericParam(p.__name__, ParamKind.TYPE) for p in _type_parameters(origin)
    )
    meta = getattr(origin, "Meta", None)
    attributes: tuple[Attribute, ...] = ()
    where = ConstraintClause()
    if meta is not None:
        attribute = _serializer_attribute(origin, meta)
        if attribute is not None:
            attributes = (attribute,)
        where = _where_clause(origin, meta)
    return TypeDescriptor(
        name=origin.__name__,
        params=params,
        where=where,
        attributes=attributes,
        module=origin.__module__,
    )


__all__ = ["describe"]
