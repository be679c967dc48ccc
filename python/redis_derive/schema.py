"""Schema files describing types for source generation.

A schema file is JSON:

    {
      "module": "app.models",
      "types": [
        {
          "name": "Page",
          "params": ["T", "'a", {"name": "N", "kind": "const"}],
          "where": ["T: Hashable"],
          "attributes": ["redis_serializer(json)"]
        }
      ]
    }

Params:
    "T"                          type parameter
    "'a"                         lifetime parameter
    {"name": ..., "kind": ...}   explicit kind (type, lifetime, const)

Attributes are either "path(payload)" strings, where the path is made of
dot-separated identifiers, or {"path": ..., "tokens": ...} objects.
A type's "module" overrides the file-level one.
"""

from __future__ import annotations

import keyword
import re
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from redis_derive.core.descriptor import (
    Attribute,
    Bound,
    ConstraintClause,
    GenericParam,
    ParamKind,
    TypeDescriptor,
)
from redis_derive.exceptions import SchemaError

_ATTRIBUTE_PATH = re.compile(r"\s*([A-Za-z_]\w*(?:\s*\.\s*[A-Za-z_]\w*)*)")


def split_attribute(text: str) -> tuple[str, str]:
    """Split "path(payload)" into its path and payload text."""
    match = _ATTRIBUTE_PATH.match(text)
    if match is None:
        raise ValueError(f"invalid attribute {text!r}: expected a path")
    return match.group(1), text[match.end() :].strip()


def _is_identifier(text: str) -> bool:
    return text.isidentifier() and not keyword.iskeyword(text)


def _validate_module(value: str | None) -> str | None:
    if value is not None and not all(_is_identifier(part) for part in value.split(".")):
        raise ValueError(f"module must be a dotted path of identifiers, got {value!r}")
    return value


class ParamSchema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    kind: ParamKind = ParamKind.TYPE

    @model_validator(mode="after")
    def _check_name(self) -> ParamSchema:
        name = self.name
        if self.kind is ParamKind.LIFETIME:
            if not name.startswith("'"):
                raise ValueError(f"lifetime parameter must start with ', got {name!r}")
            name = name[1:]
        if not _is_identifier(name):
            raise ValueError(f"parameter name must be an identifier, got {self.name!r}")
        return self


class AttributeSchema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str
    tokens: str = ""


class TypeSchema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    module: str | None = None
    params: list[ParamSchema] = Field(default_factory=list)
    where: list[str] = Field(default_factory=list)
    attributes: list[AttributeSchema] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _is_identifier(value):
            raise ValueError(f"type name must be an identifier, got {value!r}")
        return value

    @field_validator("module")
    @classmethod
    def _check_module(cls, value: str | None) -> str | None:
        return _validate_module(value)

    @field_validator("params", mode="before")
    @classmethod
    def _expand_params(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        params = []
        for item in value:
            if isinstance(item, str):
                kind = ParamKind.LIFETIME if item.startswith("'") else ParamKind.TYPE
                params.append({"name": item, "kind": kind})
            else:
                params.append(item)
        return params

    @field_validator("where")
    @classmethod
    def _check_where(cls, value: list[str]) -> list[str]:
        for item in value:
            Bound.parse(item)
        return value

    @field_validator("attributes", mode="before")
    @classmethod
    def _expand_attributes(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        attributes = []
        for item in value:
            if isinstance(item, str):
                path, tokens = split_attribute(item)
                attributes.append({"path": path, "tokens": tokens})
            else:
                attributes.append(item)
        return attributes

    def to_descriptor(self, module: str | None = None, source: str | None = None) -> TypeDescriptor:
        location = f"{source}:{self.name}" if source else self.name
        return TypeDescriptor(
            name=self.name,
            params=tuple(GenericParam(p.name, p.kind) for p in self.params),
            where=ConstraintClause(tuple(Bound.parse(b) for b in self.where)),
            attributes=tuple(
                Attribute(
                    tuple(part.strip() for part in a.path.split(".")),
                    a.tokens.strip(),
                    location=location,
                )
                for a in self.attributes
            ),
            module=self.module or module,
        )


class SchemaFile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    module: str | None = None
    types: list[TypeSchema]

    @field_validator("module")
    @classmethod
    def _check_module(cls, value: str | None) -> str | None:
        return _validate_module(value)


def load_schema(source: str | bytes, *, origin: str | None = None) -> list[TypeDescriptor]:
    """Parse schema JSON into type descriptors."""
    try:
        schema = SchemaFile.model_validate_json(source)
    except ValidationError as e:
        where = f" in {origin}" if origin else ""
        raise SchemaError(f"Invalid schema{where}:\n{e}") from e
    return [t.to_descriptor(schema.module, origin) for t in schema.types]


def load_schema_file(path: str | Path) -> list[TypeDescriptor]:
    """Load type descriptors from a schema file."""
    path = Path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        raise SchemaError(f"Cannot read schema {path}: {e}") from e
    return load_schema(source, origin=str(path))


__all__ = [
    "ParamSchema",
    "AttributeSchema",
    "TypeSchema",
    "SchemaFile",
    "split_attribute",
    "load_schema",
    "load_schema_file",
]
