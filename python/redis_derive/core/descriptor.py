"""Type descriptors consumed by the adapter generators.

A TypeDescriptor is the parsed shape of a subject type:

    TypeDescriptor(
        name="Page",
        params=(GenericParam("T"), GenericParam("N", ParamKind.CONST)),
        where=ConstraintClause((Bound("T", "Hashable"),)),
        attributes=(Attribute(("redis_serializer",), "(json)"),),
        module="app.models",
    )

Descriptors are produced once per generation request, either by
introspecting a class (core.introspect) or by loading a schema file
(redis_derive.schema), and are never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_CODEC = "msgpack"
SERIALIZER_ATTRIBUTE = "redis_serializer"


class ParamKind(str, Enum):
    TYPE = "type"
    LIFETIME = "lifetime"
    CONST = "const"


class Capability(str, Enum):
    """Capabilities the generated adapters require from the subject type."""

    SERIALIZE = "Serialize"  # encode
    DESERIALIZE_OWNED = "DeserializeOwned"  # decode


@dataclass(frozen=True, slots=True)
class GenericParam:
    name: str
    kind: ParamKind = ParamKind.TYPE


@dataclass(frozen=True, slots=True)
class Attribute:
    """A declarative attribute attached to a type.

    `tokens` is the raw payload text that follows the attribute path,
    e.g. "(json)" for redis_serializer(json), "" for a bare attribute.
    """

    path: tuple[str, ...]
    tokens: str = ""
    location: str | None = None

    def __str__(self) -> str:
        text = ".".join(self.path) + self.tokens
        if self.location:
            return f"{text} at {self.location}"
        return text


@dataclass(frozen=True, slots=True)
class Bound:
    subject: str
    capability: str

    def __str__(self) -> str:
        return f"{self.subject}: {self.capability}"

    @classmethod
    def parse(cls, text: str) -> Bound:
        """Parse "subject: capability"."""
        subject, sep, capability = text.partition(":")
        subject, capability = subject.strip(), capability.strip()
        if not sep or not subject or not capability:
            raise ValueError(f"Invalid bound {text!r}, expected 'subject: capability'")
        return cls(subject, capability)


@dataclass(frozen=True, slots=True)
class ConstraintClause:
    """Conjunction of bounds. An empty clause means no clause at all."""

    bounds: tuple[Bound, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.bounds)

    def __len__(self) -> int:
        return len(self.bounds)

    def extend(self, bound: Bound) -> ConstraintClause:
        return ConstraintClause(self.bounds + (bound,))

    def render(self) -> str:
        if not self.bounds:
            return ""
        return "where " + ", ".join(str(b) for b in self.bounds)

    def as_strings(self) -> tuple[str, ...]:
        return tuple(str(b) for b in self.bounds)


@dataclass(frozen=True, slots=True)
class CodecReference:
    """Name of the codec module an adapter delegates to."""

    name: str = DEFAULT_CODEC

    def __post_init__(self) -> None:
        if not self.name.isidentifier():
            raise ValueError(f"Codec reference must be a single identifier, got {self.name!r}")

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    name: str
    params: tuple[GenericParam, ...] = ()
    where: ConstraintClause = ConstraintClause()
    attributes: tuple[Attribute, ...] = ()
    module: str | None = None

    @property
    def has_type_params(self) -> bool:
        return any(p.kind is ParamKind.TYPE for p in self.params)

    @property
    def instantiated(self) -> str:
        """The subject type applied to its own parameters, e.g. "Page[T, N]"."""
        if not self.params:
            return self.name
        return f"{self.name}[{', '.join(p.name for p in self.params)}]"


__all__ = [
    "DEFAULT_CODEC",
    "SERIALIZER_ATTRIBUTE",
    "ParamKind",
    "Capability",
    "GenericParam",
    "Attribute",
    "Bound",
    "ConstraintClause",
    "CodecReference",
    "TypeDescriptor",
]
