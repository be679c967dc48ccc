"""Constraint clause composition for generated adapters.

The bound added for an adapter always constrains the fully-instantiated
subject type (Page[T]), never a bare parameter:

    Page[T], no clause             ->  where Page[T]: DeserializeOwned
    Page[T], where T: Hashable     ->  where T: Hashable, Page[T]: DeserializeOwned
    Point, no clause               ->  (none)
    View['a], no clause            ->  (none), lifetimes do not count
"""

from __future__ import annotations

from redis_derive.core.descriptor import (
    Bound,
    Capability,
    ConstraintClause,
    TypeDescriptor,
)


def compose_bounds(descriptor: TypeDescriptor, capability: Capability) -> ConstraintClause:
    """Return the constraint clause an adapter requiring `capability` needs."""
    bound = Bound(descriptor.instantiated, Capability(capability).value)
    if descriptor.where:
        return descriptor.where.extend(bound)
    if descriptor.has_type_params:
        return ConstraintClause((bound,))
    return ConstraintClause()


__all__ = ["compose_bounds"]
