"""Source generation for Redis adapters."""

from .generator import (
    generate_for_descriptors,
    generate_for_module,
    render_adapters,
    render_module,
    write_module,
)

__all__ = [
    "generate_for_descriptors",
    "generate_for_module",
    "render_adapters",
    "render_module",
    "write_module",
]
