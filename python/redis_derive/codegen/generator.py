"""Generator for Python modules implementing Redis adapters.

The rendered module imports each subject type from its defining module
and installs the adapters on it when imported:

    # Auto-generated by redis-derive
    # DO NOT EDIT - This file will be overwritten

    from __future__ import annotations

    from redis_derive.codecs import resolve_codec as _resolve_codec
    ...
    from app.models import Page

    def page_from_redis_value(cls: type[Page], value: _Value) -> Page:
        ...

    Page.from_redis_value = classmethod(page_from_redis_value)

Runtime names are imported under private aliases. A subject type whose
name is already taken, by a same-named type from another module or by one
of those aliases, is imported as `_<module>_<Name>`.

Types without a module are rendered without an import; their adapters are
meant to be pasted below the type's definition.
"""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from redis_derive.core.descriptor import TypeDescriptor
from redis_derive.derive import ADAPTERS_ATTRIBUTE, adapters_of, derive
from redis_derive.derive.adapter import RUNTIME_ALIASES, RUNTIME_IMPORTS, GeneratedAdapter
from redis_derive.log import get_logger

logger = get_logger(__name__)

HEADER = [
    "# Auto-generated by redis-derive",
    "# DO NOT EDIT - This file will be overwritten",
    "",
    "from __future__ import annotations",
    "",
]
HEADER.extend(
    f"from {module} import {name} as {alias}" for module, name, alias in RUNTIME_IMPORTS
)

TypeKey = tuple[str | None, str]


def render_adapters(descriptor: TypeDescriptor) -> str:
    """Render both adapters of a type (without imports)."""
    return "\n\n".join(adapter.render() for adapter in derive(descriptor))


def _type_refs(adapters: list[GeneratedAdapter]) -> dict[TypeKey, str]:
    """Map every (module, name) subject type to the name the module uses for it."""
    refs: dict[TypeKey, str] = {}
    owners: dict[str, str | None] = {}
    for adapter in adapters:
        module, name = adapter.descriptor.module, adapter.descriptor.name
        if (module, name) in refs:
            continue
        owner = owners.setdefault(name, module)
        if module is None or (owner == module and name not in RUNTIME_ALIASES):
            refs[module, name] = name
        else:
            refs[module, name] = f"_{module.replace('.', '_')}_{name}"
    return refs


def render_module(adapters: Iterable[GeneratedAdapter]) -> str:
    """Render a complete module from generated adapters."""
    adapters = list(adapters)
    refs = _type_refs(adapters)

    imports = list(HEADER)
    modules: dict[str, set[str]] = {}
    for (module, name), ref in refs.items():
        if module is not None:
            modules.setdefault(module, set()).add(name if ref == name else f"{name} as {ref}")
    if modules:
        imports.append("")
        for module_name in sorted(modules):
            imports.append(f"from {module_name} import {', '.join(sorted(modules[module_name]))}")

    parts = ["\n".join(imports)]
    parts.extend(
        adapter.render(refs[adapter.descriptor.module, adapter.descriptor.name]).rstrip("\n")
        for adapter in adapters
    )
    return "\n\n\n".join(parts) + "\n"


def generate_for_descriptors(descriptors: Iterable[TypeDescriptor]) -> str:
    """Render a module with both adapters for every descriptor."""
    adapters: list[GeneratedAdapter] = []
    for descriptor in descriptors:
        adapters.extend(derive(descriptor))
    return render_module(adapters)


def _derived_classes(module: ModuleType) -> list[type]:
    classes = []
    for name in dir(module):
        obj = getattr(module, name)
        if (
            inspect.isclass(obj)
            and obj.__module__ == module.__name__
            and ADAPTERS_ATTRIBUTE in obj.__dict__
        ):
            classes.append(obj)
    return classes


def generate_for_module(module: str | ModuleType) -> str | None:
    """Render adapters for every derived class defined in a module.

    Returns None when the module defines no derived classes.
    """
    if isinstance(module, str):
        module = importlib.import_module(module)
    classes = _derived_classes(module)
    if not classes:
        logger.debug("no derived classes", module=module.__name__)
        return None
    adapters: list[GeneratedAdapter] = []
    for cls in classes:
        adapters.extend(adapters_of(cls))
    return render_module(adapters)


def write_module(path: str | Path, content: str) -> Path:
    """Write a rendered module to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    logger.debug("wrote generated module", path=str(path))
    return path


__all__ = [
    "render_adapters",
    "render_module",
    "generate_for_descriptors",
    "generate_for_module",
    "write_module",
]
