"""Merge locally exported components with components inferred from imports."""

import re
from typing import Iterable

from .models import ComponentRef, ImportRecord

# Components are assumed to start with an uppercase ASCII letter
COMPONENT_NAME = re.compile(r"^[A-Z]")
NAMESPACE_ALIAS = re.compile(r"\*\s+as\s+(\w+)")


def is_component_name(name: str | None) -> bool:
    return bool(name) and COMPONENT_NAME.match(name) is not None


def namespace_alias(namespace_import: str | None) -> str | None:
    """Alias of a ``"* as Name"`` namespace import, if it has that form."""
    if not namespace_import:
        return None
    match = NAMESPACE_ALIAS.search(namespace_import)
    return match.group(1) if match else None


def collect_imported_components(imports: Iterable[ImportRecord]) -> list[ComponentRef]:
    """Capitalized bindings of each import, tagged with the import's source.

    Named imports use their local (aliased) name.
    """
    components: list[ComponentRef] = []

    for record in imports:
        if is_component_name(record.default_import):
            components.append(ComponentRef(record.default_import, record.source))

        for named in record.named:
            if is_component_name(named.local_name):
                components.append(ComponentRef(named.local_name, record.source))

        alias = namespace_alias(record.namespace_import)
        if is_component_name(alias):
            components.append(ComponentRef(alias, record.source))

    return components


def merge_components(
    local_names: Iterable[str],
    imported: Iterable[ComponentRef],
) -> list[ComponentRef]:
    """Local components first, then imported ones not already present.

    Two refs are the same component when both name and source match.
    """
    merged = [ComponentRef(name, None) for name in local_names]
    seen = set(merged)

    for component in imported:
        if component not in seen:
            seen.add(component)
            merged.append(component)

    return merged
