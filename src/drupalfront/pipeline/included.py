# src/drupalfront/pipeline/included.py
"""
Index a JSON:API `included` array by (type, id).

Relationships only carry {type, id}; the actual resources are side-loaded in
`included`, so every lookup during normalization goes through this index.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from drupalfront.models import Resource, ResourceKey, ResourceRef

IncludedIndex = Dict[ResourceKey, Resource]


def resource_key(ref: dict) -> Optional[ResourceKey]:
    """(type, id) for a resource or reference, or None when either is missing."""
    t, i = ref.get("type"), ref.get("id")
    if not t or not i:
        return None
    return (str(t), str(i))


def build_included_index(included: Optional[Iterable[Resource]]) -> IncludedIndex:
    """
    Map (type, id) -> resource. Missing/empty input gives an empty dict.
    Drupal does not promise unique keys here; a later duplicate replaces an earlier one.
    """
    index: IncludedIndex = {}
    for res in included or ():
        if not isinstance(res, dict):
            continue
        key = resource_key(res)
        if key is not None:
            index[key] = res
    return index


def relationship_refs(resource: Optional[Resource], field: str) -> List[ResourceRef]:
    """
    References held by a relationship field, always as a list.
    A to-one relation becomes a one-element list; absent or null gives [].
    """
    rel = ((resource or {}).get("relationships") or {}).get(field) or {}
    data = rel.get("data") if isinstance(rel, dict) else None
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return [ref for ref in data if isinstance(ref, dict)]


def lookup(index: IncludedIndex, ref: ResourceRef) -> Optional[Resource]:
    """The included resource a reference points at, if it was side-loaded."""
    key = resource_key(ref)
    return index.get(key) if key is not None else None
