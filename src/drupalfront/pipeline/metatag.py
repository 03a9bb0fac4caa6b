# src/drupalfront/pipeline/metatag.py
"""Pick the SEO bits out of the Drupal metatag module's `metatag` attribute."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, TypedDict

if TYPE_CHECKING:
    from drupalfront.clients.drupal import DrupalClient


class ParsedMeta(TypedDict):
    title: Optional[str]
    description: Optional[str]
    og_title: Optional[str]
    og_description: Optional[str]
    og_image: Optional[str]
    canonical: Optional[str]


def _find(tags: list, tag: str, key: str, value: str, attr: str) -> Optional[str]:
    for t in tags:
        attrs = t.get("attributes") or {}
        if t.get("tag") == tag and attrs.get(key) == value:
            return attrs.get(attr)
    return None


def parse_meta(tags: Optional[Iterable[Dict[str, Any]]] = None) -> ParsedMeta:
    """
    tags look like [{"tag": "meta", "attributes": {"name": "title", "content": "..."}}, ...].
    First match wins; anything missing is None.
    """
    tags = [t for t in (tags or ()) if isinstance(t, dict)]
    return {
        "title": _find(tags, "meta", "name", "title", "content"),
        "description": _find(tags, "meta", "name", "description", "content"),
        "og_title": _find(tags, "meta", "property", "og:title", "content"),
        "og_description": _find(tags, "meta", "property", "og:description", "content"),
        "og_image": _find(tags, "meta", "property", "og:image", "content"),
        "canonical": _find(tags, "link", "rel", "canonical", "href"),
    }


def meta_for_alias(client: "DrupalClient", alias: str) -> Optional[ParsedMeta]:
    """
    Resolve a path alias, fetch the entity it points at and parse its metatags.
    None when the alias is unknown or the router gives no JSON:API link.
    """
    resolved = client.resolve_alias(alias)
    individual = ((resolved or {}).get("jsonapi") or {}).get("individual")
    if not individual:
        return None
    doc = client.api(individual)
    attrs = (doc.get("data") or {}).get("attributes") or {}
    return parse_meta(attrs.get("metatag"))
