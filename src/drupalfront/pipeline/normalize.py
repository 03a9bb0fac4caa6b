# src/drupalfront/pipeline/normalize.py
"""
Convert raw Drupal nodes into WorkRecord / PageRecord models.

Drupal's JSON is loose (missing attributes, nulls, nested bodies); this module
decides what every record field means and lets pydantic reject the rest.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from drupalfront.models import (
    CategoryDescriptor,
    ImageDescriptor,
    PageRecord,
    Resource,
    WorkRecord,
)
from drupalfront.pipeline.images import resolve_images
from drupalfront.pipeline.included import IncludedIndex, lookup, relationship_refs

CATEGORY_FIELD = "field_category"

_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG = re.compile(r"[^a-z0-9-]")


class NormalizationError(ValueError):
    """A single entity failed its record schema."""

    def __init__(self, entity_id: str, errors: List[Dict[str, Any]]):
        self.entity_id = entity_id
        self.errors = errors
        super().__init__(f"entity {entity_id!r} failed validation: {len(errors)} error(s)")


def slugify(name: str) -> str:
    """'Graphic Design' -> 'graphic-design'."""
    return _NOT_SLUG.sub("", _WHITESPACE.sub("-", name.lower()))


def _attrs(entity: Resource) -> Dict[str, Any]:
    return entity.get("attributes") or {}


def _alias(entity: Resource) -> str:
    # Drupal gives {"alias": null} for nodes without a path alias
    path = _attrs(entity).get("path") or {}
    alias = path.get("alias") if isinstance(path, dict) else None
    return alias or f"/node/{entity.get('id')}"


def _body_part(entity: Resource, part: str) -> Optional[str]:
    body = _attrs(entity).get("body")
    if not isinstance(body, dict):
        return None
    return body.get(part)


def resolve_categories(
    entity: Resource,
    index: IncludedIndex,
    field: str = CATEGORY_FIELD,
) -> List[CategoryDescriptor]:
    """Taxonomy terms referenced by `field`, dropping unresolved or unnamed ones."""
    out: List[CategoryDescriptor] = []
    for ref in relationship_refs(entity, field):
        term = lookup(index, ref) or {}
        name = (term.get("attributes") or {}).get("name") or ""
        if not isinstance(name, str):
            continue
        slug = slugify(name)
        if name and slug:
            out.append(CategoryDescriptor(name=name, slug=slug))
    return out


def _validate(model, entity: Resource, data: Dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise NormalizationError(str(entity.get("id")), e.errors()) from e


def build_work_record(
    entity: Resource,
    images: List[ImageDescriptor],
    categories: List[CategoryDescriptor],
) -> WorkRecord:
    """Assemble and validate a work item from already resolved parts."""
    attrs = _attrs(entity)
    promote = attrs.get("promote")
    return _validate(WorkRecord, entity, {
        "title": attrs.get("title") or "",
        "alias": _alias(entity),
        "promoted": False if promote is None else promote,
        "body": _body_part(entity, "processed"),
        "images": images,
        "categories": categories or None,  # omitted, not []
        "created": attrs.get("created"),
    })


def build_page_record(entity: Resource, images: List[ImageDescriptor]) -> PageRecord:
    """Assemble and validate a basic page from already resolved images."""
    attrs = _attrs(entity)
    return _validate(PageRecord, entity, {
        "title": attrs.get("title") or "",
        "alias": _alias(entity),
        "body": _body_part(entity, "processed"),
        "summary": _body_part(entity, "summary"),
        "images": images or None,
    })


def normalize_work(entity: Resource, index: IncludedIndex, base_url: str) -> WorkRecord:
    images = resolve_images(entity, index, base_url)
    categories = resolve_categories(entity, index)
    return build_work_record(entity, images, categories)


def normalize_page(entity: Resource, index: IncludedIndex, base_url: str) -> PageRecord:
    images = resolve_images(entity, index, base_url)
    return build_page_record(entity, images)
