# src/drupalfront/pipeline/images.py
"""
Resolve a node's media field into absolute image URLs.

The chain in a Drupal JSON:API response is:

    node.relationships[field] -> media--image (in included)
        media.relationships.field_media_image -> file--file (in included)
            file.attributes.uri.url (or .url)

Alt text and pixel size live in the `meta` of the media -> file reference,
not on the file itself. Any broken link in the chain drops that one image.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union
from urllib.parse import urljoin, urlsplit

from drupalfront.models import Document, ImageDescriptor, Resource
from drupalfront.pipeline.included import (
    IncludedIndex,
    build_included_index,
    lookup,
    relationship_refs,
)

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_FIELD = "field_media"
MEDIA_FILE_FIELD = "field_media_image"
ABSOLUTE_SCHEMES = ("http", "https")


def _file_url(file: Resource) -> Optional[str]:
    attrs = file.get("attributes") or {}
    uri = attrs.get("uri")
    url = uri.get("url") if isinstance(uri, dict) else None
    url = url or attrs.get("url")
    return url if isinstance(url, str) and url else None


def absolute_url(url: str, base_url: str) -> str:
    """Leave http(s) URLs alone; resolve anything else against base_url."""
    if urlsplit(url).scheme in ABSOLUTE_SCHEMES:
        return url
    return urljoin(base_url, url)


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass; never a pixel size
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # isdigit() alone accepts "²", which int() rejects
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def _as_index(included: Union[IncludedIndex, Sequence[Resource], None]) -> IncludedIndex:
    if isinstance(included, Mapping):
        return included  # type: ignore[return-value]
    return build_included_index(included)


def resolve_images(
    entity: Resource,
    included: Union[IncludedIndex, Sequence[Resource], None],
    base_url: str,
    field: str = DEFAULT_MEDIA_FIELD,
) -> List[ImageDescriptor]:
    """
    One ImageDescriptor per resolvable reference in `entity.relationships[field]`,
    in reference order. `included` may be an index or the raw included list.
    """
    index = _as_index(included)
    out: List[ImageDescriptor] = []

    for ref in relationship_refs(entity, field):
        media = lookup(index, ref)
        if media is None:
            logger.debug("media %s not in included; skipping", ref.get("id"))
            continue

        file_refs = relationship_refs(media, MEDIA_FILE_FIELD)
        if not file_refs:
            logger.debug("media %s has no %s; skipping", ref.get("id"), MEDIA_FILE_FIELD)
            continue
        file_ref = file_refs[0]

        file = lookup(index, file_ref)
        if file is None:
            logger.debug("file %s not in included; skipping", file_ref.get("id"))
            continue

        url = _file_url(file)
        if url is None:
            logger.debug("file %s has no url; skipping", file_ref.get("id"))
            continue

        meta = file_ref.get("meta")
        if not isinstance(meta, dict):
            meta = {}
        alt = meta.get("alt")
        out.append(ImageDescriptor(
            src=absolute_url(url, base_url),
            alt=alt if isinstance(alt, str) else "",
            width=_as_int(meta.get("width")),
            height=_as_int(meta.get("height")),
        ))

    return out


def resolve_images_from_document(
    doc: Document,
    base_url: str,
    field: str = DEFAULT_MEDIA_FIELD,
) -> List[ImageDescriptor]:
    """Same as resolve_images for a single-resource document ({data, included})."""
    node = doc.get("data")
    if not isinstance(node, dict):
        return []
    return resolve_images(node, doc.get("included"), base_url, field)
