# src/drupalfront/models.py
"""
Shapes for data coming in from Drupal and records going out to pages.

Raw resources are TypedDicts: at runtime they are the plain dicts httpx
decoded, and every key is optional because the CMS gives no guarantees.
Normalized records are pydantic models, so a bad entity fails validation
instead of leaking half-filled data into a page.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, TypedDict, Union

from pydantic import BaseModel, ConfigDict


# ---- Raw JSON:API shapes ------------------------------------------------------

class RelationshipMeta(TypedDict, total=False):
    # Drupal stores image presentation data on the media -> file relation
    alt: str
    title: str
    width: int
    height: int


class ResourceRef(TypedDict, total=False):
    type: str
    id: str
    meta: RelationshipMeta


class Relationship(TypedDict, total=False):
    # to-one relations hold a single ref, to-many a list, empty ones null
    data: Union[ResourceRef, List[ResourceRef], None]


class PathAttr(TypedDict, total=False):
    alias: Optional[str]
    pid: int
    langcode: str


class BodyAttr(TypedDict, total=False):
    value: str
    format: str
    processed: str
    summary: str


class Attributes(TypedDict, total=False):
    # node--work / node--page
    title: str
    body: Optional[BodyAttr]
    path: PathAttr
    created: str
    promote: bool
    metatag: List[Dict[str, Any]]
    # taxonomy_term--*
    name: str
    # file--file (older cores expose a flat url)
    uri: Dict[str, str]
    url: str


class Resource(TypedDict, total=False):
    type: str
    id: str
    attributes: Attributes
    relationships: Dict[str, Relationship]


class Document(TypedDict, total=False):
    data: Union[Resource, List[Resource]]
    included: List[Resource]


ResourceKey = Tuple[str, str]  # (type, id)


# ---- Normalized records -------------------------------------------------------

class Record(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def as_dict(self) -> Dict[str, Any]:
        """Dump without unset optional fields (absent, never null)."""
        return self.model_dump(exclude_none=True)


class ImageDescriptor(Record):
    src: str
    alt: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


class CategoryDescriptor(Record):
    name: str
    slug: str


class WorkRecord(Record):
    title: str
    alias: str
    promoted: bool = False
    body: Optional[str] = None
    images: List[ImageDescriptor]
    categories: Optional[List[CategoryDescriptor]] = None
    created: Optional[str] = None


class PageRecord(Record):
    title: str
    alias: str
    body: Optional[str] = None
    summary: Optional[str] = None
    images: Optional[List[ImageDescriptor]] = None
