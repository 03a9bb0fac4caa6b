# src/drupalfront/pipeline/loader.py
"""
Load the `work` and `page` collections from Drupal.

A load never raises for upstream trouble: missing config or a failed request
gives an empty LoadResult with an outcome saying why, so the site keeps
serving what it can.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

import httpx

from drupalfront.clients.drupal import DrupalClient, DrupalError, as_base_url
from drupalfront.config import Settings
from drupalfront.models import PageRecord, Resource, WorkRecord
from drupalfront.pipeline.included import IncludedIndex, build_included_index
from drupalfront.pipeline.normalize import NormalizationError, normalize_page, normalize_work

logger = logging.getLogger(__name__)

AnyRecord = Union[WorkRecord, PageRecord]


class LoadOutcome(str, enum.Enum):
    LOADED = "loaded"
    NOT_CONFIGURED = "not_configured"
    REQUEST_FAILED = "request_failed"


@dataclass
class LoadResult:
    outcome: LoadOutcome
    records: Dict[str, AnyRecord] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)  # ids that failed validation
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is LoadOutcome.LOADED


@dataclass(frozen=True)
class CollectionQuery:
    path: str
    params: Dict[str, str]
    normalize: Callable[[Resource, IncludedIndex, str], AnyRecord]


COLLECTIONS: Dict[str, CollectionQuery] = {
    "work": CollectionQuery(
        path="node/work",
        params={
            "sort": "-created",
            "page[limit]": "100",
            "include": "field_category,field_media,field_media.field_media_image",
            "fields[node--work]": "title,path,body,created,promote,field_category,field_media",
        },
        normalize=normalize_work,
    ),
    "page": CollectionQuery(
        path="node/page",
        params={
            "page[limit]": "50",
            "include": "field_media,field_media.field_media_image",
            "fields[node--page]": "title,path,body,field_media",
        },
        normalize=normalize_page,
    ),
}


def _fetch(settings: Settings, query: CollectionQuery, http: Optional[httpx.Client]) -> dict:
    with DrupalClient(settings, http=http) as client:
        return client.api(query.path, query.params)


def load_collection(
    settings: Settings,
    kind: str,
    http: Optional[httpx.Client] = None,
) -> LoadResult:
    """
    Fetch one page of `kind` ("work" or "page") and normalize every node.

    Returns a LoadResult keyed by node id. Entities that fail validation are
    listed in `skipped` and do not stop the rest of the load.
    """
    try:
        query = COLLECTIONS[kind]
    except KeyError:
        raise ValueError(f"unknown collection {kind!r}; expected one of {sorted(COLLECTIONS)}") from None

    if not settings.drupal_configured:
        logger.warning("DRUPAL_BASE_URL / DRUPAL_API_BASE not set; skipping %s collection load.", kind)
        return LoadResult(outcome=LoadOutcome.NOT_CONFIGURED, error="drupal not configured")

    logger.info("Fetching %s entries from Drupal JSON:API...", kind)
    try:
        response = _fetch(settings, query, http)
    except (DrupalError, httpx.HTTPError, ValueError) as e:
        # ValueError covers a body that is not JSON
        logger.warning("Could not fetch %s from Drupal API: %s", kind, e)
        return LoadResult(outcome=LoadOutcome.REQUEST_FAILED, error=str(e))

    data = response.get("data") if isinstance(response, dict) else None
    if not isinstance(data, list):
        logger.warning("Drupal %s response has no data array", kind)
        return LoadResult(outcome=LoadOutcome.REQUEST_FAILED, error="response has no data array")

    index = build_included_index(response.get("included"))
    base_url = as_base_url(settings.drupal_base_url)
    result = LoadResult(outcome=LoadOutcome.LOADED)
    for node in data:
        if not isinstance(node, dict):
            continue
        node_id = str(node.get("id"))
        try:
            result.records[node_id] = query.normalize(node, index, base_url)
        except NormalizationError as e:
            logger.warning("Skipping %s %s: %s", kind, node_id, e)
            result.skipped.append(node_id)

    logger.info("Loaded %d %s entries.", len(result.records), kind)
    return result


def load_work(settings: Settings, http: Optional[httpx.Client] = None) -> LoadResult:
    return load_collection(settings, "work", http=http)


def load_pages(settings: Settings, http: Optional[httpx.Client] = None) -> LoadResult:
    return load_collection(settings, "page", http=http)
