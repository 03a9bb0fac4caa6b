"""Shared fixtures: settings, a canned Drupal response and httpx mock helpers."""

from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from drupalfront.config import Settings

BASE_URL = "https://cms.example.com"
API_BASE = "https://cms.example.com/jsonapi"


def media_ref(mid: str) -> dict:
    return {"type": "media--image", "id": mid}


def media(mid: str, fid: str, **meta) -> dict:
    rel = {"type": "file--file", "id": fid}
    if meta:
        rel["meta"] = meta
    return {
        "type": "media--image",
        "id": mid,
        "relationships": {"field_media_image": {"data": rel}},
    }


def file(fid: str, url: str, flat: bool = False) -> dict:
    attrs = {"url": url} if flat else {"uri": {"value": "public://x", "url": url}}
    return {"type": "file--file", "id": fid, "attributes": attrs}


def term(tid: str, name: str) -> dict:
    return {"type": "taxonomy_term--category", "id": tid, "attributes": {"name": name}}


def work_node(nid: str = "w1", **attrs) -> dict:
    base = {
        "title": "Poster series",
        "path": {"alias": "/work/poster-series"},
        "body": {"processed": "<p>Posters</p>", "summary": ""},
        "created": "2024-05-01T10:00:00+00:00",
        "promote": True,
    }
    base.update(attrs)
    return {
        "type": "node--work",
        "id": nid,
        "attributes": base,
        "relationships": {
            "field_media": {"data": [media_ref("m1"), media_ref("m2")]},
            "field_category": {"data": [
                {"type": "taxonomy_term--category", "id": "t1"},
                {"type": "taxonomy_term--category", "id": "t2"},
            ]},
        },
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        drupal_base_url=BASE_URL,
        drupal_api_base=API_BASE,
        turnstile_secret_key="ts-secret",
        turnstile_site_key="ts-site",
        resend_api_key="re_key",
        contact_to_email="me@example.com, studio@example.com",
        contact_from_email="site@example.com",
    )


@pytest.fixture
def work_document() -> dict:
    return {
        "data": [work_node()],
        "included": [
            media("m1", "f1", alt="Red poster", width=1200, height=800),
            media("m2", "f2"),
            file("f1", "/sites/default/files/red.jpg"),
            file("f2", "https://cdn.example.com/blue.jpg", flat=True),
            term("t1", "Graphic Design"),
            term("t2", "Print"),
        ],
    }


@pytest.fixture
def mock_http():
    """Build an httpx.Client whose requests go to `handler`; requests are recorded."""
    clients: List[httpx.Client] = []

    def make(handler: Callable[[httpx.Request], httpx.Response], seen: List[httpx.Request] = None) -> httpx.Client:
        def recording(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(recording))
        clients.append(client)
        return client

    yield make
    for c in clients:
        c.close()
