"""Tests for work/page normalization and category slugs."""

from __future__ import annotations

import pytest

from drupalfront.pipeline.included import build_included_index
from drupalfront.pipeline.normalize import (
    NormalizationError,
    normalize_page,
    normalize_work,
    resolve_categories,
    slugify,
)

from conftest import BASE_URL, file, media, media_ref, term, work_node

BASE = BASE_URL + "/"


@pytest.mark.parametrize("name, slug", [
    ("Graphic Design", "graphic-design"),
    ("  Print ", "-print-"),
    ("UX/UI  Work", "uxui-work"),
    ("Café", "caf"),
    ("!!!", ""),
])
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_work_record_from_fixture(work_document):
    index = build_included_index(work_document["included"])
    record = normalize_work(work_document["data"][0], index, BASE)

    assert record.title == "Poster series"
    assert record.alias == "/work/poster-series"
    assert record.promoted is True
    assert record.body == "<p>Posters</p>"
    assert record.created == "2024-05-01T10:00:00+00:00"
    assert [i.src for i in record.images] == [
        "https://cms.example.com/sites/default/files/red.jpg",
        "https://cdn.example.com/blue.jpg",
    ]
    assert [c.as_dict() for c in record.categories] == [
        {"name": "Graphic Design", "slug": "graphic-design"},
        {"name": "Print", "slug": "print"},
    ]


def test_work_minimal_entity_omits_optionals():
    record = normalize_work({"type": "node--work", "id": "abc"}, {}, BASE)
    assert record.as_dict() == {
        "title": "",
        "alias": "/node/abc",
        "promoted": False,
        "images": [],
    }


def test_null_alias_falls_back_to_node_path():
    node = work_node("n9", path={"alias": None})
    assert normalize_work(node, {}, BASE).alias == "/node/n9"


def test_categories_drop_unresolved_and_symbol_names():
    node = work_node()
    node["relationships"]["field_category"]["data"].append(
        {"type": "taxonomy_term--category", "id": "t3"}
    )
    index = build_included_index([term("t1", "Web"), term("t3", "***")])
    assert [c.slug for c in resolve_categories(node, index)] == ["web"]


def test_categories_omitted_when_none_resolve():
    record = normalize_work(work_node(), {}, BASE)
    assert record.categories is None
    assert "categories" not in record.as_dict()


def test_wrong_primitive_type_raises_for_that_entity():
    node = work_node("bad", title=123)
    with pytest.raises(NormalizationError) as exc:
        normalize_work(node, {}, BASE)
    assert exc.value.entity_id == "bad"
    assert exc.value.errors


def test_page_record_fields():
    node = {
        "type": "node--page",
        "id": "p1",
        "attributes": {
            "title": "About",
            "path": {"alias": "/about"},
            "body": {"processed": "<p>Hi</p>", "summary": "Short"},
        },
        "relationships": {"field_media": {"data": [media_ref("m1")]}},
    }
    index = build_included_index([media("m1", "f1", alt="Portrait"), file("f1", "/me.jpg")])
    record = normalize_page(node, index, BASE)

    assert record.as_dict() == {
        "title": "About",
        "alias": "/about",
        "body": "<p>Hi</p>",
        "summary": "Short",
        "images": [{"src": "https://cms.example.com/me.jpg", "alt": "Portrait"}],
    }


def test_page_without_images_or_body_omits_them():
    node = {"type": "node--page", "id": "p2", "attributes": {"title": "Empty", "body": None}}
    assert normalize_page(node, {}, BASE).as_dict() == {"title": "Empty", "alias": "/node/p2"}
