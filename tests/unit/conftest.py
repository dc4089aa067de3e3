"""Shared fixtures for unit tests: schemas, raw entries and pages."""

from __future__ import annotations

from typing import Any

import pytest

from typedcms.delivery.models import EntryPage, RawAsset, RawEntry
from typedcms.delivery.resolution import EntryResolver, EntryStore, ResolutionCache
from typedcms.delivery.schema import ContentModelRegistry


def _field(field_id: str, field_type: str, **extra: Any) -> dict[str, Any]:
    return {"id": field_id, "name": field_id, "type": field_type, **extra}


def _entry_link(field_id: str, *targets: str) -> dict[str, Any]:
    validations = [{"linkContentType": list(targets)}] if targets else []
    return _field(field_id, "Link", linkType="Entry", validations=validations)


def _entry_links(field_id: str, *targets: str) -> dict[str, Any]:
    validations = [{"linkContentType": list(targets)}] if targets else []
    return _field(
        field_id,
        "Array",
        items={"type": "Link", "linkType": "Entry", "validations": validations},
    )


def _content_type(ct_id: str, name: str, *fields: dict[str, Any]) -> dict[str, Any]:
    return {"sys": {"id": ct_id, "type": "ContentType"}, "name": name, "fields": list(fields)}


BLOG_CONTENT_TYPES = [
    _content_type(
        "category",
        "Category",
        _field("title", "Symbol"),
        _entry_link("parent", "category"),
        _entry_links("children", "category"),
    ),
    _content_type(
        "author",
        "Author",
        _field("name", "Symbol"),
        _field("born", "Date"),
        _field("avatar", "Link", linkType="Asset"),
    ),
    _content_type(
        "blogPost",
        "Blog Post",
        _field("title", "Symbol"),
        _field("views", "Integer"),
        _field("rating", "Number"),
        _field("published", "Boolean"),
        _field("tags", "Array", items={"type": "Symbol"}),
        _entry_link("author", "author", "blogPost"),
        _entry_link("category", "category"),
        _field("gallery", "Array", items={"type": "Link", "linkType": "Asset"}),
        _entry_links("authors", "author"),
        _entry_links("related"),
    ),
]

# a.b -> B, a.c -> C, b.a -> A, c.a -> A: cross-type cycles through A.
CYCLE_CONTENT_TYPES = [
    _content_type(
        "nodeA",
        "Node A",
        _field("name", "Symbol"),
        _entry_link("b", "nodeB"),
        _entry_link("c", "nodeC"),
    ),
    _content_type(
        "nodeB",
        "Node B",
        _field("name", "Symbol"),
        _entry_link("a", "nodeA"),
    ),
    _content_type(
        "nodeC",
        "Node C",
        _field("name", "Symbol"),
        _entry_link("a", "nodeA"),
    ),
]


def link(entry_id: str, link_type: str = "Entry") -> dict[str, Any]:
    return {"sys": {"type": "Link", "linkType": link_type, "id": entry_id}}


def raw_entry(entry_id: str, content_type_id: str, **fields: Any) -> RawEntry:
    return RawEntry.model_validate(
        {
            "sys": {"id": entry_id, "type": "Entry", "contentType": link(content_type_id, "ContentType")},
            "fields": fields,
        }
    )


def raw_asset(asset_id: str, title: str = "", url: str = "", width: int = 0, height: int = 0) -> RawAsset:
    return RawAsset.model_validate(
        {
            "sys": {"id": asset_id, "type": "Asset"},
            "fields": {
                "title": title,
                "file": {
                    "url": url,
                    "fileName": f"{asset_id}.png",
                    "contentType": "image/png",
                    "details": {"size": 1024, "image": {"width": width, "height": height}},
                },
            },
        }
    )


def page(
    items: list[RawEntry],
    entries: list[RawEntry] | None = None,
    assets: list[RawAsset] | None = None,
    total: int | None = None,
) -> EntryPage:
    return EntryPage(
        total=len(items) if total is None else total,
        items=items,
        includes={"Entry": entries or [], "Asset": assets or []},
    )


@pytest.fixture
def blog_content_types() -> list[dict[str, Any]]:
    """Raw ``content_types`` items of the blog schema."""
    return [dict(ct) for ct in BLOG_CONTENT_TYPES]


@pytest.fixture
def blog_registry() -> ContentModelRegistry:
    return ContentModelRegistry.from_api(BLOG_CONTENT_TYPES)


@pytest.fixture
def cycle_registry() -> ContentModelRegistry:
    return ContentModelRegistry.from_api(CYCLE_CONTENT_TYPES)


@pytest.fixture
def blog_resolver(blog_registry) -> EntryResolver:
    return EntryResolver(blog_registry)


@pytest.fixture
def cycle_resolver(cycle_registry) -> EntryResolver:
    return EntryResolver(cycle_registry)


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def factory():
    """Builders for raw API objects."""

    class Factory:
        link = staticmethod(link)
        entry = staticmethod(raw_entry)
        asset = staticmethod(raw_asset)
        page = staticmethod(page)

        @staticmethod
        def store(entries: list[RawEntry], assets: list[RawAsset] | None = None) -> EntryStore:
            return EntryStore(entries=entries, assets=assets or [])

    return Factory
