"""Unit tests for the MediaWiki list endpoint definitions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest

from wikiclient.connectors.mediawiki.endpoints import (
    get_endpoint_adapter,
    get_endpoint_spec,
    list_kinds,
)
from wikiclient.connectors.mediawiki.endpoints.common import format_value, prefixed
from wikiclient.connectors.mediawiki.endpoints.generator import sort_pages
from wikiclient.connectors.mediawiki.endpoints.revisions import extract_items as revision_items
from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.models import RecentChangeItem, Revision, WikiPage, WikiPageStub


class Direction(Enum):
    OLDER = "older"


class TestFormatValue:
    """Test parameter value conversion."""

    def test_scalars(self):
        assert format_value(None) is None
        assert format_value(False) is None
        assert format_value(True) == "1"
        assert format_value(5) == 5
        assert format_value(Direction.OLDER) == "older"

    def test_datetime(self):
        value = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_value(value) == "2024-01-02T03:04:05Z"

    def test_sequences_joined(self):
        assert format_value(["page", "subcat"]) == "page|subcat"
        assert format_value((0, 14)) == "0|14"

    def test_sequence_drops_omitted_values(self):
        assert format_value(["ids", None, "title", False]) == "ids|title"

    def test_prefixed(self):
        params = {"title": "Category:X", "cmtype": "page", "limit": None, "redirects": False}
        assert prefixed("cm", params) == {"cmtitle": "Category:X", "cmtype": "page"}


class TestRegistry:
    """Test endpoint lookup."""

    def test_known_list_kinds(self):
        assert set(list_kinds()) >= {"allpages", "categorymembers", "recentchanges", "revisions"}
        for kind in list_kinds():
            assert get_endpoint_spec(kind).id == kind
            assert get_endpoint_adapter(kind) is not None

    def test_unknown_list_kind(self):
        assert get_endpoint_spec("nosuchlist") is None
        assert get_endpoint_adapter("nosuchlist") is None

    def test_generator_resolved_on_demand(self):
        spec = get_endpoint_spec("generator:categorymembers")
        assert spec.id == "generator:categorymembers"
        assert spec.group == "categorymembers"
        assert spec.limit_param == "gcmlimit"
        assert spec is get_endpoint_spec("generator:categorymembers")
        assert get_endpoint_adapter("generator:categorymembers") is not None

    def test_unknown_generator(self):
        assert get_endpoint_spec("generator:nosuchlist") is None
        assert get_endpoint_adapter("generator:nosuchlist") is None


class TestBuildQuery:
    """Test per-list request parameters."""

    def test_categorymembers(self):
        query = get_endpoint_spec("categorymembers").build_query(
            {"title": "Category:Cats", "type": ["page", "subcat"], "namespace": 0}
        )
        assert query == {
            "action": "query",
            "list": "categorymembers",
            "continue": "",
            "cmtitle": "Category:Cats",
            "cmtype": "page|subcat",
            "cmnamespace": 0,
        }

    def test_categorymembers_requires_title(self):
        with pytest.raises(ValueError):
            get_endpoint_spec("categorymembers").build_query({})

    def test_search_requires_expression(self):
        with pytest.raises(ValueError):
            get_endpoint_spec("search").build_query({"search": ""})

    def test_recentchanges_default_props(self):
        query = get_endpoint_spec("recentchanges").build_query({"type": "edit"})
        assert query["rctype"] == "edit"
        assert "ids" in query["rcprop"].split("|")

    def test_recentchanges_explicit_props_kept(self):
        query = get_endpoint_spec("recentchanges").build_query({"prop": "title"})
        assert query["rcprop"] == "title"

    def test_revisions_by_title(self):
        query = get_endpoint_spec("revisions").build_query({"title": "Main Page", "dir": "newer"})
        assert query["prop"] == "revisions"
        assert query["titles"] == "Main Page"
        assert query["rvdir"] == "newer"
        assert "pageids" not in query

    def test_revisions_requires_exactly_one_page(self):
        spec = get_endpoint_spec("revisions")
        with pytest.raises(ValueError):
            spec.build_query({})
        with pytest.raises(ValueError):
            spec.build_query({"title": "A", "pageid": 1})

    def test_generator(self):
        query = get_endpoint_spec("generator:allpages").build_query({"namespace": 14, "from": "B"})
        assert query == {
            "action": "query",
            "generator": "allpages",
            "prop": "info",
            "continue": "",
            "gapnamespace": 14,
            "gapfrom": "B",
        }

    def test_all_specs_use_token_convention(self):
        for kind in list_kinds():
            assert get_endpoint_spec(kind).convention == PaginationConvention.TOKEN


class TestExtraction:
    """Test custom item extractors."""

    def test_generator_pages_sorted_by_index(self):
        doc = {"query": {"pages": [{"title": "B", "index": 2}, {"title": "A", "index": 1}]}}
        assert [p["title"] for p in sort_pages(doc)] == ["A", "B"]

    def test_generator_pages_keyed_by_id(self):
        doc = {"query": {"pages": {"12": {"title": "A"}, "15": {"title": "B"}}}}
        assert [p["title"] for p in sort_pages(doc)] == ["A", "B"]

    def test_generator_without_pages(self):
        assert sort_pages({"batchcomplete": True}) is None

    def test_generator_invalid_pages(self):
        with pytest.raises(UnexpectedDataError):
            sort_pages({"query": {"pages": "oops"}})

    def test_revisions_lifted_from_page(self):
        doc = {"query": {"pages": [{"pageid": 3, "title": "A", "revisions": [{"revid": 9}, {"revid": 8}]}]}}
        items = revision_items(doc)
        assert items == [
            {"revid": 9, "pageid": 3, "title": "A"},
            {"revid": 8, "pageid": 3, "title": "A"},
        ]

    def test_revisions_of_missing_page(self):
        doc = {"query": {"pages": [{"title": "Nope", "missing": True}]}}
        assert revision_items(doc) == []


class TestAdapters:
    """Test item adapters."""

    def test_categorymembers(self):
        adapter = get_endpoint_adapter("categorymembers")()
        stub = adapter.parse({"pageid": 1, "ns": 14, "title": "Category:Kittens"}, {})
        assert stub == WikiPageStub(page_id=1, namespace_id=14, title="Category:Kittens")

    def test_allcategories(self):
        adapter = get_endpoint_adapter("allcategories")()
        assert adapter.parse({"category": "Cats"}, {}).title == "Category:Cats"
        assert adapter.parse({"*": "Dogs"}, {}).namespace_id == 14
        with pytest.raises(UnexpectedDataError):
            adapter.parse({"size": 3}, {})

    def test_invalid_item_raises_unexpected_data(self):
        adapter = get_endpoint_adapter("categorymembers")()
        with pytest.raises(UnexpectedDataError):
            adapter.parse({"pageid": 1}, {})

    def test_recentchanges(self):
        item = get_endpoint_adapter("recentchanges")().parse(
            {"rcid": 5, "type": "edit", "title": "A", "oldlen": 10, "newlen": 25}, {}
        )
        assert isinstance(item, RecentChangeItem)
        assert item.delta == 15

    def test_revisions(self):
        rev = get_endpoint_adapter("revisions")().parse({"revid": 9, "slots": {"main": {"content": "x"}}}, {})
        assert isinstance(rev, Revision)
        assert rev.content == "x"

    def test_generator(self):
        page = get_endpoint_adapter("generator:allpages")().parse(
            {"pageid": 4, "ns": 0, "title": "A", "lastrevid": 77, "length": 120}, {}
        )
        assert isinstance(page, WikiPage)
        assert page.last_revision_id == 77
