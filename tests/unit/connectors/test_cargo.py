"""Unit tests for Cargo queries and their offset-paginated enumeration."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from wikiclient.connectors.cargo import CargoQueryParameters, enum_cargo_rows, execute_cargo_query
from wikiclient.connectors.mediawiki import WikiSite
from wikiclient.core.exceptions import MalformedResponseError

API = "https://wiki.example.org/api.php"


def rows_handler(total, requests):
    async def post(url, data=None, **kwargs):
        if data.get("meta") == "userinfo":
            return {"query": {"userinfo": {"id": 1, "name": "Example", "rights": ["read"]}}}
        requests.append(dict(data))
        offset = int(data["offset"])
        limit = int(data["limit"])
        return {
            "cargoquery": [
                {"title": {"Name": f"Item {i}", "Level": str(i)}}
                for i in range(offset, min(offset + limit, total))
            ]
        }

    return post


def make_site(post):
    http = MagicMock()
    http.post = AsyncMock(side_effect=post)
    return WikiSite(API, http=http)


class TestCargoQueryParameters:
    """Test parameter validation and rendering."""

    def test_to_request(self):
        params = CargoQueryParameters(
            tables=["Items", "Recipes"],
            fields=["Items.Name", "Recipes.Result"],
            where="Items.Level > 5",
            join_on=["Items.Name=Recipes.Result"],
            order_by=["Items.Name"],
        )
        assert params.to_request() == {
            "action": "cargoquery",
            "tables": "Items,Recipes",
            "fields": "Items.Name,Recipes.Result",
            "where": "Items.Level > 5",
            "join_on": "Items.Name=Recipes.Result",
            "order_by": "Items.Name",
        }

    def test_pseudo_query(self):
        params = CargoQueryParameters(tables=["Items"], fields=["Name"], where="Level > 5", limit=10)
        assert params.pseudo_query() == "SELECT Name FROM Items WHERE Level > 5 OFFSET 0 FETCH 10 ROWS ONLY"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"tables": [], "fields": ["Name"]},
            {"tables": ["Items"], "fields": []},
            {"tables": ["Items"], "fields": ["  "]},
            {"tables": ["Items"], "fields": ["Name"], "limit": 0},
            {"tables": ["Items"], "fields": ["Name"], "offset": -1},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            CargoQueryParameters(**kwargs)


class TestCargoEnumeration:
    """Test offset pagination over cargoquery."""

    @pytest.mark.asyncio
    async def test_enumerates_until_short_page(self):
        requests = []
        site = make_site(rows_handler(120, requests))
        params = CargoQueryParameters(tables=["Items"], fields=["Name", "Level"], limit=50)

        rows = [row async for row in enum_cargo_rows(site, params)]

        assert [r["Name"] for r in rows] == [f"Item {i}" for i in range(120)]
        assert [r["offset"] for r in requests] == ["0", "50", "100"]
        assert {r["limit"] for r in requests} == {"50"}

    @pytest.mark.asyncio
    async def test_exact_multiple_needs_one_empty_page(self):
        requests = []
        site = make_site(rows_handler(100, requests))
        params = CargoQueryParameters(tables=["Items"], fields=["Name"], limit=50)

        rows = [row async for row in enum_cargo_rows(site, params)]

        assert len(rows) == 100
        assert [r["offset"] for r in requests] == ["0", "50", "100"]

    @pytest.mark.asyncio
    async def test_starts_at_offset_with_page_size(self):
        requests = []
        site = make_site(rows_handler(30, requests))
        params = CargoQueryParameters(tables=["Items"], fields=["Name"], offset=20)

        rows = [row async for row in enum_cargo_rows(site, params, page_size=5)]

        assert [r["Name"] for r in rows] == [f"Item {i}" for i in range(20, 30)]
        assert [r["offset"] for r in requests] == ["20", "25", "30"]

    @pytest.mark.asyncio
    async def test_missing_rows_node_is_malformed(self):
        async def post(url, data=None, **kwargs):
            if data.get("meta") == "userinfo":
                return {"query": {"userinfo": {"id": 1, "name": "Example"}}}
            return {"batchcomplete": True}

        site = make_site(post)
        params = CargoQueryParameters(tables=["Items"], fields=["Name"])

        with pytest.raises(MalformedResponseError):
            async for _ in enum_cargo_rows(site, params):
                pass


class TestExecuteCargoQuery:
    """Test single-page queries."""

    @pytest.mark.asyncio
    async def test_single_page(self):
        requests = []
        site = make_site(rows_handler(100, requests))
        params = CargoQueryParameters(tables=["Items"], fields=["Name"], limit=10, offset=5)

        rows = await execute_cargo_query(site, params)

        assert [r["Name"] for r in rows] == [f"Item {i}" for i in range(5, 15)]
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_missing_rows_node_returns_empty(self):
        async def post(url, data=None, **kwargs):
            return {}

        site = make_site(post)
        params = CargoQueryParameters(tables=["Items"], fields=["Name"])

        assert await execute_cargo_query(site, params) == []
