"""Unit tests for Wikibase entity lookup."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from wikiclient.connectors.mediawiki import WikiSite
from wikiclient.connectors.wikibase import fetch_entities
from wikiclient.core.exceptions import UnexpectedDataError

API = "https://www.wikidata.org/w/api.php"


def entity(entity_id, label=None, **extra):
    node = {"type": "item", "id": entity_id, **extra}
    if label is not None:
        node["labels"] = {"en": {"language": "en", "value": label}}
    return node


class FakeWikibase:
    def __init__(self, respond):
        self.respond = respond
        self.requests = []
        self.http = MagicMock()
        self.http.post = AsyncMock(side_effect=self.post)

    async def post(self, url, data=None, **kwargs):
        if data.get("meta") == "userinfo":
            return {"query": {"userinfo": {"id": 1, "name": "Example", "rights": ["read"]}}}
        self.requests.append(dict(data))
        return self.respond(data)


@pytest.fixture
def wikibase():
    def respond(data):
        ids = data["ids"].split("|")
        return {"entities": {i.upper(): entity(i.upper(), f"Label {i.upper()}") for i in ids}}

    return FakeWikibase(respond)


class TestFetchEntities:
    """Test wbgetentities lookups."""

    @pytest.mark.asyncio
    async def test_results_in_input_order(self, wikibase):
        site = WikiSite(API, http=wikibase.http)

        entities = await fetch_entities(site, ["Q42", "P31", "Q1"], languages=["en"])

        assert [e.id for e in entities] == ["Q42", "P31", "Q1"]
        assert entities[0].label("en") == "Label Q42"
        sent = wikibase.requests[0]
        assert sent["action"] == "wbgetentities"
        assert sent["ids"] == "Q42|P31|Q1"
        assert sent["languages"] == "en"
        assert sent["redirects"] == "yes"

    @pytest.mark.asyncio
    async def test_case_insensitive_ids(self, wikibase):
        site = WikiSite(API, http=wikibase.http)
        entities = await fetch_entities(site, ["q42"])
        assert entities[0].id == "Q42"

    @pytest.mark.asyncio
    async def test_batched_by_multivalue_limit(self, wikibase):
        site = WikiSite(API, http=wikibase.http)
        ids = [f"Q{i}" for i in range(1, 121)]

        entities = await fetch_entities(site, ids)

        assert [e.id for e in entities] == ids
        assert [len(r["ids"].split("|")) for r in wikibase.requests] == [50, 50, 20]

    @pytest.mark.asyncio
    async def test_redirected_entity(self):
        fake = FakeWikibase(
            lambda data: {"entities": {"Q2": entity("Q2", "Earth", redirects={"from": "Q1000", "to": "Q2"})}}
        )
        site = WikiSite(API, http=fake.http)

        entities = await fetch_entities(site, ["Q1000"])

        assert entities[0].id == "Q2"
        assert entities[0].label("en") == "Earth"

    @pytest.mark.asyncio
    async def test_missing_entity_flagged(self):
        fake = FakeWikibase(lambda data: {"entities": {"Q999999999": {"id": "Q999999999", "missing": ""}}})
        site = WikiSite(API, http=fake.http)

        entities = await fetch_entities(site, ["Q999999999"])

        assert entities[0].missing is True

    @pytest.mark.asyncio
    async def test_absent_entity_raises(self):
        fake = FakeWikibase(lambda data: {"entities": {}})
        site = WikiSite(API, http=fake.http)

        with pytest.raises(UnexpectedDataError):
            await fetch_entities(site, ["Q5"])

    @pytest.mark.asyncio
    async def test_response_without_entities(self):
        fake = FakeWikibase(lambda data: {"success": 1})
        site = WikiSite(API, http=fake.http)

        with pytest.raises(UnexpectedDataError):
            await fetch_entities(site, ["Q5"])

    @pytest.mark.asyncio
    async def test_empty_input(self, wikibase):
        site = WikiSite(API, http=wikibase.http)
        assert await fetch_entities(site, []) == []
        wikibase.http.post.assert_not_awaited()
