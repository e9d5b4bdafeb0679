"""Unit tests for the API result models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from wikiclient.core.enums import PrivilegeLevel
from wikiclient.models import (
    AccountInfo,
    DiscussionThread,
    LogEventItem,
    Revision,
    SiteInfo,
    WbEntity,
    WikiPage,
    WikiPageStub,
)


class TestAccountInfo:
    """Test privilege level derivation."""

    def test_anonymous(self):
        info = AccountInfo.model_validate({"id": 0, "name": "127.0.0.1", "anon": True})
        assert info.anonymous
        assert info.privilege_level == PrivilegeLevel.ANONYMOUS

    def test_user(self):
        info = AccountInfo.model_validate({"id": 3, "name": "Alice", "groups": ["user"], "rights": ["edit"]})
        assert info.is_in_group("user")
        assert info.has_right("edit")
        assert info.privilege_level == PrivilegeLevel.USER

    def test_high_limits(self):
        info = AccountInfo.model_validate({"id": 4, "name": "Bot", "rights": ["apihighlimits"]})
        assert info.privilege_level == PrivilegeLevel.HIGH_LIMITS

    def test_frozen(self):
        info = AccountInfo(name="Alice")
        with pytest.raises(ValidationError):
            info.name = "Bob"


class TestPages:
    """Test page models."""

    def test_stub_aliases(self):
        stub = WikiPageStub.model_validate({"pageid": 7, "ns": 14, "title": "Category:Cats"})
        assert stub.page_id == 7
        assert stub.namespace_id == 14
        assert stub.exists

    def test_missing_page(self):
        stub = WikiPageStub.model_validate({"title": "Nope", "missing": True, "ns": 0})
        assert not stub.exists

    def test_title_required(self):
        with pytest.raises(ValidationError):
            WikiPageStub.model_validate({"pageid": 1})

    def test_wiki_page_info(self):
        page = WikiPage.model_validate(
            {
                "pageid": 1,
                "title": "Main Page",
                "contentmodel": "wikitext",
                "pagelanguage": "en",
                "touched": "2024-03-01T12:00:00Z",
                "lastrevid": 99,
                "length": 512,
                "redirect": False,
            }
        )
        assert page.content_model == "wikitext"
        assert page.touched == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)
        assert page.content is None


class TestRevision:
    """Test revision parsing."""

    def test_legacy_content(self):
        rev = Revision.model_validate({"revid": 5, "content": "text", "minor": True})
        assert rev.content == "text"
        assert rev.minor

    def test_slot_content(self):
        rev = Revision.model_validate({"revid": 5, "slots": {"main": {"content": "slot text"}}})
        assert rev.content == "slot text"

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            Revision.model_validate({"revid": 5, "size": -1})


class TestSiteInfo:
    """Test site information helpers."""

    def test_article_url(self):
        info = SiteInfo.model_validate(
            {"sitename": "Example", "server": "https://wiki.example.org", "articlepath": "/wiki/$1"}
        )
        assert info.article_url("Main Page") == "https://wiki.example.org/wiki/Main_Page"

    def test_version(self):
        info = SiteInfo.model_validate({"sitename": "Example", "generator": "MediaWiki 1.39.5"})
        assert info.version == "1.39.5"


class TestLogEvent:
    def test_params(self):
        item = LogEventItem.model_validate(
            {"logid": 1, "type": "move", "action": "move", "params": {"target_title": "B"}}
        )
        assert item.params["target_title"] == "B"


class TestDiscussionThread:
    def test_flattened(self):
        thread = DiscussionThread.model_validate(
            {"id": 123, "title": "Hi", "createdBy": {"name": "Finn"}, "creationDate": {"epochSecond": 0}}
        )
        assert thread.id == "123"
        assert thread.created_by == "Finn"
        assert thread.created_at == datetime(1970, 1, 1, tzinfo=timezone.utc)


class TestWbEntity:
    def test_flattened_values(self):
        entity = WbEntity.model_validate(
            {
                "id": "Q42",
                "type": "item",
                "labels": {"en": {"language": "en", "value": "Douglas Adams"}},
                "descriptions": {"en": {"language": "en", "value": "English writer"}},
                "aliases": {"en": [{"language": "en", "value": "DNA"}]},
                "sitelinks": {"enwiki": {"site": "enwiki", "title": "Douglas Adams"}},
                "lastrevid": 1,
            }
        )
        assert entity.label("en") == "Douglas Adams"
        assert entity.label("fr") is None
        assert entity.descriptions["en"] == "English writer"
        assert entity.aliases["en"] == ["DNA"]
        assert entity.sitelinks["enwiki"] == "Douglas Adams"
        assert not entity.missing
