"""Unit tests for Flow board topic enumeration.

Tests focus on forward-link continuation and on resolving topic roots
through posts and revisions.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from wikiclient.connectors.flow import enum_topics
from wikiclient.connectors.flow.board import build_query, extract_topics, forward_tokens
from wikiclient.connectors.mediawiki import WikiSite
from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.models import FlowTopic

API = "https://wiki.example.org/api.php"
BOARD = "Talk:Sandbox"


def topiclist(ids, fwd_url=None):
    pagination = {"fwd": {"url": fwd_url, "title": "More"}} if fwd_url else []
    return {
        "roots": list(ids),
        "posts": {wid: [f"rev-{wid}"] for wid in ids},
        "revisions": {
            f"rev-{wid}": {
                "workflowId": wid,
                "articleTitle": f"Topic:{wid}",
                "revisionId": f"rev-{wid}",
                "content": {"content": f"About {wid}", "format": "wikitext"},
                "timestamp": "20171011054412",
                "last_updated": 1507700652000,
                "author": {"name": "Alice", "wiki": "examplewiki"},
                "replies": [f"reply-{wid}"],
            }
            for wid in ids
        },
        "links": {"pagination": pagination},
    }


def wrap(node):
    return {"flow": {"view-topiclist": {"result": {"topiclist": node}, "status": "ok"}}}


def board_handler(ids, requests):
    async def post(url, data=None, **kwargs):
        if data.get("meta") == "userinfo":
            return {"query": {"userinfo": {"id": 1, "name": "Example", "rights": ["read"]}}}
        requests.append(dict(data))
        limit = int(data["vtllimit"])
        start = ids.index(data["vtloffset-id"]) + 1 if "vtloffset-id" in data else 0
        chunk = ids[start:start + limit]
        fwd = None
        if start + limit < len(ids):
            fwd = (
                f"https://wiki.example.org/index.php?title={BOARD}"
                f"&topiclist_offset-id={chunk[-1]}&topiclist_offset-dir=fwd&topiclist_limit={limit}"
            )
        return wrap(topiclist(chunk, fwd))

    return post


def make_site(post):
    http = MagicMock()
    http.post = AsyncMock(side_effect=post)
    return WikiSite(API, http=http)


class TestTopicListParsing:
    """Test item and continuation extraction from view-topiclist results."""

    def test_build_query(self):
        query = build_query({"page": BOARD, "sort_by": "updated", "save_sort": False})
        assert query == {
            "action": "flow",
            "submodule": "view-topiclist",
            "page": BOARD,
            "vtlsortby": "updated",
            "vtlformat": "wikitext",
        }
        assert build_query({"page": BOARD, "save_sort": True})["vtlsavesortby"] is True

    def test_invalid_sort_order(self):
        with pytest.raises(ValueError):
            build_query({"page": BOARD, "sort_by": "oldest"})

    def test_topics_follow_roots_order(self):
        node = topiclist(["b", "a"])
        records = extract_topics(wrap(node))
        assert [r["workflowId"] for r in records] == ["b", "a"]

    def test_missing_topiclist(self):
        assert extract_topics({"flow": {}}) is None

    def test_root_without_post(self):
        node = topiclist(["a"])
        node["posts"] = {}
        with pytest.raises(UnexpectedDataError):
            extract_topics(wrap(node))

    def test_forward_tokens(self):
        url = "/index.php?topiclist_offset-id=s3x&topiclist_offset-dir=fwd&topiclist_limit=2&title=X"
        doc = wrap(topiclist(["a"], url))
        assert forward_tokens(doc) == {"vtloffset-id": "s3x", "vtloffset-dir": "fwd"}

    def test_empty_pagination_array_is_last_page(self):
        assert forward_tokens(wrap(topiclist(["a"]))) is None


class TestFlowTopic:
    def test_flattened_revision(self):
        topic = FlowTopic.model_validate(topiclist(["a"])["revisions"]["rev-a"])
        assert topic.workflow_id == "a"
        assert topic.title == "Topic:a"
        assert topic.topic_title == "About a"
        assert topic.author == "Alice"
        assert topic.timestamp == datetime(2017, 10, 11, 5, 44, 12, tzinfo=timezone.utc)
        assert topic.last_updated == datetime(2017, 10, 11, 5, 44, 12, tzinfo=timezone.utc)
        assert topic.reply_count == 1


class TestEnumTopics:
    """Test board enumeration across forward links."""

    @pytest.mark.asyncio
    async def test_follows_forward_links(self):
        ids = ["t1", "t2", "t3", "t4", "t5"]
        requests = []
        site = make_site(board_handler(ids, requests))

        topics = [t async for t in enum_topics(site, BOARD, page_size=2)]

        assert [t.workflow_id for t in topics] == ids
        assert len(requests) == 3
        assert "vtloffset-id" not in requests[0]
        assert requests[1]["vtloffset-id"] == "t2"
        assert requests[2]["vtloffset-id"] == "t4"
        assert all(r["vtllimit"] == "2" for r in requests)
        assert all(r["vtlsortby"] == "newest" for r in requests)

    @pytest.mark.asyncio
    async def test_empty_board(self):
        requests = []
        site = make_site(board_handler([], requests))

        assert [t async for t in enum_topics(site, BOARD)] == []
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_page_size_capped(self):
        requests = []
        site = make_site(board_handler(["t1"], requests))

        [t async for t in enum_topics(site, BOARD, page_size=500)]

        assert requests[0]["vtllimit"] == "100"
