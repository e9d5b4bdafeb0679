"""Unit tests for RESTTransport."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from wikiclient.runtime.rest import RESTTransport


@pytest.fixture
def http():
    client = MagicMock()
    client.get = AsyncMock(return_value={"ok": True})
    client.post = AsyncMock(return_value={"ok": True})
    client.close = AsyncMock()
    return client


class TestRESTTransport:
    """Test URL building and header merging."""

    @pytest.mark.asyncio
    async def test_get_prefixes_base_url(self, http):
        transport = RESTTransport("https://wiki.example.org/api/v1", http)

        result = await transport.get("/Search/List", params={"query": "x"})

        assert result == {"ok": True}
        http.get.assert_awaited_once_with(
            "https://wiki.example.org/api/v1/Search/List",
            params={"query": "x"},
            headers=None,
            error_body=False,
        )

    @pytest.mark.asyncio
    async def test_absolute_path_used_as_is(self, http):
        transport = RESTTransport("https://wiki.example.org/api/v1", http)
        await transport.get("https://other.example.org/wikia.php")
        assert http.get.call_args.args[0] == "https://other.example.org/wikia.php"

    @pytest.mark.asyncio
    async def test_default_headers_merged(self, http):
        transport = RESTTransport("https://wiki.example.org/w/api.php", http, headers={"User-Agent": "ua"})

        await transport.post("", data={"action": "query"}, headers={"X-Extra": "1"})

        kwargs = http.post.call_args.kwargs
        assert http.post.call_args.args[0] == "https://wiki.example.org/w/api.php"
        assert kwargs["data"] == {"action": "query"}
        assert kwargs["headers"] == {"User-Agent": "ua", "X-Extra": "1"}

    @pytest.mark.asyncio
    async def test_error_body_passed_through(self, http):
        transport = RESTTransport("https://wiki.example.org", http)
        await transport.get("/wikia.php", error_body=True)
        assert http.get.call_args.kwargs["error_body"] is True

    @pytest.mark.asyncio
    async def test_close_closes_http_client(self, http):
        transport = RESTTransport("https://wiki.example.org", http)
        await transport.close()
        http.close.assert_awaited_once()
        assert transport.http is http
