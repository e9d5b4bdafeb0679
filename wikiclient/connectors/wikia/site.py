"""Wikia/FANDOM site.

``WikiaSite`` is a ``WikiSite`` with two more entry points besides
api.php: the Wikia REST API (``/api/v1``) and Nirvana (``wikia.php``).
List enumerations over those entry points run on the same enumeration
engine, through a small gateway per entry point that shares the site's
throttler and retry policy.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Mapping
from typing import Any

from wikiclient.connectors.mediawiki import WikiSite
from wikiclient.core.exceptions import WikiaApiError
from wikiclient.core.protocols import Document
from wikiclient.models import DiscussionThread, LocalWikiSearchResultItem
from wikiclient.runtime.paging import (
    EnumerationContext,
    ListEndpointSpec,
    ListEnumerator,
    ListRequestDescriptor,
)

from .config import (
    DISCUSSION_DEFAULT_PAGE_SIZE,
    DISCUSSION_MAX_LIMIT,
    NIRVANA_PATH,
    SEARCH_DEFAULT_MIN_QUALITY,
    SEARCH_DEFAULT_NAMESPACES,
    SEARCH_DEFAULT_PAGE_SIZE,
    SEARCH_MAX_LIMIT,
    WIKIA_API_PATH,
    site_root,
)
from .endpoints import DISCUSSION_THREADS, LOCAL_SEARCH, get_endpoint_adapter, get_endpoint_spec
from .parser import NOT_FOUND_ERROR, WikiaResponseParser

logger = logging.getLogger(__name__)


class WikiaApiGateway:
    """Transport gateway over one Wikia entry point."""

    def __init__(self, invoke: Callable[[Mapping[str, Any]], Awaitable[Document]], max_batch_size: int) -> None:
        self._invoke = invoke
        self._max_batch_size = max_batch_size

    async def invoke(self, params: Mapping[str, Any]) -> Document:
        return await self._invoke(params)

    async def max_batch_size(self) -> int:
        return self._max_batch_size


class WikiaSite(WikiSite):
    """A Wikia/FANDOM wiki."""

    def __init__(
        self,
        api_endpoint: str | None = None,
        *,
        wikia_api_root: str | None = None,
        nirvana_endpoint: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize site.

        Args:
            api_endpoint: URL of the site's api.php
            wikia_api_root: Wikia REST API root (defaults to ``<root>/api/v1``)
            nirvana_endpoint: Nirvana URL (defaults to ``<root>/wikia.php``)
            **kwargs: Passed to ``WikiSite``
        """
        super().__init__(api_endpoint, **kwargs)
        root = site_root(self.api_endpoint)
        self.wikia_api_root = wikia_api_root or f"{root}{WIKIA_API_PATH}"
        self.nirvana_endpoint = nirvana_endpoint or f"{root}{NIRVANA_PATH}"
        self._wikia_parser = WikiaResponseParser()

    async def invoke_wikia_api(self, path: str, params: Mapping[str, Any] | None = None) -> Document:
        """GET ``path`` under the Wikia REST API root."""
        logger.debug("Invoking Wikia API v1: %s", path)
        document = await self._transport.get(
            f"{self.wikia_api_root}{path}", params=_query_string(params), error_body=True
        )
        return self._wikia_parser.parse(document)

    async def invoke_nirvana(self, params: Mapping[str, Any]) -> Document:
        """GET the Nirvana entry point (``controller``/``method`` in ``params``)."""
        logger.debug("Invoking Nirvana API: %s::%s", params.get("controller"), params.get("method"))
        document = await self._transport.get(
            self.nirvana_endpoint, params=_query_string(params), error_body=True
        )
        return self._wikia_parser.parse(document)

    async def _invoke_search(self, params: Mapping[str, Any]) -> Document:
        try:
            return await self.invoke_wikia_api("/Search/List", params)
        except WikiaApiError as e:
            # The search API reports "no results" as a not-found error
            if e.error_code == NOT_FOUND_ERROR:
                return {"batches": 0, "items": []}
            raise

    def _enumerate(
        self,
        gateway: WikiaApiGateway,
        spec: ListEndpointSpec,
        params: Mapping[str, Any],
        page_size: int,
        context: EnumerationContext | None,
    ) -> AsyncIterator[Any]:
        enumerator = ListEnumerator(
            gateway,
            throttler=self.throttler,
            retry_policy=self.options.retry_policy,
            max_empty_pages=self.options.max_empty_pages,
        )
        descriptor = ListRequestDescriptor(spec.id, params, page_size)
        return enumerator.enumerate(descriptor, spec, context=context)

    async def search_local(
        self,
        query: str,
        *,
        rank: str = "default",
        namespaces: Iterable[int] | None = SEARCH_DEFAULT_NAMESPACES,
        min_article_quality: int = SEARCH_DEFAULT_MIN_QUALITY,
        page_size: int = SEARCH_DEFAULT_PAGE_SIZE,
        context: EnumerationContext | None = None,
    ) -> AsyncIterator[LocalWikiSearchResultItem]:
        """Search the local wiki through the Wikia search API."""
        params = {
            "query": query,
            "rank": rank,
            "namespaces": tuple(namespaces or ()),
            "min_article_quality": min_article_quality,
        }
        adapter = get_endpoint_adapter(LOCAL_SEARCH)()
        gateway = WikiaApiGateway(self._invoke_search, SEARCH_MAX_LIMIT)
        async for raw in self._enumerate(gateway, get_endpoint_spec(LOCAL_SEARCH), params, page_size, context):
            yield adapter.parse(raw, params)

    async def discussion_threads(
        self,
        forum_id: str | None = None,
        *,
        sort_key: str | None = None,
        page_size: int = DISCUSSION_DEFAULT_PAGE_SIZE,
        context: EnumerationContext | None = None,
    ) -> AsyncIterator[DiscussionThread]:
        """Enumerate the threads of the discussion board, or of one forum."""
        params = {"forum_id": forum_id, "sort_key": sort_key}
        adapter = get_endpoint_adapter(DISCUSSION_THREADS)()
        gateway = WikiaApiGateway(self.invoke_nirvana, DISCUSSION_MAX_LIMIT)
        spec = get_endpoint_spec(DISCUSSION_THREADS)
        async for raw in self._enumerate(gateway, spec, params, page_size, context):
            yield adapter.parse(raw, params)


def _query_string(params: Mapping[str, Any] | None) -> dict[str, str] | None:
    if params is None:
        return None
    return {k: str(v) for k, v in params.items() if v is not None}
