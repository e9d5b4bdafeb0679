"""MediaWiki site.

Architecture:
    ``WikiSite`` is the ``TransportGateway`` of a MediaWiki ``api.php``
    endpoint. It owns the REST transport, the response parser, the request
    throttler and a ``ListEnumerator`` that drives list enumerations through
    the site itself.

    Two request paths exist:
        - ``invoke`` sends one request with no retry and no throttling; the
          enumeration engine wraps it with both, per page
        - ``execute`` is for one-off requests (account info, page lookups)
          and applies the same throttler and retry policy itself

Design Decisions:
    - Account info is fetched lazily and cached; the list limit and the
      multi-value limit follow from its privilege level
    - Every request carries ``format=json``, ``formatversion=2`` and
      ``maxlag``; requests are sent as form-encoded POSTs
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from functools import partial
from typing import Any

from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.core.protocols import Document
from wikiclient.models import AccountInfo, Revision, SiteInfo, WikiPage
from wikiclient.runtime.paging import (
    EnumerationContext,
    EnumerationSession,
    ListEndpointSpec,
    ListEnumerator,
    ListRequestDescriptor,
    Throttler,
    partition,
)
from wikiclient.runtime.rest import HTTPClient, RESTTransport
from wikiclient.utils.retry import retry_async

from .config import (
    DEFAULT_PAGE_SIZE,
    LIST_LIMITS,
    MAX_REDIRECT_HOPS,
    MULTIVALUE_LIMITS,
    RESPONSE_FORMAT,
    SiteOptions,
)
from .endpoints import GENERATOR_PREFIX, get_endpoint_adapter, get_endpoint_spec
from .parser import DEFAULT_PARSER, MediaWikiResponseParser

logger = logging.getLogger(__name__)

PAGE_CONTENT_PROPS = ("ids", "timestamp", "flags", "comment", "user", "size", "sha1", "content")


def _stringify(value: Any) -> str:
    if value is True:
        return "1"
    return str(value)


class WikiSite:
    """A MediaWiki site reachable through its ``api.php`` endpoint."""

    def __init__(
        self,
        api_endpoint: str | None = None,
        *,
        options: SiteOptions | None = None,
        http: HTTPClient | None = None,
        parser: MediaWikiResponseParser | None = None,
        **overrides: Any,
    ) -> None:
        """Initialize site.

        Args:
            api_endpoint: URL of the site's api.php
            options: Site options; keyword ``overrides`` replace its fields
            http: HTTP client to use (a new one is created when omitted)
            parser: Response parser (defaults to ``MediaWikiResponseParser()``)
            **overrides: Any ``SiteOptions`` field
        """
        if options is None:
            options = SiteOptions(api_endpoint=api_endpoint or "", **overrides)
        else:
            if api_endpoint is not None:
                overrides["api_endpoint"] = api_endpoint
            options = dataclasses.replace(options, **overrides)
        self.options = options
        self._transport = RESTTransport(
            options.api_endpoint,
            http,
            headers={"User-Agent": options.user_agent},
            timeout=options.timeout,
        )
        self._parser = parser or DEFAULT_PARSER
        self.throttler = Throttler(options.throttle_delay)
        self._enumerator = ListEnumerator(
            self,
            throttler=self.throttler,
            retry_policy=options.retry_policy,
            max_empty_pages=options.max_empty_pages,
        )
        self._account_info: AccountInfo | None = None
        self._site_info: SiteInfo | None = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.options.api_endpoint}>"

    @property
    def api_endpoint(self) -> str:
        return self.options.api_endpoint

    @property
    def account_info(self) -> AccountInfo | None:
        """Cached account info; None until fetched."""
        return self._account_info

    @property
    def site_info(self) -> SiteInfo | None:
        """Cached site info; None until fetched."""
        return self._site_info

    # Transport gateway

    async def invoke(self, params: Mapping[str, Any]) -> Document:
        """Send one api.php request and return the validated response."""
        request: dict[str, Any] = dict(RESPONSE_FORMAT)
        if self.options.maxlag is not None:
            request["maxlag"] = self.options.maxlag
        request.update(params)
        # api.php treats any present boolean parameter as true
        data = {k: _stringify(v) for k, v in request.items() if v is not None and v is not False}
        logger.debug("Invoking %s action=%s", self.api_endpoint, data.get("action"))
        document = await self._transport.post("", data=data)
        return self._parser.parse(document)

    async def max_batch_size(self) -> int:
        """Items per list request allowed for the current account."""
        info = await self.ensure_account_info()
        return LIST_LIMITS[info.privilege_level]

    async def max_multivalue_size(self) -> int:
        """Values per multi-value parameter allowed for the current account."""
        info = await self.ensure_account_info()
        return MULTIVALUE_LIMITS[info.privilege_level]

    async def execute(self, params: Mapping[str, Any]) -> Document:
        """Send one throttled request, retrying per the site's retry policy."""
        return await retry_async(partial(self._throttled_invoke, params), policy=self.options.retry_policy)

    async def _throttled_invoke(self, params: Mapping[str, Any]) -> Document:
        async with self.throttler.acquire(str(params.get("action", "request"))):
            return await self.invoke(params)

    # Site metadata

    async def refresh_account_info(self) -> AccountInfo:
        """Fetch the current account's groups and rights."""
        document = await self.execute(
            {"action": "query", "meta": "userinfo", "uiprop": "groups|rights"}
        )
        node = _query_node(document).get("userinfo")
        if not isinstance(node, Mapping):
            raise UnexpectedDataError("meta=userinfo response lacks query.userinfo")
        self._account_info = AccountInfo.model_validate(node)
        logger.debug(
            "Account %r on %s has privilege level %s",
            self._account_info.name,
            self.api_endpoint,
            self._account_info.privilege_level,
        )
        return self._account_info

    async def ensure_account_info(self) -> AccountInfo:
        if self._account_info is None:
            return await self.refresh_account_info()
        return self._account_info

    async def fetch_site_info(self) -> SiteInfo:
        """Fetch general site information."""
        document = await self.execute({"action": "query", "meta": "siteinfo", "siprop": "general"})
        node = _query_node(document).get("general")
        if not isinstance(node, Mapping):
            raise UnexpectedDataError("meta=siteinfo response lacks query.general")
        self._site_info = SiteInfo.model_validate(node)
        return self._site_info

    # Enumeration

    def _resolve_spec(self, list_kind: str, spec: ListEndpointSpec | None) -> ListEndpointSpec:
        spec = spec or get_endpoint_spec(list_kind)
        if spec is None:
            raise ValueError(f"Unsupported list kind: {list_kind!r}")
        return spec

    def session(
        self,
        descriptor: ListRequestDescriptor,
        *,
        context: EnumerationContext | None = None,
        spec: ListEndpointSpec | None = None,
    ) -> EnumerationSession:
        """Create an enumeration session, e.g. to inspect its diagnostics."""
        return self._enumerator.session(
            descriptor, self._resolve_spec(descriptor.list_kind, spec), context=context
        )

    def enumerate_raw(
        self,
        descriptor: ListRequestDescriptor,
        *,
        context: EnumerationContext | None = None,
        spec: ListEndpointSpec | None = None,
    ) -> AsyncIterator[Any]:
        """Lazily enumerate the raw item records of ``descriptor``."""
        return aiter(self.session(descriptor, context=context, spec=spec))

    async def list_items(
        self,
        list_kind: str,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        context: EnumerationContext | None = None,
        **params: Any,
    ) -> AsyncIterator[Any]:
        """Enumerate ``list_kind`` and yield parsed models.

        Example:
            >>> async for member in site.list_items("categorymembers", title="Category:Cats"):
            ...     print(member.title)
        """
        adapter_type = get_endpoint_adapter(list_kind)
        if adapter_type is None:
            raise ValueError(f"Unsupported list kind: {list_kind!r}")
        adapter = adapter_type()
        descriptor = ListRequestDescriptor(list_kind, params, page_size)
        async for raw in self.enumerate_raw(descriptor, context=context):
            yield adapter.parse(raw, descriptor.parameters)

    def enum_pages(
        self,
        generator: str,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        context: EnumerationContext | None = None,
        **params: Any,
    ) -> AsyncIterator[WikiPage]:
        """Enumerate the pages produced by ``generator=<generator>``."""
        return self.list_items(
            f"{GENERATOR_PREFIX}{generator}", page_size=page_size, context=context, **params
        )

    # Page lookup

    async def fetch_pages(
        self,
        titles: Iterable[str],
        *,
        resolve_redirects: bool = True,
        content: bool = False,
    ) -> list[WikiPage]:
        """Fetch page information for ``titles``, in input order.

        Titles are sent in batches of ``max_multivalue_size()``. Each result
        follows title normalization and, with ``resolve_redirects``, the whole
        redirect chain; ``redirect_path`` records the titles passed through.

        Raises:
            UnexpectedDataError: A circular redirect, or a title missing from
                the response
        """
        titles = list(titles)
        if not titles:
            return []
        params: dict[str, Any] = {"action": "query", "prop": "info"}
        if resolve_redirects:
            params["redirects"] = True
        if content:
            params["prop"] = "info|revisions"
            params["rvprop"] = "|".join(PAGE_CONTENT_PROPS)
            params["rvslots"] = "main"

        results: list[WikiPage] = []
        for chunk in partition(titles, await self.max_multivalue_size()):
            logger.debug("Fetching %d pages from %s", len(chunk), self.api_endpoint)
            document = await self.execute({**params, "titles": "|".join(chunk)})
            results.extend(_resolve_pages(chunk, _query_node(document)))
        return results

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> WikiSite:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _query_node(document: Any) -> Mapping[str, Any]:
    query = document.get("query") if isinstance(document, Mapping) else None
    if not isinstance(query, Mapping):
        raise UnexpectedDataError("Response lacks the 'query' node")
    return query


def _pairs(nodes: Any) -> dict[str, str]:
    return {n["from"]: n["to"] for n in nodes or () if isinstance(n, Mapping)}


def _resolve_pages(titles: list[str], query: Mapping[str, Any]) -> list[WikiPage]:
    normalized = _pairs(query.get("normalized"))
    redirects = _pairs(query.get("redirects"))
    pages = query.get("pages") or []
    if isinstance(pages, Mapping):
        pages = list(pages.values())
    by_title = {p["title"]: p for p in pages if isinstance(p, Mapping) and "title" in p}

    results = []
    for requested in titles:
        title = normalized.get(requested, requested)
        trace: list[str] = []
        while title in redirects:
            trace.append(title)
            target = redirects[title]
            if target in trace or len(trace) > MAX_REDIRECT_HOPS:
                raise UnexpectedDataError(
                    f"Cannot resolve circular redirect: {' -> '.join(trace + [target])}"
                )
            title = target
        node = by_title.get(title)
        if node is None:
            raise UnexpectedDataError(f"Page {requested!r} is missing from the response")
        results.append(page_from_node(node, redirect_path=tuple(trace)))
    return results


def page_from_node(node: Mapping[str, Any], redirect_path: tuple[str, ...] = ()) -> WikiPage:
    """Build a WikiPage from a ``query.pages`` node."""
    data = dict(node)
    revisions = data.pop("revisions", None)
    if revisions:
        data["last_revision"] = Revision.model_validate(
            {**revisions[0], "pageid": node.get("pageid"), "title": node.get("title")}
        )
    data["redirect_path"] = redirect_path
    return WikiPage.model_validate(data)
