"""Discussion threads (``DiscussionThread::getThreads``) endpoint definition and adapter.

Pages are zero-based; the response links to the following page through
``_links.next``, whose ``page`` query argument is the next page number.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs, urlsplit

from wikiclient.connectors.mediawiki.endpoints.common import ModelAdapter
from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import MalformedResponseError
from wikiclient.models import DiscussionThread
from wikiclient.runtime.paging import ListEndpointSpec

LIST_KIND = "wikia:discussion_threads"


def build_query(params: Mapping[str, Any]) -> dict[str, Any]:
    query: dict[str, Any] = {
        "controller": "DiscussionThread",
        "method": "getThreads",
        "page": 0,
    }
    if params.get("forum_id"):
        query["forumId"] = params["forum_id"]
    if params.get("sort_key"):
        query["sortKey"] = params["sort_key"]
    return query


def next_page(document: Any) -> int | None:
    """Page number of the ``_links.next`` link, or None without one."""
    if not isinstance(document, Mapping):
        return None
    links = document.get("_links")
    if not isinstance(links, Mapping):
        return None
    link = links.get("next")
    if isinstance(link, list):
        link = link[0] if link else None
    if not isinstance(link, Mapping) or not link.get("href"):
        return None
    values = parse_qs(urlsplit(link["href"]).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError as e:
        raise MalformedResponseError(
            f"Page number {values[0]!r} in the next link is not an integer", list_kind=LIST_KIND
        ) from e


def has_embedded(document: Any) -> bool:
    return isinstance(document, Mapping) and "_embedded" in document


SPEC = ListEndpointSpec(
    id=LIST_KIND,
    convention=PaginationConvention.PAGE_NUMBER,
    build_query=build_query,
    items_path=("_embedded", "threads"),
    limit_param="limit",
    page_param="page",
    next_page=next_page,
    is_empty_signal=has_embedded,
)


class Adapter(ModelAdapter):
    model = DiscussionThread
