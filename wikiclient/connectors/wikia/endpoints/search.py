"""Local wiki search (``/Search/List``) endpoint definition and adapter.

Results come in numbered batches; the response reports ``batches`` and
``currentBatch``, and the next batch number is requested until the last
one has been read.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wikiclient.connectors.mediawiki.endpoints.common import ModelAdapter
from wikiclient.core.enums import PaginationConvention
from wikiclient.models import LocalWikiSearchResultItem
from wikiclient.runtime.paging import ListEndpointSpec

from ..config import SEARCH_DEFAULT_MIN_QUALITY, SEARCH_DEFAULT_NAMESPACES, SEARCH_RANKINGS

LIST_KIND = "wikia:search"


def build_query(params: Mapping[str, Any]) -> dict[str, Any]:
    """Build query parameters for the first search batch."""
    query_text = params.get("query")
    if not query_text:
        raise ValueError("search requires a non-empty 'query'")
    rank = params.get("rank", "default")
    if rank not in SEARCH_RANKINGS:
        raise ValueError(f"Unknown search ranking {rank!r}")
    quality = int(params.get("min_article_quality", SEARCH_DEFAULT_MIN_QUALITY))
    if not 0 <= quality <= 99:
        raise ValueError("min_article_quality must be in the range 0-99")
    query: dict[str, Any] = {
        "query": query_text,
        "type": "articles",
        "rank": rank,
        "minArticleQuality": quality,
        "batch": 1,
    }
    namespaces = params.get("namespaces", SEARCH_DEFAULT_NAMESPACES)
    if namespaces:
        query["namespaces"] = ",".join(str(ns) for ns in namespaces)
    return query


def next_batch(document: Any) -> int | None:
    """Next batch number, or None after the last batch."""
    if not isinstance(document, Mapping):
        return None
    batches = document.get("batches")
    current = document.get("currentBatch")
    if batches is None or current is None:
        return None
    if int(current) >= int(batches):
        return None
    return int(current) + 1


def is_no_results(document: Any) -> bool:
    return isinstance(document, Mapping) and document.get("batches") == 0


SPEC = ListEndpointSpec(
    id=LIST_KIND,
    convention=PaginationConvention.PAGE_NUMBER,
    build_query=build_query,
    items_path=("items",),
    limit_param="limit",
    page_param="batch",
    next_page=next_batch,
    is_empty_signal=is_no_results,
)


class Adapter(ModelAdapter):
    model = LocalWikiSearchResultItem
