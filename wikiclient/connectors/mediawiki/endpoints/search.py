"""``list=search`` endpoint definition and adapter.

Full-text search continues with ``sroffset`` inside the ``continue``
object, so it is still a TOKEN list from the client's point of view.
"""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import SearchResultItem
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for search."""
    if not params.get("search") and not params.get("srsearch"):
        raise ValueError("search requires a non-empty 'search' expression")
    return list_query("search", "sr", params)


SPEC = ListEndpointSpec(
    id="search",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "search"),
    limit_param="srlimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = SearchResultItem
