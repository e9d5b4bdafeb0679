"""``list=backlinks`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import WikiPageStub
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for backlinks."""
    if not params.get("title") and not params.get("pageid") and not params.get("bltitle"):
        raise ValueError("backlinks requires a target 'title' or 'pageid'")
    return list_query("backlinks", "bl", params)


SPEC = ListEndpointSpec(
    id="backlinks",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "backlinks"),
    limit_param="bllimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = WikiPageStub
