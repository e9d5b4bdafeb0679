"""``list=recentchanges`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import RecentChangeItem
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query

DEFAULT_PROPS = ("title", "ids", "sizes", "flags", "user", "timestamp", "comment")


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for recentchanges, requesting the model's fields."""
    query = list_query("recentchanges", "rc", params)
    query.setdefault("rcprop", "|".join(DEFAULT_PROPS))
    return query


SPEC = ListEndpointSpec(
    id="recentchanges",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "recentchanges"),
    limit_param="rclimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = RecentChangeItem
