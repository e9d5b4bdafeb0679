"""``list=logevents`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import LogEventItem
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query

DEFAULT_PROPS = ("ids", "title", "type", "user", "timestamp", "comment", "details")


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    query = list_query("logevents", "le", params)
    query.setdefault("leprop", "|".join(DEFAULT_PROPS))
    return query


SPEC = ListEndpointSpec(
    id="logevents",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "logevents"),
    limit_param="lelimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = LogEventItem
