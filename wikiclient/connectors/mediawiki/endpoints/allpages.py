"""``list=allpages`` endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import WikiPageStub
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    return list_query("allpages", "ap", params)


SPEC = ListEndpointSpec(
    id="allpages",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "allpages"),
    limit_param="aplimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = WikiPageStub
