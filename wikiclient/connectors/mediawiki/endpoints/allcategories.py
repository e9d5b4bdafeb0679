"""``list=allcategories`` endpoint definition and adapter.

Items only carry the category name; the adapter turns them into page stubs
in the Category namespace.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.models import WikiPageStub
from wikiclient.runtime.paging import ListEndpointSpec

from .common import is_batch_complete, list_query

CATEGORY_NAMESPACE = 14


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    return list_query("allcategories", "ac", params)


SPEC = ListEndpointSpec(
    id="allcategories",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "allcategories"),
    limit_param="aclimit",
    is_empty_signal=is_batch_complete,
)


class Adapter:
    """Adapter for allcategories items."""

    def parse(self, raw: Any, params: Mapping[str, Any]) -> WikiPageStub:
        if not isinstance(raw, Mapping):
            raise UnexpectedDataError(f"Invalid allcategories item: {raw!r}")
        # formatversion=1 puts the name under "*"
        name = raw.get("category", raw.get("*"))
        if not name:
            raise UnexpectedDataError(f"allcategories item without a name: {raw!r}")
        return WikiPageStub(title=f"Category:{name}", namespace_id=CATEGORY_NAMESPACE)
