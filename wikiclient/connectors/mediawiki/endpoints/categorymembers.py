"""``list=categorymembers`` endpoint definition and adapter.

Enumerates the members of one category. Parameters use the module's
names without the ``cm`` prefix (``title``, ``namespace``, ``type``,
``sort``, ``dir``...).
"""

from __future__ import annotations

from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.models import WikiPageStub
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, list_query


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for categorymembers."""
    if not params.get("title") and not params.get("pageid") and not params.get("cmtitle"):
        raise ValueError("categorymembers requires a category 'title' or 'pageid'")
    return list_query("categorymembers", "cm", params)


SPEC = ListEndpointSpec(
    id="categorymembers",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    items_path=("query", "categorymembers"),
    limit_param="cmlimit",
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    """Adapter for category members."""

    model = WikiPageStub
