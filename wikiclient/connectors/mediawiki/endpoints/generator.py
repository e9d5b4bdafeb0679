"""Page generator endpoint definitions.

Any list module that yields pages can drive ``generator=<name>``; the
response then carries full page nodes (``prop=info``) under
``query.pages`` instead of list items. Generator parameters take a ``g``
before the module prefix (``gcmtitle``, ``gaplimit``...).
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache, partial
from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import UnexpectedDataError
from wikiclient.models import WikiPage
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, prefixed

GENERATOR_PREFIX = "generator:"

# Module prefixes of the list modules usable as generators
GENERATOR_MODULE_PREFIXES = {
    "allpages": "ap",
    "allcategories": "ac",
    "backlinks": "bl",
    "categorymembers": "cm",
    "embeddedin": "ei",
    "search": "sr",
    "recentchanges": "rc",
}


def build_query(name: str, prefix: str, params: Mapping[str, Any]) -> dict[str, Any]:
    """Build query parameters for ``generator=name``."""
    query: dict[str, Any] = {
        "action": "query",
        "generator": name,
        "prop": "info",
        "continue": "",
    }
    query.update(prefixed(f"g{prefix}", params))
    return query


def sort_pages(document: Any) -> list[Any] | None:
    """Pages of ``query.pages`` in generator order when the server reports it."""
    if not isinstance(document, Mapping):
        return None
    query = document.get("query")
    if not isinstance(query, Mapping) or "pages" not in query:
        return None
    pages = query["pages"]
    if isinstance(pages, Mapping):
        pages = list(pages.values())
    if not isinstance(pages, list):
        raise UnexpectedDataError(f"Invalid query.pages node: {pages!r}")
    if all(isinstance(p, Mapping) and "index" in p for p in pages):
        pages = sorted(pages, key=lambda p: p["index"])
    return pages


@lru_cache(maxsize=None)
def generator_spec(name: str) -> ListEndpointSpec:
    """Endpoint spec for the page generator driven by list module ``name``.

    Raises:
        ValueError: ``name`` is not a known generator module
    """
    prefix = GENERATOR_MODULE_PREFIXES.get(name)
    if prefix is None:
        raise ValueError(f"Unknown generator module: {name!r}")
    return ListEndpointSpec(
        id=f"{GENERATOR_PREFIX}{name}",
        convention=PaginationConvention.TOKEN,
        build_query=partial(build_query, name, prefix),
        limit_param=f"g{prefix}limit",
        continuation_group=name,
        extract_items=sort_pages,
        is_empty_signal=is_batch_complete,
    )


class Adapter(ModelAdapter):
    model = WikiPage
