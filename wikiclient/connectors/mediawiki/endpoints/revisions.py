"""``prop=revisions`` endpoint definition and adapter.

Enumerates the revision history of a single page. Unlike ``list=``
modules, the items live under the page node, and continuation comes from
the ``revisions`` prop module.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import MalformedResponseError
from wikiclient.models import Revision
from wikiclient.runtime.paging import ListEndpointSpec

from .common import ModelAdapter, is_batch_complete, prefixed

DEFAULT_PROPS = ("ids", "timestamp", "flags", "comment", "user", "userid", "size", "sha1")


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters for the revisions of one page."""
    params = dict(params)
    title = params.pop("title", None)
    page_id = params.pop("pageid", None)
    if (title is None) == (page_id is None):
        raise ValueError("revisions requires exactly one of 'title' or 'pageid'")
    query: dict[str, Any] = {"action": "query", "prop": "revisions", "continue": ""}
    if title is not None:
        query["titles"] = title
    else:
        query["pageids"] = page_id
    query.update(prefixed("rv", params))
    query.setdefault("rvprop", "|".join(DEFAULT_PROPS))
    return query


def extract_items(document: Any) -> list[Any] | None:
    """Revisions of the single page in ``query.pages``."""
    if not isinstance(document, Mapping) or "query" not in document:
        return None
    pages = document["query"].get("pages")
    if isinstance(pages, Mapping):
        pages = list(pages.values())
    if not pages:
        return None
    page = pages[0]
    if not isinstance(page, Mapping):
        raise MalformedResponseError(f"Invalid page node: {page!r}", list_kind="revisions")
    if "missing" in page or "invalid" in page:
        return []
    revisions = page.get("revisions", [])
    return [{**rev, "pageid": page.get("pageid"), "title": page.get("title")} for rev in revisions]


SPEC = ListEndpointSpec(
    id="revisions",
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    limit_param="rvlimit",
    extract_items=extract_items,
    is_empty_signal=is_batch_complete,
)


class Adapter(ModelAdapter):
    model = Revision
