"""Item and page extraction from response documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ...core.exceptions import MalformedResponseError
from .cursor import ContinuationCursor
from .definitions import ListEndpointSpec, Page


def find_path(document: Any, path: Sequence[str]) -> Any | None:
    """Follow ``path`` through nested mappings; None when any key is missing."""
    node = document
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
        if node is None:
            return None
    return node


def extract_items(document: Any, spec: ListEndpointSpec) -> list[Any] | None:
    """Return the ordered item records of ``document``, or None if absent.

    Mappings are accepted as item containers because ``formatversion=1``
    responses key pages by page id.
    """
    if spec.extract_items is not None:
        return spec.extract_items(document)
    node = find_path(document, spec.items_path)
    if node is None:
        return None
    if isinstance(node, list):
        return node
    if isinstance(node, Mapping):
        return list(node.values())
    raise MalformedResponseError(
        f"Items of list {spec.id!r} at {'/'.join(spec.items_path)} are a "
        f"{type(node).__name__}, not an array",
        list_kind=spec.id,
    )


def extract_page(
    document: Any,
    spec: ListEndpointSpec,
    *,
    previous: ContinuationCursor,
    request_params: Mapping[str, Any],
    page_size: int | None,
    index: int = 0,
) -> Page:
    """Build the Page (items + next cursor) for one response."""
    items = extract_items(document, spec)
    next_cursor = ContinuationCursor.from_response(
        document,
        spec,
        previous=previous,
        request_params=request_params,
        items_found=items is not None,
        item_count=len(items or ()),
        page_size=page_size,
    )
    return Page(items=list(items or ()), next_cursor=next_cursor, index=index)
