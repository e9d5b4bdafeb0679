"""Wikia list endpoint registry."""

from __future__ import annotations

from wikiclient.core.protocols import ItemAdapter
from wikiclient.runtime.paging import ListEndpointSpec

from .discussions import LIST_KIND as DISCUSSION_THREADS
from .discussions import SPEC as DiscussionThreadsSpec  # noqa: N811
from .discussions import Adapter as DiscussionThreadsAdapter
from .search import LIST_KIND as LOCAL_SEARCH
from .search import SPEC as LocalSearchSpec  # noqa: N811
from .search import Adapter as LocalSearchAdapter

_ENDPOINT_REGISTRY: dict[str, tuple[ListEndpointSpec, type[ItemAdapter]]] = {
    LOCAL_SEARCH: (LocalSearchSpec, LocalSearchAdapter),
    DISCUSSION_THREADS: (DiscussionThreadsSpec, DiscussionThreadsAdapter),
}


def get_endpoint_spec(list_kind: str) -> ListEndpointSpec | None:
    entry = _ENDPOINT_REGISTRY.get(list_kind)
    return entry[0] if entry else None


def get_endpoint_adapter(list_kind: str) -> type[ItemAdapter] | None:
    entry = _ENDPOINT_REGISTRY.get(list_kind)
    return entry[1] if entry else None


__all__ = [
    "DISCUSSION_THREADS",
    "LOCAL_SEARCH",
    "get_endpoint_adapter",
    "get_endpoint_spec",
]
