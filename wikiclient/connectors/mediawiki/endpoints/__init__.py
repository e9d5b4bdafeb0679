"""MediaWiki list endpoint registry.

This module collects the endpoint specifications and item adapters of
every supported list kind. Page generators are resolved on demand from
``generator:<module>`` ids.
"""

from __future__ import annotations

from wikiclient.core.protocols import ItemAdapter
from wikiclient.runtime.paging import ListEndpointSpec

from .allcategories import SPEC as AllCategoriesSpec  # noqa: N811
from .allcategories import Adapter as AllCategoriesAdapter
from .allpages import SPEC as AllPagesSpec  # noqa: N811
from .allpages import Adapter as AllPagesAdapter
from .backlinks import SPEC as BacklinksSpec  # noqa: N811
from .backlinks import Adapter as BacklinksAdapter
from .categorymembers import SPEC as CategoryMembersSpec  # noqa: N811
from .categorymembers import Adapter as CategoryMembersAdapter
from .generator import GENERATOR_PREFIX, generator_spec
from .generator import Adapter as GeneratorAdapter
from .logevents import SPEC as LogEventsSpec  # noqa: N811
from .logevents import Adapter as LogEventsAdapter
from .recentchanges import SPEC as RecentChangesSpec  # noqa: N811
from .recentchanges import Adapter as RecentChangesAdapter
from .revisions import SPEC as RevisionsSpec  # noqa: N811
from .revisions import Adapter as RevisionsAdapter
from .search import SPEC as SearchSpec  # noqa: N811
from .search import Adapter as SearchAdapter

# Registry mapping list kinds to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[ListEndpointSpec, type[ItemAdapter]]] = {
    "allpages": (AllPagesSpec, AllPagesAdapter),
    "allcategories": (AllCategoriesSpec, AllCategoriesAdapter),
    "categorymembers": (CategoryMembersSpec, CategoryMembersAdapter),
    "backlinks": (BacklinksSpec, BacklinksAdapter),
    "recentchanges": (RecentChangesSpec, RecentChangesAdapter),
    "logevents": (LogEventsSpec, LogEventsAdapter),
    "search": (SearchSpec, SearchAdapter),
    "revisions": (RevisionsSpec, RevisionsAdapter),
}


def get_endpoint_spec(list_kind: str) -> ListEndpointSpec | None:
    """Get endpoint specification by list kind.

    Args:
        list_kind: List kind identifier (e.g., "categorymembers",
            "generator:allpages")

    Returns:
        ListEndpointSpec if found, None otherwise
    """
    if list_kind.startswith(GENERATOR_PREFIX):
        try:
            return generator_spec(list_kind[len(GENERATOR_PREFIX) :])
        except ValueError:
            return None
    entry = _ENDPOINT_REGISTRY.get(list_kind)
    return entry[0] if entry else None


def get_endpoint_adapter(list_kind: str) -> type[ItemAdapter] | None:
    """Get item adapter class by list kind.

    Args:
        list_kind: List kind identifier

    Returns:
        Adapter class if found, None otherwise
    """
    if list_kind.startswith(GENERATOR_PREFIX):
        return GeneratorAdapter if get_endpoint_spec(list_kind) else None
    entry = _ENDPOINT_REGISTRY.get(list_kind)
    return entry[1] if entry else None


def list_kinds() -> list[str]:
    """Registered list kinds, excluding generators."""
    return sorted(_ENDPOINT_REGISTRY)


__all__ = [
    "GENERATOR_PREFIX",
    "generator_spec",
    "get_endpoint_adapter",
    "get_endpoint_spec",
    "list_kinds",
]
