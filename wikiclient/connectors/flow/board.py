"""Flow board topic lists (``action=flow&submodule=view-topiclist``).

Flow answers with its own pagination: instead of a ``continue`` node the
topic list carries a forward link (``links.pagination.fwd.url``) whose
``topiclist_*`` query arguments are sent back as ``vtl*`` parameters. A
board without further pages reports ``pagination`` as an empty array.

Topics are not listed directly either: ``roots`` holds workflow ids, each
mapped to its first post through ``posts``, whose revision in
``revisions`` describes the topic.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlsplit

from wikiclient.connectors.mediawiki.endpoints.common import ModelAdapter
from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import MalformedResponseError, UnexpectedDataError
from wikiclient.models import FlowTopic
from wikiclient.runtime.paging import EnumerationContext, ListEndpointSpec, ListRequestDescriptor
from wikiclient.runtime.paging.extraction import find_path

if TYPE_CHECKING:
    from wikiclient.connectors.mediawiki import WikiSite

logger = logging.getLogger(__name__)

FLOW_TOPICS_LIST_KIND = "flow:topics"

TOPICLIST_PATH = ("flow", "view-topiclist", "result", "topiclist")

DEFAULT_PAGE_SIZE = 20
# view-topiclist refuses more than 100 topics per request, bots included
MAX_PAGE_SIZE = 100

SORT_ORDERS = ("newest", "updated", "user")

_LINK_PREFIX = "topiclist_"
_PARAM_PREFIX = "vtl"


def build_query(params: Mapping[str, Any]) -> dict[str, Any]:
    sort_by = params.get("sort_by") or "user"
    if sort_by not in SORT_ORDERS:
        raise ValueError(f"sort_by must be one of {SORT_ORDERS}, got {sort_by!r}")
    query: dict[str, Any] = {
        "action": "flow",
        "submodule": "view-topiclist",
        "page": params["page"],
        "vtlsortby": sort_by,
        "vtlformat": "wikitext",
    }
    if params.get("save_sort"):
        query["vtlsavesortby"] = True
    return query


def topic_list(document: Any) -> Mapping[str, Any] | None:
    node = find_path(document, TOPICLIST_PATH)
    return node if isinstance(node, Mapping) else None


def extract_topics(document: Any) -> list[Any] | None:
    """Title revisions of the listed topics, in board order."""
    topics = topic_list(document)
    if topics is None:
        return None
    roots = topics.get("roots")
    if not isinstance(roots, list):
        raise MalformedResponseError(
            f"Invalid topiclist.roots node: {roots!r}", list_kind=FLOW_TOPICS_LIST_KIND
        )
    posts = topics.get("posts") or {}
    revisions = topics.get("revisions") or {}
    records = []
    for workflow_id in roots:
        post_revisions = posts.get(workflow_id) if isinstance(posts, Mapping) else None
        if not post_revisions:
            raise UnexpectedDataError(f"Cannot find workflow {workflow_id} in topiclist.posts")
        revision = revisions.get(post_revisions[0]) if isinstance(revisions, Mapping) else None
        if not isinstance(revision, Mapping):
            raise UnexpectedDataError(
                f"Cannot find revision {post_revisions[0]} in topiclist.revisions"
            )
        records.append(revision)
    return records


def forward_tokens(document: Any) -> dict[str, str] | None:
    """``vtl*`` parameters of the forward link, or None on the last page."""
    topics = topic_list(document)
    if topics is None:
        return None
    pagination = find_path(topics, ("links", "pagination"))
    if not isinstance(pagination, Mapping):
        return None
    url = find_path(pagination, ("fwd", "url"))
    if not url:
        return None
    tokens = {}
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if not key.startswith(_LINK_PREFIX):
            continue
        name = key[len(_LINK_PREFIX):]
        # The page size stays the one negotiated for the session
        if name == "limit":
            continue
        tokens[f"{_PARAM_PREFIX}{name}"] = value
    return tokens or None


SPEC = ListEndpointSpec(
    id=FLOW_TOPICS_LIST_KIND,
    convention=PaginationConvention.TOKEN,
    build_query=build_query,
    limit_param="vtllimit",
    extract_items=extract_topics,
    next_tokens=forward_tokens,
)


class Adapter(ModelAdapter):
    model = FlowTopic


async def enum_topics(
    site: WikiSite,
    board: str,
    *,
    sort_by: str = "newest",
    save_sort: bool = False,
    page_size: int = DEFAULT_PAGE_SIZE,
    context: EnumerationContext | None = None,
) -> AsyncIterator[FlowTopic]:
    """Enumerate the topics of a Flow board.

    Args:
        site: Wiki site with the Flow extension
        board: Full title of the board page, namespace included
        sort_by: "newest" (time posted), "updated" (last activity) or "user"
            (the account's preference)
        save_sort: Store ``sort_by`` as the account's preference
        page_size: Topics per request, at most 100
        context: Cancellation signal and observability hook
    """
    if not board:
        raise ValueError("board title cannot be empty")
    logger.debug("Enumerate topics of Flow board %s", board)
    descriptor = ListRequestDescriptor(
        FLOW_TOPICS_LIST_KIND,
        {"page": board, "sort_by": sort_by, "save_sort": save_sort},
        min(page_size, MAX_PAGE_SIZE),
    )
    adapter = Adapter()
    async for raw in site.enumerate_raw(descriptor, context=context, spec=SPEC):
        yield adapter.parse(raw, descriptor.parameters)
