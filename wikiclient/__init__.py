"""wikiclient - Async MediaWiki API client with cursor-based list enumeration."""

from .connectors.cargo import CargoQueryParameters, enum_cargo_rows, execute_cargo_query
from .connectors.flow import enum_topics
from .connectors.mediawiki import SiteOptions, WikiSite
from .connectors.wikia import WikiaSite
from .connectors.wikibase import fetch_entities
from .core import (
    AccountAssertionFailureError,
    BadTokenError,
    CursorState,
    InvalidActionError,
    MalformedResponseError,
    MaxLagError,
    OperationConflictError,
    OperationFailedError,
    PaginationConvention,
    PrivilegeLevel,
    RateLimitError,
    SessionState,
    SessionStateError,
    StaleContinuationError,
    SuspectedInfiniteLoopError,
    TransportError,
    UnauthorizedOperationError,
    UnexpectedDataError,
    WikiaApiError,
    WikiClientError,
)
from .models import (
    AccountInfo,
    DiscussionThread,
    FlowTopic,
    LocalWikiSearchResultItem,
    LogEventItem,
    RecentChangeItem,
    Revision,
    SearchResultItem,
    SiteInfo,
    WbEntity,
    WikiPage,
    WikiPageStub,
)
from .runtime.paging import (
    ContinuationCursor,
    EnumerationContext,
    EnumerationEvent,
    EnumerationSession,
    ListEndpointSpec,
    ListEnumerator,
    ListRequestDescriptor,
    Page,
    Throttler,
    batched,
)
from .utils.retry import RetryDecision, RetryPolicy, retry_async

__version__ = "0.1.0"

__all__ = [
    # Sites
    "WikiSite",
    "WikiaSite",
    "SiteOptions",
    # Extensions
    "CargoQueryParameters",
    "enum_cargo_rows",
    "execute_cargo_query",
    "enum_topics",
    "fetch_entities",
    # Enumeration engine
    "ContinuationCursor",
    "EnumerationContext",
    "EnumerationEvent",
    "EnumerationSession",
    "ListEndpointSpec",
    "ListEnumerator",
    "ListRequestDescriptor",
    "Page",
    "Throttler",
    "batched",
    "RetryDecision",
    "RetryPolicy",
    "retry_async",
    # Enums
    "CursorState",
    "PaginationConvention",
    "PrivilegeLevel",
    "SessionState",
    # Models
    "AccountInfo",
    "DiscussionThread",
    "FlowTopic",
    "LocalWikiSearchResultItem",
    "LogEventItem",
    "RecentChangeItem",
    "Revision",
    "SearchResultItem",
    "SiteInfo",
    "WbEntity",
    "WikiPage",
    "WikiPageStub",
    # Exceptions
    "WikiClientError",
    "TransportError",
    "RateLimitError",
    "MaxLagError",
    "OperationFailedError",
    "UnauthorizedOperationError",
    "BadTokenError",
    "InvalidActionError",
    "AccountAssertionFailureError",
    "OperationConflictError",
    "StaleContinuationError",
    "UnexpectedDataError",
    "MalformedResponseError",
    "SuspectedInfiniteLoopError",
    "SessionStateError",
    "WikiaApiError",
]
