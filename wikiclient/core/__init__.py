"""Core components."""

from .enums import (
    CursorState,
    PaginationConvention,
    PrivilegeLevel,
    RetryAction,
    SessionState,
)
from .exceptions import (
    AccountAssertionFailureError,
    BadTokenError,
    InvalidActionError,
    MalformedResponseError,
    MaxLagError,
    OperationConflictError,
    OperationFailedError,
    RateLimitError,
    SessionStateError,
    StaleContinuationError,
    SuspectedInfiniteLoopError,
    TransportError,
    UnauthorizedOperationError,
    UnexpectedDataError,
    WikiaApiError,
    WikiClientError,
)
from .protocols import Document, ItemAdapter, TransportGateway

__all__ = [
    "CursorState",
    "PaginationConvention",
    "PrivilegeLevel",
    "RetryAction",
    "SessionState",
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
    "Document",
    "ItemAdapter",
    "TransportGateway",
]
