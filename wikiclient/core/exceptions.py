"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class WikiClientError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(WikiClientError):
    """Network or HTTP-level failure while talking to a wiki."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TransportError):
    """The server asked the client to slow down."""

    def __init__(self, message: str, retry_after: float = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class MaxLagError(RateLimitError):
    """Replication lag exceeded the ``maxlag`` request parameter."""

    def __init__(self, message: str, lag: float | None = None, retry_after: float = 5) -> None:
        super().__init__(message, retry_after=retry_after)
        self.lag = lag


class OperationFailedError(WikiClientError):
    """The wiki API reported an error for the request."""

    def __init__(
        self,
        error_code: str | None,
        error_message: str | None = None,
        details: Any = None,
    ) -> None:
        if error_code and error_message:
            message = f"{error_code}: {error_message}"
        else:
            message = error_code or error_message or "The API request failed."
        super().__init__(message)
        self.error_code = error_code
        self.error_message = error_message
        self.details = details


class UnauthorizedOperationError(OperationFailedError):
    """The account lacks the permission required by the request."""

    pass


class BadTokenError(OperationFailedError):
    """The supplied token is invalid or expired."""

    pass


class InvalidActionError(OperationFailedError):
    """The requested API action or module does not exist on the wiki."""

    pass


class AccountAssertionFailureError(OperationFailedError):
    """``assert=user`` or ``assert=bot`` failed."""

    pass


class OperationConflictError(OperationFailedError):
    """The request conflicts with the current server state."""

    pass


class StaleContinuationError(OperationFailedError):
    """The server rejected the continuation token.

    Retrying with the same stale state cannot succeed; the caller has to
    start a new enumeration.
    """

    pass


class UnexpectedDataError(WikiClientError):
    """The response content could not be understood."""

    pass


class MalformedResponseError(UnexpectedDataError):
    """The response lacks the pagination structure expected for its list kind."""

    def __init__(self, message: str, list_kind: str | None = None) -> None:
        super().__init__(message)
        self.list_kind = list_kind


class SuspectedInfiniteLoopError(UnexpectedDataError):
    """Pagination made no progress for too long.

    Raised after too many consecutive empty pages with a live cursor, or when
    the server hands back the continuation it has just been sent.
    """

    def __init__(
        self,
        message: str,
        list_kind: str | None = None,
        empty_pages: int = 0,
    ) -> None:
        super().__init__(message)
        self.list_kind = list_kind
        self.empty_pages = empty_pages


class SessionStateError(WikiClientError, RuntimeError):
    """An enumeration session was driven in a way its state does not allow."""

    pass


class WikiaApiError(OperationFailedError):
    """Error reported by the Wikia/FANDOM REST or Nirvana API."""

    def __init__(
        self,
        error_type: str | None,
        error_message: str | None = None,
        status: int | None = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(error_type, error_message)
        self.status = status
        self.trace_id = trace_id
