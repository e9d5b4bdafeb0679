"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from wikiclient.core import (
    MalformedResponseError,
    MaxLagError,
    OperationFailedError,
    RateLimitError,
    SessionStateError,
    StaleContinuationError,
    SuspectedInfiniteLoopError,
    TransportError,
    UnexpectedDataError,
    WikiaApiError,
    WikiClientError,
)


def test_rate_limit_error_with_retry_after():
    """Test RateLimitError with retry_after (meaningful behavior)."""
    error = RateLimitError("rate limit", retry_after=120)
    assert error.status_code == 429
    assert error.retry_after == 120
    assert isinstance(error, TransportError)
    assert isinstance(error, WikiClientError)


def test_maxlag_error_is_rate_limit():
    error = MaxLagError("lagged", lag=3.5)
    assert error.lag == 3.5
    assert error.retry_after == 5
    assert isinstance(error, RateLimitError)


def test_operation_failed_message():
    """Test the message combines code and info."""
    assert str(OperationFailedError("badvalue", "Bad value")) == "badvalue: Bad value"
    assert str(OperationFailedError("badvalue")) == "badvalue"
    assert str(OperationFailedError(None)) == "The API request failed."


def test_stale_continuation_is_api_error():
    error = StaleContinuationError("badcontinue", "Invalid continue param.")
    assert error.error_code == "badcontinue"
    assert isinstance(error, OperationFailedError)


def test_pagination_errors_carry_list_kind():
    malformed = MalformedResponseError("no items", list_kind="allpages")
    loop = SuspectedInfiniteLoopError("stuck", list_kind="allpages", empty_pages=3)
    assert malformed.list_kind == "allpages"
    assert loop.empty_pages == 3
    assert isinstance(malformed, UnexpectedDataError)
    assert isinstance(loop, UnexpectedDataError)


def test_session_state_error_is_runtime_error():
    assert isinstance(SessionStateError("reused"), RuntimeError)


def test_wikia_error_with_status():
    error = WikiaApiError("NotFoundApiException", "Not found", status=404, trace_id="t1")
    assert error.error_code == "NotFoundApiException"
    assert error.status == 404
    assert error.trace_id == "t1"
    assert isinstance(error, OperationFailedError)
