"""List enumeration engine.

Architecture:
    ``EnumerationSession`` drives one enumeration as an explicit state
    machine and exposes it as a lazy, forward-only, single-pass async
    sequence of raw item records::

        Created -> Fetching -> (Yielding <-> Fetching) -> Completed
                 \\____________________________________-> Faulted

    Only ``Fetching`` has a request in flight, and at most one. Pages are
    fetched strictly one after another with no read-ahead, so page N's items
    always precede page N+1's and a consumer that stops early never causes
    a speculative fetch.

    ``ListEnumerator`` owns the collaborators shared between sessions (the
    transport gateway, the throttler and the retry policy) and creates a
    fresh session for each enumeration.

Design Decisions:
    - The engine is convention-agnostic: token/offset/page-number handling
      lives entirely in ``ContinuationCursor``
    - Page size is negotiated once per session and never re-negotiated
    - Cancellation is cooperative: checked before every transport invocation
      and after each fetch; a result that arrives after cancellation is
      discarded
    - Errors already delivered items never get invalidated; the sequence
      raises at the position where the fault occurred
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from functools import partial
from time import perf_counter
from typing import Any

from ...core.enums import SessionState
from ...core.exceptions import SessionStateError, SuspectedInfiniteLoopError
from ...core.protocols import Document, TransportGateway
from ...utils.retry import RetryDecision, RetryPolicy, retry_async
from .cursor import ContinuationCursor
from .definitions import EnumerationContext, ListEndpointSpec, ListRequestDescriptor, Page
from .extraction import extract_page
from .telemetry import (
    log_enumeration_cancelled,
    log_enumeration_completed,
    log_enumeration_faulted,
    log_enumeration_started,
    log_fetch_retry,
    log_page_empty,
    log_page_fetched,
)
from .throttle import Throttler

logger = logging.getLogger(__name__)

DEFAULT_MAX_EMPTY_PAGES = 3

_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.CREATED: frozenset(
        {SessionState.FETCHING, SessionState.COMPLETED, SessionState.FAULTED}
    ),
    SessionState.FETCHING: frozenset(
        {SessionState.YIELDING, SessionState.COMPLETED, SessionState.FAULTED}
    ),
    SessionState.YIELDING: frozenset(
        {SessionState.FETCHING, SessionState.COMPLETED, SessionState.FAULTED}
    ),
    SessionState.COMPLETED: frozenset(),
    SessionState.FAULTED: frozenset(),
}


class _CancelledBeforeInvoke(Exception):
    """Cancellation observed right before a transport invocation."""


class EnumerationSession:
    """Runtime state of one list enumeration.

    The session is exclusively owned by a single consumer. Iterate it once
    with ``async for``; a second iteration raises ``SessionStateError``.
    """

    def __init__(
        self,
        gateway: TransportGateway,
        descriptor: ListRequestDescriptor,
        spec: ListEndpointSpec,
        *,
        throttler: Throttler | None = None,
        retry_policy: RetryPolicy | None = None,
        max_empty_pages: int = DEFAULT_MAX_EMPTY_PAGES,
        context: EnumerationContext | None = None,
    ) -> None:
        """Initialize session.

        Args:
            gateway: Transport gateway used for every page fetch
            descriptor: What to enumerate
            spec: How the descriptor's list kind is requested and paginated
            throttler: Optional throttler acquired around each invocation
            retry_policy: Retry policy (defaults to ``RetryPolicy()``)
            max_empty_pages: Consecutive empty pages tolerated with a live cursor
            context: Cancellation signal and observability hook
        """
        if spec.id != descriptor.list_kind:
            raise ValueError(
                f"Endpoint spec {spec.id!r} does not match list kind {descriptor.list_kind!r}"
            )
        if max_empty_pages < 1:
            raise ValueError("max_empty_pages must be at least 1")
        self._gateway = gateway
        self._descriptor = descriptor
        self._spec = spec
        self._throttler = throttler
        self._retry_policy = retry_policy or RetryPolicy()
        self._max_empty_pages = max_empty_pages
        self._context = context or EnumerationContext()

        self._state = SessionState.CREATED
        self._cursor = ContinuationCursor.initial(spec.convention)
        self._page_size: int | None = None
        self._items_yielded = 0
        self._pages_fetched = 0
        self._consecutive_empty = 0
        self._last_error: BaseException | None = None
        self._error: BaseException | None = None
        self._discarded_page = False
        self._iterated = False

    def __repr__(self) -> str:
        return (
            f"<EnumerationSession {self._descriptor.list_kind} state={self._state} "
            f"pages={self._pages_fetched} items={self._items_yielded}>"
        )

    @property
    def descriptor(self) -> ListRequestDescriptor:
        return self._descriptor

    @property
    def spec(self) -> ListEndpointSpec:
        return self._spec

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def cursor(self) -> ContinuationCursor:
        return self._cursor

    @property
    def page_size(self) -> int | None:
        """Effective page size; None until negotiated."""
        return self._page_size

    @property
    def items_yielded(self) -> int:
        return self._items_yielded

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def last_error(self) -> BaseException | None:
        """Most recent error seen, including ones recovered by retrying."""
        return self._last_error

    @property
    def error(self) -> BaseException | None:
        """The error that faulted the session, if any."""
        return self._error

    def __aiter__(self) -> AsyncIterator[Any]:
        if self._iterated:
            raise SessionStateError(
                "An enumeration session is single-pass; start a new session to enumerate again"
            )
        self._iterated = True
        return self._run()

    async def negotiate_page_size(self) -> int:
        """Clamp the page size hint to the server limit, once per session."""
        if self._page_size is None:
            max_batch_size = await self._gateway.max_batch_size()
            if max_batch_size < 1:
                raise ValueError(f"Transport reported an invalid max batch size: {max_batch_size}")
            self._page_size = min(self._descriptor.page_size_hint, max_batch_size)
            log_enumeration_started(
                list_kind=self._descriptor.list_kind,
                page_size=self._page_size,
                page_size_hint=self._descriptor.page_size_hint,
                max_batch_size=max_batch_size,
                context=self._context,
            )
        return self._page_size

    def build_request_parameters(self) -> dict[str, Any]:
        """Base parameters of the list kind, page size, then cursor parameters."""
        params = self._spec.build_query(self._descriptor.parameters)
        if self._spec.limit_param is not None and self._page_size is not None:
            params[self._spec.limit_param] = self._page_size
        params.update(self._cursor.to_request_parameters())
        return params

    async def fetch_page(self) -> Page | None:
        """Fetch the next page and advance the cursor.

        Returns:
            The page, or None when cancellation was observed

        Raises:
            SessionStateError: The session is finished or its cursor is exhausted
            SuspectedInfiniteLoopError: Too many consecutive empty pages
        """
        if self._state.is_terminal:
            raise SessionStateError(f"Cannot fetch from a {self._state} session")
        if self._cursor.is_exhausted:
            raise SessionStateError(
                f"List {self._descriptor.list_kind!r} is exhausted; refusing to query again"
            )
        try:
            return await self._fetch_page()
        except _CancelledBeforeInvoke:
            self._cancel()
            return None
        except Exception as e:
            self._fault(e)
            raise

    async def _fetch_page(self) -> Page | None:
        page_size = await self.negotiate_page_size()
        self._transition(SessionState.FETCHING)
        params = self.build_request_parameters()
        index = self._pages_fetched

        start = perf_counter()
        document = await retry_async(
            partial(self._invoke, params),
            policy=self._retry_policy,
            on_retry=partial(self._on_retry, index),
        )
        latency_ms = (perf_counter() - start) * 1000.0
        if self._context.cancelled:
            # The in-flight request was allowed to finish; drop what it returned
            self._discarded_page = True
            self._cancel()
            return None

        page = extract_page(
            document,
            self._spec,
            previous=self._cursor,
            request_params=params,
            page_size=page_size,
            index=index,
        )
        self._cursor = page.next_cursor
        self._pages_fetched += 1
        log_page_fetched(
            list_kind=self._descriptor.list_kind,
            page_index=index,
            item_count=len(page.items),
            exhausted=self._cursor.is_exhausted,
            latency_ms=latency_ms,
            context=self._context,
        )

        if page.is_empty and not self._cursor.is_exhausted:
            self._consecutive_empty += 1
            log_page_empty(
                list_kind=self._descriptor.list_kind,
                page_index=index,
                consecutive_empty=self._consecutive_empty,
                context=self._context,
            )
            if self._consecutive_empty >= self._max_empty_pages:
                raise SuspectedInfiniteLoopError(
                    f"Received {self._consecutive_empty} consecutive empty pages with "
                    f"continuation for list {self._descriptor.list_kind!r}",
                    list_kind=self._descriptor.list_kind,
                    empty_pages=self._consecutive_empty,
                )
        elif not page.is_empty:
            self._consecutive_empty = 0

        self._transition(SessionState.YIELDING)
        return page

    async def _invoke(self, params: Mapping[str, Any]) -> Document:
        if self._context.cancelled:
            raise _CancelledBeforeInvoke()
        if self._throttler is None:
            return await self._gateway.invoke(params)
        async with self._throttler.acquire(self._descriptor.list_kind):
            if self._context.cancelled:
                raise _CancelledBeforeInvoke()
            return await self._gateway.invoke(params)

    def _on_retry(self, page_index: int, attempt: int, error: BaseException, decision: RetryDecision) -> None:
        self._last_error = error
        log_fetch_retry(
            list_kind=self._descriptor.list_kind,
            page_index=page_index,
            attempt=attempt,
            action=decision.action.value,
            wait=decision.wait,
            error_type=type(error).__name__,
            error_message=str(error),
            context=self._context,
        )

    async def _run(self) -> AsyncIterator[Any]:
        try:
            while True:
                if self._context.cancelled:
                    self._cancel()
                    return
                page = await self.fetch_page()
                if page is None:
                    return
                for item in page.items:
                    if self._context.cancelled:
                        self._cancel()
                        return
                    self._items_yielded += 1
                    yield item
                if self._cursor.is_exhausted:
                    self._complete(exhausted=True)
                    return
        finally:
            # Reached when the consumer stops early (break / aclose)
            if not self._state.is_terminal:
                self._complete(exhausted=False)

    def _transition(self, new_state: SessionState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise SessionStateError(f"Invalid session transition {self._state} -> {new_state}")
        logger.debug("%s: %s -> %s", self._descriptor.list_kind, self._state, new_state)
        self._state = new_state

    def _complete(self, *, exhausted: bool) -> None:
        self._transition(SessionState.COMPLETED)
        log_enumeration_completed(
            list_kind=self._descriptor.list_kind,
            pages_fetched=self._pages_fetched,
            items_yielded=self._items_yielded,
            exhausted=exhausted,
            context=self._context,
        )

    def _cancel(self) -> None:
        if self._state.is_terminal:
            return
        log_enumeration_cancelled(
            list_kind=self._descriptor.list_kind,
            pages_fetched=self._pages_fetched,
            items_yielded=self._items_yielded,
            discarded_page=self._discarded_page,
            context=self._context,
        )
        self._complete(exhausted=False)

    def _fault(self, error: BaseException) -> None:
        self._error = error
        self._last_error = error
        if not self._state.is_terminal:
            self._transition(SessionState.FAULTED)
        log_enumeration_faulted(
            list_kind=self._descriptor.list_kind,
            pages_fetched=self._pages_fetched,
            items_yielded=self._items_yielded,
            error_type=type(error).__name__,
            error_message=str(error),
            context=self._context,
        )


class ListEnumerator:
    """Creates enumeration sessions over a shared gateway.

    The gateway and the throttler are shared by every session this
    enumerator creates; each session keeps its own cursor and counters.
    """

    def __init__(
        self,
        gateway: TransportGateway,
        *,
        throttler: Throttler | None = None,
        retry_policy: RetryPolicy | None = None,
        max_empty_pages: int = DEFAULT_MAX_EMPTY_PAGES,
    ) -> None:
        """Initialize list enumerator.

        Args:
            gateway: Transport gateway
            throttler: Optional throttler shared by all sessions
            retry_policy: Retry policy shared by all sessions
            max_empty_pages: Consecutive empty pages tolerated with a live cursor
        """
        if max_empty_pages < 1:
            raise ValueError("max_empty_pages must be at least 1")
        self._gateway = gateway
        self._throttler = throttler
        self._retry_policy = retry_policy or RetryPolicy()
        self._max_empty_pages = max_empty_pages

    def session(
        self,
        descriptor: ListRequestDescriptor,
        spec: ListEndpointSpec,
        *,
        context: EnumerationContext | None = None,
    ) -> EnumerationSession:
        """Create a new session for ``descriptor``."""
        return EnumerationSession(
            self._gateway,
            descriptor,
            spec,
            throttler=self._throttler,
            retry_policy=self._retry_policy,
            max_empty_pages=self._max_empty_pages,
            context=context,
        )

    def enumerate(
        self,
        descriptor: ListRequestDescriptor,
        spec: ListEndpointSpec,
        *,
        context: EnumerationContext | None = None,
    ) -> AsyncIterator[Any]:
        """Lazily enumerate the raw items of ``descriptor``."""
        return aiter(self.session(descriptor, spec, context=context))
