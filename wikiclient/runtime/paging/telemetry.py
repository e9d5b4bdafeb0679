"""Structured logging and events for list enumeration.

Each function logs one named event with its fields in ``extra`` and forwards
the same event to the enumeration context's hook, if the caller set one.
"""

from __future__ import annotations

import logging
from typing import Any

from .definitions import EnumerationContext, EnumerationEvent

logger = logging.getLogger(__name__)


def _emit(
    level: int,
    name: str,
    *,
    list_kind: str,
    context: EnumerationContext | None,
    **fields: Any,
) -> None:
    logger.log(level, name, extra={"list_kind": list_kind, **fields})
    if context is not None:
        context.emit(EnumerationEvent(name=name, list_kind=list_kind, fields=fields))


def log_enumeration_started(
    *,
    list_kind: str,
    page_size: int,
    page_size_hint: int,
    max_batch_size: int,
    context: EnumerationContext | None = None,
) -> None:
    """Log the start of a session, after page size negotiation.

    Args:
        list_kind: List kind identifier
        page_size: Effective page size for the session
        page_size_hint: Page size the caller asked for
        max_batch_size: Server limit for the caller's privilege level
        context: Enumeration context receiving the event
    """
    _emit(
        logging.DEBUG,
        "list_enumeration_started",
        list_kind=list_kind,
        context=context,
        page_size=page_size,
        page_size_hint=page_size_hint,
        max_batch_size=max_batch_size,
        clamped=page_size < page_size_hint,
    )


def log_page_fetched(
    *,
    list_kind: str,
    page_index: int,
    item_count: int,
    exhausted: bool,
    latency_ms: float | None = None,
    context: EnumerationContext | None = None,
) -> None:
    """Log one fetched page."""
    _emit(
        logging.DEBUG,
        "list_page_fetched",
        list_kind=list_kind,
        context=context,
        page_index=page_index,
        item_count=item_count,
        exhausted=exhausted,
        latency_ms=latency_ms,
    )


def log_page_empty(
    *,
    list_kind: str,
    page_index: int,
    consecutive_empty: int,
    context: EnumerationContext | None = None,
) -> None:
    """Log an empty page that still carries continuation data."""
    _emit(
        logging.WARNING,
        "list_page_empty",
        list_kind=list_kind,
        context=context,
        page_index=page_index,
        consecutive_empty=consecutive_empty,
    )


def log_fetch_retry(
    *,
    list_kind: str,
    page_index: int,
    attempt: int,
    action: str,
    wait: float | None,
    error_type: str,
    error_message: str,
    context: EnumerationContext | None = None,
) -> None:
    """Log a failed fetch that is about to be retried with the same cursor.

    Args:
        list_kind: List kind identifier
        page_index: Index of the page being fetched
        attempt: Attempt number that failed (1-based)
        action: Retry classification ("transient" or "rate_limited")
        wait: Seconds before the next attempt
        error_type: Exception class name
        error_message: Exception message
        context: Enumeration context receiving the event
    """
    _emit(
        logging.WARNING,
        "list_fetch_retry",
        list_kind=list_kind,
        context=context,
        page_index=page_index,
        attempt=attempt,
        action=action,
        wait=wait,
        error_type=error_type,
        error_message=error_message,
    )


def log_enumeration_cancelled(
    *,
    list_kind: str,
    pages_fetched: int,
    items_yielded: int,
    discarded_page: bool = False,
    context: EnumerationContext | None = None,
) -> None:
    """Log a cooperative cancellation."""
    _emit(
        logging.INFO,
        "list_enumeration_cancelled",
        list_kind=list_kind,
        context=context,
        pages_fetched=pages_fetched,
        items_yielded=items_yielded,
        discarded_page=discarded_page,
    )


def log_enumeration_completed(
    *,
    list_kind: str,
    pages_fetched: int,
    items_yielded: int,
    exhausted: bool,
    context: EnumerationContext | None = None,
) -> None:
    """Log the end of a session, either exhausted or stopped by the consumer."""
    _emit(
        logging.DEBUG,
        "list_enumeration_completed",
        list_kind=list_kind,
        context=context,
        pages_fetched=pages_fetched,
        items_yielded=items_yielded,
        exhausted=exhausted,
    )


def log_enumeration_faulted(
    *,
    list_kind: str,
    pages_fetched: int,
    items_yielded: int,
    error_type: str,
    error_message: str,
    context: EnumerationContext | None = None,
) -> None:
    """Log a fatal error that ended the session."""
    _emit(
        logging.ERROR,
        "list_enumeration_faulted",
        list_kind=list_kind,
        context=context,
        pages_fetched=pages_fetched,
        items_yielded=items_yielded,
        error_type=error_type,
        error_message=error_message,
    )
