"""Paging metadata definitions.

This module defines the data structures that describe a list enumeration:
what to enumerate (descriptor), how the list kind paginates (endpoint spec),
one fetched response unit (page), and the per-call context carrying
cancellation and the observability hook.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ...core.enums import PaginationConvention

if TYPE_CHECKING:
    from .cursor import ContinuationCursor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListRequestDescriptor:
    """What a caller wants enumerated.

    Attributes:
        list_kind: Server-side list/module identifier (e.g. "categorymembers")
        parameters: Caller-supplied filters; frozen once the descriptor exists
        page_size_hint: Requested items per page; clamped to the server limit
    """

    list_kind: str
    parameters: Mapping[str, Any] = field(default_factory=dict)
    page_size_hint: int = 10

    def __post_init__(self) -> None:
        if not self.list_kind:
            raise ValueError("list_kind must be a non-empty string")
        if isinstance(self.page_size_hint, bool) or not isinstance(self.page_size_hint, int):
            raise ValueError("page_size_hint must be an integer")
        if self.page_size_hint <= 0:
            raise ValueError("page_size_hint must be greater than 0")
        # Copy so later mutation of the caller's dict cannot leak into a session
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))


@dataclass(frozen=True)
class ListEndpointSpec:
    """How one list kind is requested and paginated.

    Attributes:
        id: List kind identifier
        convention: Pagination convention of the list
        build_query: Builds the base request parameters from descriptor parameters
        items_path: Key path of the item array in the response document
        limit_param: Request parameter carrying the page size (None if unsupported)
        continuation_group: Module name under old-style ``query-continue``
            (defaults to ``id``)
        offset_param: Request parameter carrying the offset (OFFSET convention)
        page_param: Request parameter carrying the page number (PAGE_NUMBER convention)
        next_page: Reads the next page number from a response (PAGE_NUMBER convention)
        is_empty_signal: Recognizes the documented "no more results" response
        extract_items: Custom item extractor overriding ``items_path``
        next_tokens: Reads the continuation parameters from a response
            (TOKEN convention, for APIs without a ``continue`` node)
    """

    id: str
    convention: PaginationConvention
    build_query: Callable[[Mapping[str, Any]], dict[str, Any]]
    items_path: tuple[str, ...] = ()
    limit_param: str | None = None
    continuation_group: str | None = None
    offset_param: str = "offset"
    page_param: str = "page"
    next_page: Callable[[Any], int | None] | None = None
    is_empty_signal: Callable[[Any], bool] | None = None
    extract_items: Callable[[Any], list[Any] | None] | None = None
    next_tokens: Callable[[Any], Mapping[str, Any] | None] | None = None

    @property
    def group(self) -> str:
        """List identity used to key continuation tokens."""
        return self.continuation_group or self.id


@dataclass(frozen=True)
class Page:
    """Items and next cursor extracted from one server response.

    Attributes:
        items: Raw item records in server order
        next_cursor: Cursor for the following request, or an exhausted cursor
        index: Zero-based index of the page within its session
    """

    items: list[Any]
    next_cursor: ContinuationCursor
    index: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class EnumerationEvent:
    """Structured observability event emitted by a session."""

    name: str
    list_kind: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


EventHook = Callable[[EnumerationEvent], None]


@dataclass
class EnumerationContext:
    """Explicit per-call context for an enumeration.

    Attributes:
        cancel_event: Set it to stop the enumeration cooperatively
        on_event: Observability hook receiving every EnumerationEvent
    """

    cancel_event: asyncio.Event | None = None
    on_event: EventHook | None = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def emit(self, event: EnumerationEvent) -> None:
        """Deliver ``event`` to the hook; a failing hook never breaks enumeration."""
        if self.on_event is None:
            return
        try:
            self.on_event(event)
        except Exception:
            logger.exception("Enumeration event hook failed for %s", event.name)
