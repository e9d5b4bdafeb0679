"""Cursor-based list enumeration runtime."""

from .batching import batched, partition
from .cursor import ContinuationCursor
from .definitions import (
    EnumerationContext,
    EnumerationEvent,
    EventHook,
    ListEndpointSpec,
    ListRequestDescriptor,
    Page,
)
from .enumerator import DEFAULT_MAX_EMPTY_PAGES, EnumerationSession, ListEnumerator
from .extraction import extract_items, extract_page, find_path
from .throttle import Throttler

__all__ = [
    "ContinuationCursor",
    "DEFAULT_MAX_EMPTY_PAGES",
    "EnumerationContext",
    "EnumerationEvent",
    "EnumerationSession",
    "EventHook",
    "ListEndpointSpec",
    "ListEnumerator",
    "ListRequestDescriptor",
    "Page",
    "Throttler",
    "batched",
    "extract_items",
    "extract_page",
    "find_path",
    "partition",
]
