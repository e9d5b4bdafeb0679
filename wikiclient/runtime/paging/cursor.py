"""Continuation cursor.

The cursor normalizes the three pagination conventions a wiki server may
use into one immutable value:

    - TOKEN: opaque continuation parameters echoed verbatim on the next
      request. New-style ``continue`` objects replace the whole token set;
      old-style ``query-continue`` nodes are keyed by module, so only the
      modules named in a response are replaced and the rest are kept.
      Lists without a ``continue`` node supply their tokens through the
      endpoint's ``next_tokens`` reader (Flow forward links).
    - OFFSET: the next offset is the offset just sent plus the number of
      items returned.
    - PAGE_NUMBER: the next page number is read from the response.

A cursor starts ``INITIAL``, becomes ``ACTIVE`` after each page that has
more data behind it, and ends ``EXHAUSTED``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ...core.enums import CursorState, PaginationConvention
from ...core.exceptions import (
    MalformedResponseError,
    SessionStateError,
    SuspectedInfiniteLoopError,
)
from .definitions import ListEndpointSpec

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class ContinuationCursor:
    """Server-provided pagination state.

    Attributes:
        state: INITIAL, ACTIVE or EXHAUSTED
        convention: Pagination convention the cursor follows
        tokens: Continuation parameters grouped by list identity (TOKEN)
        position: Next offset (OFFSET) or next page number (PAGE_NUMBER)
        parameter: Request parameter that carries ``position``
    """

    state: CursorState
    convention: PaginationConvention
    tokens: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)
    position: int | None = None
    parameter: str | None = None

    @classmethod
    def initial(cls, convention: PaginationConvention) -> ContinuationCursor:
        return cls(CursorState.INITIAL, convention)

    @classmethod
    def exhausted(cls, convention: PaginationConvention) -> ContinuationCursor:
        return cls(CursorState.EXHAUSTED, convention)

    @classmethod
    def with_tokens(cls, groups: Mapping[str, Mapping[str, Any]]) -> ContinuationCursor:
        if not groups or not any(groups.values()):
            raise ValueError("A token cursor needs at least one continuation parameter")
        frozen = {name: MappingProxyType(dict(values)) for name, values in groups.items()}
        return cls(CursorState.ACTIVE, PaginationConvention.TOKEN, MappingProxyType(frozen))

    @classmethod
    def at_offset(cls, offset: int, parameter: str = "offset") -> ContinuationCursor:
        if offset < 0:
            raise ValueError("offset cannot be negative")
        return cls(CursorState.ACTIVE, PaginationConvention.OFFSET, position=offset, parameter=parameter)

    @classmethod
    def at_page(cls, page: int, parameter: str = "page") -> ContinuationCursor:
        return cls(
            CursorState.ACTIVE, PaginationConvention.PAGE_NUMBER, position=page, parameter=parameter
        )

    @property
    def is_exhausted(self) -> bool:
        return self.state == CursorState.EXHAUSTED

    @property
    def is_initial(self) -> bool:
        return self.state == CursorState.INITIAL

    def to_request_parameters(self) -> dict[str, Any]:
        """Parameters to merge into the next request.

        Raises:
            SessionStateError: If the cursor is exhausted
        """
        if self.state == CursorState.INITIAL:
            return {}
        if self.state == CursorState.EXHAUSTED:
            raise SessionStateError("Cannot build a request from an exhausted cursor")
        if self.convention == PaginationConvention.TOKEN:
            params: dict[str, Any] = {}
            for values in self.tokens.values():
                params.update(values)
            return params
        return {self.parameter: self.position}

    def merged_with(self, groups: Mapping[str, Mapping[str, Any]]) -> ContinuationCursor:
        """Replace the token groups named in ``groups`` and keep the others."""
        merged: dict[str, Mapping[str, Any]] = {}
        if self.state == CursorState.ACTIVE and self.convention == PaginationConvention.TOKEN:
            merged.update(self.tokens)
        for name, values in groups.items():
            merged[name] = values
        return ContinuationCursor.with_tokens(merged)

    @classmethod
    def from_response(
        cls,
        document: Any,
        spec: ListEndpointSpec,
        *,
        previous: ContinuationCursor | None = None,
        request_params: Mapping[str, Any] | None = None,
        items_found: bool = True,
        item_count: int = 0,
        page_size: int | None = None,
    ) -> ContinuationCursor:
        """Extract the cursor for the request following ``document``.

        Args:
            document: Parsed response
            spec: Endpoint spec of the enumerated list kind
            previous: Cursor used for the request that produced ``document``
            request_params: Parameters actually sent for that request
            items_found: Whether the response carried an item array at all
            item_count: Number of items the response carried
            page_size: Effective page size of the session

        Raises:
            MalformedResponseError: Neither items nor continuation, and the
                response is not the documented "no more results" signal
            SuspectedInfiniteLoopError: The server handed back the position
                it has just been sent
        """
        previous = previous or cls.initial(spec.convention)
        request_params = request_params or {}
        if spec.convention == PaginationConvention.TOKEN:
            return _token_cursor(document, spec, previous, request_params, items_found)
        if spec.convention == PaginationConvention.OFFSET:
            return _offset_cursor(document, spec, request_params, items_found, item_count, page_size)
        return _page_number_cursor(document, spec, request_params, items_found)


def _is_empty_signal(document: Any, spec: ListEndpointSpec) -> bool:
    if spec.is_empty_signal is None:
        return False
    return bool(spec.is_empty_signal(document))


def _malformed(spec: ListEndpointSpec) -> MalformedResponseError:
    return MalformedResponseError(
        f"Response for list {spec.id!r} has neither items nor continuation data.",
        list_kind=spec.id,
    )


def _same_values(sent: Mapping[str, Any], received: Mapping[str, Any]) -> bool:
    if not received:
        return False
    return all(k in sent and str(sent[k]) == str(v) for k, v in received.items())


def _check_repeat(spec: ListEndpointSpec, sent: Mapping[str, Any], received: Mapping[str, Any]) -> None:
    if _same_values(sent, received):
        raise SuspectedInfiniteLoopError(
            f"Continuation for list {spec.id!r} repeats the request: {dict(received)!r}",
            list_kind=spec.id,
        )


def _token_cursor(
    document: Any,
    spec: ListEndpointSpec,
    previous: ContinuationCursor,
    request_params: Mapping[str, Any],
    items_found: bool,
) -> ContinuationCursor:
    if spec.next_tokens is not None:
        group = spec.next_tokens(document)
        if group:
            group = {str(k): v for k, v in group.items()}
            _check_repeat(spec, request_params, group)
            return ContinuationCursor.with_tokens({spec.group: group})
        if items_found or _is_empty_signal(document, spec):
            return ContinuationCursor.exhausted(PaginationConvention.TOKEN)
        raise _malformed(spec)

    cont = document.get("continue") if isinstance(document, Mapping) else None
    legacy = document.get("query-continue") if isinstance(document, Mapping) else None

    if cont is not None:
        if not isinstance(cont, Mapping):
            raise MalformedResponseError(
                f"Unexpected 'continue' node for list {spec.id!r}: {cont!r}", list_kind=spec.id
            )
        if cont:
            group = {str(k): v for k, v in cont.items()}
            _check_repeat(spec, request_params, group)
            return ContinuationCursor.with_tokens({spec.group: group})

    if legacy is not None:
        if not isinstance(legacy, Mapping) or not all(
            isinstance(v, Mapping) for v in legacy.values()
        ):
            raise MalformedResponseError(
                f"Unexpected 'query-continue' node for list {spec.id!r}: {legacy!r}",
                list_kind=spec.id,
            )
        if spec.group not in legacy:
            return ContinuationCursor.exhausted(PaginationConvention.TOKEN)
        own = {str(k): v for k, v in legacy[spec.group].items()}
        _check_repeat(spec, request_params, own)
        groups = {str(name): {str(k): v for k, v in values.items()} for name, values in legacy.items()}
        return previous.merged_with(groups)

    if items_found or _is_empty_signal(document, spec):
        return ContinuationCursor.exhausted(PaginationConvention.TOKEN)
    raise _malformed(spec)


def _offset_cursor(
    document: Any,
    spec: ListEndpointSpec,
    request_params: Mapping[str, Any],
    items_found: bool,
    item_count: int,
    page_size: int | None,
) -> ContinuationCursor:
    if not items_found:
        if _is_empty_signal(document, spec):
            return ContinuationCursor.exhausted(PaginationConvention.OFFSET)
        raise _malformed(spec)
    # A short page is the only end-of-data signal offset-paginated APIs give
    if item_count == 0 or (page_size is not None and item_count < page_size):
        return ContinuationCursor.exhausted(PaginationConvention.OFFSET)
    sent = request_params.get(spec.offset_param, 0)
    try:
        current = int(sent or 0)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(
            f"Offset {sent!r} sent for list {spec.id!r} is not an integer", list_kind=spec.id
        ) from e
    return ContinuationCursor.at_offset(current + item_count, spec.offset_param)


def _page_number_cursor(
    document: Any,
    spec: ListEndpointSpec,
    request_params: Mapping[str, Any],
    items_found: bool,
) -> ContinuationCursor:
    next_page = spec.next_page(document) if spec.next_page is not None else None
    if next_page is None:
        if items_found or _is_empty_signal(document, spec):
            return ContinuationCursor.exhausted(PaginationConvention.PAGE_NUMBER)
        raise _malformed(spec)
    try:
        next_page = int(next_page)
        current = request_params.get(spec.page_param)
        current = int(current) if current is not None else None
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(
            f"Page number {next_page!r} of list {spec.id!r} is not an integer", list_kind=spec.id
        ) from e
    if current is not None and next_page <= current:
        raise SuspectedInfiniteLoopError(
            f"Next page {next_page} of list {spec.id!r} does not advance past page {current}",
            list_kind=spec.id,
        )
    return ContinuationCursor.at_page(next_page, spec.page_param)
