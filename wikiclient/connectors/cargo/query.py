"""Cargo extension queries (``action=cargoquery``).

Cargo pages with ``limit``/``offset`` and gives no continuation marker, so
enumeration uses the OFFSET convention: a page shorter than the page size
ends the result set.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wikiclient.core.enums import PaginationConvention
from wikiclient.core.exceptions import MalformedResponseError
from wikiclient.runtime.paging import EnumerationContext, ListEndpointSpec, ListRequestDescriptor

if TYPE_CHECKING:
    from wikiclient.connectors.mediawiki import WikiSite

logger = logging.getLogger(__name__)

CARGO_LIST_KIND = "cargoquery"


class CargoQueryParameters(BaseModel):
    """Parameters of one Cargo query."""

    tables: tuple[str, ...] = Field(..., min_length=1)
    fields: tuple[str, ...] = Field(..., min_length=1)
    where: str | None = None
    join_on: tuple[str, ...] = ()
    group_by: str | None = None
    having: str | None = None
    order_by: tuple[str, ...] = ()
    limit: int = Field(default=50, gt=0)
    offset: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("tables", "fields")
    @classmethod
    def validate_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name or not name.strip() for name in v):
            raise ValueError("names cannot be empty")
        return v

    def to_request(self) -> dict[str, Any]:
        """api.php parameters, without ``limit`` and ``offset``."""
        request: dict[str, Any] = {
            "action": "cargoquery",
            "tables": ",".join(self.tables),
            "fields": ",".join(self.fields),
        }
        optional = {
            "where": self.where,
            "join_on": ",".join(self.join_on) or None,
            "group_by": self.group_by,
            "having": self.having,
            "order_by": ",".join(self.order_by) or None,
        }
        request.update({k: v for k, v in optional.items() if v is not None})
        return request

    def pseudo_query(self) -> str:
        """SQL-like rendering for debug logs."""
        parts = [f"SELECT {', '.join(self.fields)} FROM {', '.join(self.tables)}"]
        if self.join_on:
            parts.append(f"JOIN ON {', '.join(self.join_on)}")
        if self.where:
            parts.append(f"WHERE {self.where}")
        if self.group_by:
            parts.append(f"GROUP BY {self.group_by}")
        if self.having:
            parts.append(f"HAVING {self.having}")
        if self.order_by:
            parts.append(f"ORDER BY {', '.join(self.order_by)}")
        parts.append(f"OFFSET {self.offset} FETCH {self.limit} ROWS ONLY")
        return " ".join(parts)


def build_query(params: Mapping[str, Any]) -> dict[str, Any]:
    query = dict(params)
    query.setdefault("offset", 0)
    return query


def extract_rows(document: Any) -> list[Any] | None:
    """Rows of ``cargoquery``; each row's fields sit under ``title``."""
    if not isinstance(document, Mapping) or "cargoquery" not in document:
        return None
    rows = document["cargoquery"]
    if not isinstance(rows, list):
        raise MalformedResponseError(f"Invalid cargoquery node: {rows!r}", list_kind=CARGO_LIST_KIND)
    return [row.get("title", {}) if isinstance(row, Mapping) else row for row in rows]


SPEC = ListEndpointSpec(
    id=CARGO_LIST_KIND,
    convention=PaginationConvention.OFFSET,
    build_query=build_query,
    limit_param="limit",
    offset_param="offset",
    extract_items=extract_rows,
)


async def execute_cargo_query(site: WikiSite, params: CargoQueryParameters) -> list[dict[str, Any]]:
    """Run one Cargo query page and return its rows."""
    logger.debug("Invoke Cargo query: %s", params.pseudo_query())
    document = await site.execute({**params.to_request(), "limit": params.limit, "offset": params.offset})
    rows = extract_rows(document)
    if rows is None:
        logger.warning("cargoquery node is missing in the response")
        return []
    return rows


def enum_cargo_rows(
    site: WikiSite,
    params: CargoQueryParameters,
    *,
    page_size: int | None = None,
    context: EnumerationContext | None = None,
) -> AsyncIterator[dict[str, Any]]:
    """Enumerate every row of a Cargo query, starting at ``params.offset``.

    Args:
        site: Wiki site with the Cargo extension
        params: Query; ``limit`` is the default page size
        page_size: Rows per request, overriding ``params.limit``
        context: Cancellation signal and observability hook
    """
    logger.debug("Enumerate Cargo query: %s", params.pseudo_query())
    descriptor = ListRequestDescriptor(
        CARGO_LIST_KIND,
        {**params.to_request(), "offset": params.offset},
        page_size or params.limit,
    )
    return site.enumerate_raw(descriptor, context=context, spec=SPEC)
