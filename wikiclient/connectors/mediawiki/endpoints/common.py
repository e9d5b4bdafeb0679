"""Helpers shared by the MediaWiki list endpoint definitions."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ValidationError

from wikiclient.core.exceptions import UnexpectedDataError


def format_value(value: Any) -> Any:
    """Convert a Python value into its api.php parameter form.

    Returns None for values that must be omitted (None, False).
    """
    if value is None or value is False:
        return None
    if value is True:
        return "1"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, (list, tuple, set, frozenset)):
        parts = (format_value(v) for v in value)
        return "|".join(str(p) for p in parts if p is not None)
    return value


def prefixed(prefix: str, params: Mapping[str, Any]) -> dict[str, Any]:
    """Prefix friendly parameter names with the module prefix.

    ``{"title": "Category:X"}`` becomes ``{"cmtitle": "Category:X"}`` for
    prefix "cm"; names that already carry the prefix pass through.
    """
    query: dict[str, Any] = {}
    for key, value in params.items():
        formatted = format_value(value)
        if formatted is None:
            continue
        name = key if key.startswith(prefix) else f"{prefix}{key}"
        query[name] = formatted
    return query


def list_query(list_name: str, prefix: str, params: Mapping[str, Any]) -> dict[str, Any]:
    """Base parameters of a ``list=`` module request."""
    query: dict[str, Any] = {"action": "query", "list": list_name, "continue": ""}
    query.update(prefixed(prefix, params))
    return query


def is_batch_complete(document: Any) -> bool:
    """The response MediaWiki sends when a query matched nothing."""
    return isinstance(document, Mapping) and "batchcomplete" in document


class ModelAdapter:
    """Adapter validating a raw item record into ``model``."""

    model: ClassVar[type[BaseModel]]

    def parse(self, raw: Any, params: Mapping[str, Any]) -> Any:
        try:
            return self.model.model_validate(raw)
        except ValidationError as e:
            raise UnexpectedDataError(
                f"Cannot parse {self.model.__name__} from {raw!r}: {e}"
            ) from e
