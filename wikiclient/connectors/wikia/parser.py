"""Wikia REST/Nirvana response validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from wikiclient.core.exceptions import WikiaApiError

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "NotFoundApiException"


class WikiaResponseParser:
    """Turns Wikia error payloads into ``WikiaApiError``.

    Two shapes exist: an ``exception`` node
    (``{"exception": {"type": ..., "message": ..., "code": 404}}``) and a
    flat ``{"status": 404, "error": ..., "details": ...}`` object.
    """

    def parse(self, document: Any) -> Any:
        if not isinstance(document, Mapping):
            return document
        exception = document.get("exception")
        if isinstance(exception, Mapping):
            raise WikiaApiError(
                exception.get("type"),
                exception.get("message") or exception.get("details"),
                status=_as_int(exception.get("code")),
                trace_id=document.get("trace_id"),
            )
        status = _as_int(document.get("status"))
        error = document.get("error")
        if status is not None and status >= 400:
            raise WikiaApiError(error, document.get("details"), status=status)
        if error is not None:
            logger.warning(
                "Detected 'error' node in the response, but status does not signal an error. "
                "Status: %s. Error: %s.",
                status,
                error,
            )
        return document


def _as_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
