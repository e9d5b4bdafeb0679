"""MediaWiki API response validation and error mapping.

Every ``api.php`` response goes through ``MediaWikiResponseParser.parse``
before anything reads it: warnings are logged per module, and an ``error``
node is turned into the matching exception.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from wikiclient.core.exceptions import (
    AccountAssertionFailureError,
    BadTokenError,
    InvalidActionError,
    MaxLagError,
    OperationConflictError,
    OperationFailedError,
    RateLimitError,
    StaleContinuationError,
    UnauthorizedOperationError,
    UnexpectedDataError,
)

logger = logging.getLogger(__name__)

MAXLAG_RETRY_AFTER = 5.0
RATELIMITED_RETRY_AFTER = 10.0

_ERROR_TYPES: dict[str, type[OperationFailedError]] = {
    "permissiondenied": UnauthorizedOperationError,
    "readapidenied": UnauthorizedOperationError,
    "mustbeloggedin": UnauthorizedOperationError,
    "permissions": UnauthorizedOperationError,
    "badtoken": BadTokenError,
    "unknown_action": InvalidActionError,
    "assertuserfailed": AccountAssertionFailureError,
    "assertbotfailed": AccountAssertionFailureError,
    "prev_revision": OperationConflictError,
    "badcontinue": StaleContinuationError,
}


class MediaWikiResponseParser:
    """Validates parsed ``api.php`` responses."""

    def parse(self, document: Any) -> Any:
        """Return ``document`` unchanged after checking it for errors.

        Raises:
            UnexpectedDataError: The document is not a JSON object or array
            MaxLagError: The ``maxlag`` check failed
            RateLimitError: The account hit a rate limit
            OperationFailedError: Any other API error (or a subclass)
        """
        # MW 1.19 answers some actions with [] instead of {}
        if isinstance(document, list):
            return document
        if not isinstance(document, Mapping):
            raise UnexpectedDataError(
                f"Expected a JSON object from api.php, got {type(document).__name__}"
            )
        warnings = document.get("warnings")
        if isinstance(warnings, Mapping) and logger.isEnabledFor(logging.WARNING):
            for module, warning in warnings.items():
                logger.warning("API warning [%s]: %s", module, _warning_text(warning))
        error = document.get("error")
        if error is not None:
            self.on_api_error(error)
        return document

    def on_api_error(self, error: Any) -> None:
        """Raise the exception matching an ``error`` node."""
        if not isinstance(error, Mapping):
            raise OperationFailedError(None, str(error), details=error)
        code = error.get("code")
        message = str(error.get("info") or error.get("*") or "").strip() or None
        logger.warning("API error: %s - %s", code, message)

        if code == "maxlag":
            lag = error.get("lag")
            raise MaxLagError(
                f"maxlag: {message}",
                lag=float(lag) if lag is not None else None,
                retry_after=MAXLAG_RETRY_AFTER,
            )
        if code == "ratelimited":
            raise RateLimitError(f"ratelimited: {message}", retry_after=RATELIMITED_RETRY_AFTER)
        if code == "permissions" and error.get("permissions"):
            message = f"{message} Desired permissions: {json.dumps(error['permissions'])}"

        error_type = _ERROR_TYPES.get(code or "")
        if error_type is None:
            if code and code.endswith("conflict"):
                error_type = OperationConflictError
            else:
                error_type = OperationFailedError
        raise error_type(code, message, details=dict(error))


def _warning_text(warning: Any) -> str:
    if isinstance(warning, Mapping):
        # formatversion=2 uses "warnings", formatversion=1 uses "*"
        text = warning.get("warnings", warning.get("*"))
        if text is not None:
            return str(text)
    return str(warning)


DEFAULT_PARSER = MediaWikiResponseParser()
