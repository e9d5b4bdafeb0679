"""Protocols for the collaborators of the paging runtime.

Architecture:
    The enumeration engine never talks HTTP itself. It drives any object
    implementing ``TransportGateway`` and hands raw items to whatever
    ``ItemAdapter`` the caller chooses.

Design Decision:
    Protocols keep the engine testable with plain mock classes and let each
    connector (MediaWiki, Wikia REST, ...) expose its own gateway without a
    shared base class.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

Document = Any
"""A parsed response tree (usually the decoded JSON object)."""


class TransportGateway(Protocol):
    """Sends one request and returns the parsed response document."""

    async def invoke(self, params: Mapping[str, Any]) -> Document:
        """Send a request built from ``params``.

        Raises:
            TransportError: On network or HTTP failure
            OperationFailedError: When the server reports an API error
        """
        ...

    async def max_batch_size(self) -> int:
        """Maximum items per request for the caller's privilege level."""
        ...


class ItemAdapter(Protocol):
    """Converts one raw item record into a domain object."""

    def parse(self, raw: Any, params: Mapping[str, Any]) -> Any:
        ...
