"""Core enumerations shared by the paging runtime and the connectors.

Architecture:
    This module defines the standardized enums used throughout the library.
    They describe how a server-side list paginates, the lifecycle of an
    enumeration session, the state of a continuation cursor, and the
    privilege tier of the calling account.

Design Decisions:
    - String enums: Allow easy logging and serialization of states
    - Convention enum instead of subclass overrides: the enumeration engine
      stays convention-agnostic and dispatches through the cursor

Key Types:
    - PaginationConvention: token / offset / page-number pagination
    - SessionState: lifecycle of an enumeration session
    - CursorState: Initial / Active / Exhausted cursor
    - PrivilegeLevel: caller capability tier (affects batch limits)
    - RetryAction: classification produced by the retry policy
"""

from enum import Enum


class PaginationConvention(str, Enum):
    """How a list kind paginates across server responses.

    TOKEN: the server returns an opaque continuation object whose keys are
        echoed verbatim on the next request (MediaWiki ``continue``).
    OFFSET: the request carries a numeric offset; the next offset is the
        previous offset plus the number of items returned (Cargo).
    PAGE_NUMBER: the response embeds the next page number, either as batch
        counters or inside a "next" link (Wikia search, discussions).
    """

    TOKEN = "token"
    OFFSET = "offset"
    PAGE_NUMBER = "page_number"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class SessionState(str, Enum):
    """Lifecycle state of an enumeration session.

    ``Created -> Fetching -> (Yielding <-> Fetching) -> Completed``, with
    ``Faulted`` reachable from any state. ``Completed`` and ``Faulted`` are
    terminal.
    """

    CREATED = "created"
    FETCHING = "fetching"
    YIELDING = "yielding"
    COMPLETED = "completed"
    FAULTED = "faulted"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is possible."""
        return self in (SessionState.COMPLETED, SessionState.FAULTED)

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class CursorState(str, Enum):
    """State of a continuation cursor."""

    INITIAL = "initial"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class PrivilegeLevel(str, Enum):
    """Capability tier of the calling account.

    MediaWiki grants the ``apihighlimits`` right to bots and sysops, which
    raises the maximum number of items per request tenfold.
    """

    ANONYMOUS = "anonymous"
    USER = "user"
    HIGH_LIMITS = "high_limits"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value


class RetryAction(str, Enum):
    """Decision produced by the retry policy for a failed fetch."""

    TRANSIENT = "transient"
    RATE_LIMITED = "rate_limited"
    FATAL = "fatal"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value
