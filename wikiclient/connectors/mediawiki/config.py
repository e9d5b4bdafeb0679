"""Shared MediaWiki connector constants and per-site options.

This module centralizes request defaults and privilege-dependent limits so
the site class can stay small and focused.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wikiclient.core.enums import PrivilegeLevel
from wikiclient.runtime.paging.enumerator import DEFAULT_MAX_EMPTY_PAGES
from wikiclient.utils.retry import RetryPolicy

DEFAULT_USER_AGENT = "wikiclient/0.1 (async MediaWiki API client)"
DEFAULT_TIMEOUT = 30.0

# Parameters added to every api.php request
RESPONSE_FORMAT = {"format": "json", "formatversion": 2}
DEFAULT_MAXLAG = 5

# Items per list request, by privilege level
LIST_LIMITS = {
    PrivilegeLevel.ANONYMOUS: 500,
    PrivilegeLevel.USER: 500,
    PrivilegeLevel.HIGH_LIMITS: 5000,
}

# Values per multi-value parameter (titles, pageids, ids), by privilege level
MULTIVALUE_LIMITS = {
    PrivilegeLevel.ANONYMOUS: 50,
    PrivilegeLevel.USER: 50,
    PrivilegeLevel.HIGH_LIMITS: 500,
}

DEFAULT_PAGE_SIZE = 10
DEFAULT_THROTTLE_DELAY = 0.0

# Retry defaults: 3 retries spaced up to 10 seconds apart
DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_RETRY_DELAY = 10.0

# Maximum redirect hops followed while resolving a title
MAX_REDIRECT_HOPS = 32


@dataclass(frozen=True)
class SiteOptions:
    """Per-site tunables.

    Attributes:
        api_endpoint: URL of the site's api.php
        user_agent: User-Agent header sent with every request
        timeout: Total request timeout in seconds
        maxlag: ``maxlag`` request parameter; None disables it
        throttle_delay: Delay between consecutive requests (seconds)
        max_empty_pages: Consecutive empty pages tolerated with a live cursor
        retry_policy: Retry policy for page fetches and single requests
    """

    api_endpoint: str
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    maxlag: int | None = DEFAULT_MAXLAG
    throttle_delay: float = DEFAULT_THROTTLE_DELAY
    max_empty_pages: int = DEFAULT_MAX_EMPTY_PAGES
    retry_policy: RetryPolicy = field(
        default_factory=lambda: RetryPolicy(
            max_attempts=DEFAULT_MAX_ATTEMPTS,
            max_delay=DEFAULT_RETRY_DELAY,
            max_rate_limit_wait=DEFAULT_RETRY_DELAY,
        )
    )

    def __post_init__(self) -> None:
        if not self.api_endpoint:
            raise ValueError("api_endpoint must be a non-empty URL")
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        if self.maxlag is not None and self.maxlag < 0:
            raise ValueError("maxlag cannot be negative")
        if self.throttle_delay < 0:
            raise ValueError("throttle_delay cannot be negative")
        if self.max_empty_pages < 1:
            raise ValueError("max_empty_pages must be at least 1")
