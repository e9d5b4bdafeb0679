"""Shared Wikia/FANDOM connector constants."""

from __future__ import annotations

# Entry points relative to the site root (the URL api.php lives under)
WIKIA_API_PATH = "/api/v1"
NIRVANA_PATH = "/wikia.php"

# Local wiki search (/Search/List)
SEARCH_DEFAULT_PAGE_SIZE = 25
SEARCH_MAX_LIMIT = 200
SEARCH_DEFAULT_NAMESPACES = (0, 14)
SEARCH_DEFAULT_MIN_QUALITY = 10
SEARCH_RANKINGS = frozenset(
    {
        "default",
        "newest",
        "oldest",
        "recently-modified",
        "stable",
        "most-viewed",
        "freshest",
        "stalest",
    }
)

# Discussion threads (DiscussionThread::getThreads)
DISCUSSION_DEFAULT_PAGE_SIZE = 20
DISCUSSION_MAX_LIMIT = 100


def site_root(api_endpoint: str) -> str:
    """Site root of an api.php URL, e.g. https://x.fandom.com for .../api.php."""
    root = api_endpoint.rstrip("/")
    if root.endswith("api.php"):
        root = root[: -len("api.php")].rstrip("/")
    return root
