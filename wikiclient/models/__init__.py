"""Data models for wiki API results.

Architecture:
    This module exports the Pydantic v2 models that item adapters produce
    from raw JSON records. All models are immutable (frozen=True).

Design Decisions:
    - Pydantic v2: Type validation and aliasing of the API's field names
    - Frozen models: Items handed to consumers cannot be mutated
    - Unknown fields are ignored so newer server versions do not break parsing

Model Categories:
    - Site: AccountInfo, SiteInfo
    - Pages: WikiPageStub, WikiPage, Revision
    - Lists: RecentChangeItem, LogEventItem, SearchResultItem
    - Extensions: LocalWikiSearchResultItem, DiscussionThread, FlowTopic,
      WbEntity
"""

from .account import AccountInfo
from .changes import LogEventItem, RecentChangeItem
from .discussion import DiscussionThread
from .entity import WbEntity
from .flow import FlowTopic
from .page import WikiPage, WikiPageStub
from .revision import Revision
from .search import LocalWikiSearchResultItem, SearchResultItem
from .site_info import SiteInfo

__all__ = [
    "AccountInfo",
    "DiscussionThread",
    "FlowTopic",
    "LocalWikiSearchResultItem",
    "LogEventItem",
    "RecentChangeItem",
    "Revision",
    "SearchResultItem",
    "SiteInfo",
    "WbEntity",
    "WikiPage",
    "WikiPageStub",
]
