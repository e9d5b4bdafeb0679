"""Wikia/FANDOM connector."""

from .endpoints import DISCUSSION_THREADS, LOCAL_SEARCH
from .parser import WikiaResponseParser
from .site import WikiaApiGateway, WikiaSite

__all__ = [
    "DISCUSSION_THREADS",
    "LOCAL_SEARCH",
    "WikiaApiGateway",
    "WikiaResponseParser",
    "WikiaSite",
]
