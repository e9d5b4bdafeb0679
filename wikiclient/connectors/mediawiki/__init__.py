"""MediaWiki api.php connector."""

from .config import SiteOptions
from .endpoints import generator_spec, get_endpoint_adapter, get_endpoint_spec, list_kinds
from .parser import MediaWikiResponseParser
from .site import WikiSite, page_from_node

__all__ = [
    "MediaWikiResponseParser",
    "SiteOptions",
    "WikiSite",
    "generator_spec",
    "get_endpoint_adapter",
    "get_endpoint_spec",
    "list_kinds",
    "page_from_node",
]
