"""REST runtime abstractions."""

from .http_client import HTTPClient, parse_retry_after
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "parse_retry_after",
]
