"""Async HTTP client wrapper."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable
from email.utils import parsedate_to_datetime
from typing import Any

import aiohttp

from ...core.exceptions import RateLimitError, TransportError

logger = logging.getLogger(__name__)

# Returns the number of seconds to hold back subsequent requests, or None
ResponseHook = Callable[[aiohttp.ClientResponse], "float | None | Awaitable[float | None]"]

RATE_LIMIT_STATUSES = frozenset({418, 429})
DEFAULT_RETRY_AFTER = 10.0


def parse_retry_after(value: str | None, default: float = DEFAULT_RETRY_AFTER) -> float:
    """Parse a ``Retry-After`` header given in seconds or as an HTTP date."""
    if not value:
        return default
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    return max(0.0, when.timestamp() - time.time())


class HTTPClient:
    """Async HTTP client wrapper with a throttle window and response hooks."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: aiohttp.ClientSession | None = None
        self._response_hooks: list[ResponseHook] = []
        self._throttle_until: float | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def add_response_hook(self, hook: ResponseHook) -> None:
        """Register a hook called with every response before it is consumed."""
        self._response_hooks.append(hook)

    def set_throttle(self, seconds: float) -> None:
        """Hold back requests for ``seconds``; only ever extends the window."""
        if seconds <= 0:
            return
        until = time.time() + seconds
        if self._throttle_until is None or until > self._throttle_until:
            self._throttle_until = until

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        error_body: bool = False,
    ) -> Any:
        """GET request returning parsed JSON.

        With ``error_body``, a 4xx/5xx response that carries a JSON body
        returns that body instead of raising, for APIs that describe errors
        there.
        """
        return await self._request("GET", url, error_body, params=params, headers=headers)

    async def post(
        self,
        url: str,
        data: dict[str, Any] | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        error_body: bool = False,
    ) -> Any:
        """POST request returning parsed JSON."""
        kwargs: dict[str, Any] = {"params": params, "headers": headers}
        if data is not None:
            kwargs["data"] = data
        if json is not None:
            kwargs["json"] = json
        return await self._request("POST", url, error_body, **kwargs)

    async def _request(self, method: str, url: str, error_body: bool = False, **kwargs: Any) -> Any:
        await self._wait_for_throttle()
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"
        send = self.session.get if method == "GET" else self.session.post
        try:
            async with send(url, **kwargs) as response:
                await self._run_response_hooks(response)
                if response.status in RATE_LIMIT_STATUSES or (
                    response.status == 503 and response.headers.get("Retry-After")
                ):
                    retry_after = parse_retry_after(response.headers.get("Retry-After"))
                    self.set_throttle(retry_after)
                    raise RateLimitError(
                        f"HTTP {response.status} from {method} {url}",
                        retry_after=retry_after,
                    )
                if response.status >= 400 and not error_body:
                    raise TransportError(
                        f"HTTP {response.status} from {method} {url}",
                        status_code=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    status = response.status if response.status >= 400 else None
                    raise TransportError(
                        f"Invalid JSON in response from {method} {url}", status_code=status
                    ) from e
        except aiohttp.ClientConnectionError:
            raise
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    async def _wait_for_throttle(self) -> None:
        if self._throttle_until is None:
            return
        delay = self._throttle_until - time.time()
        if delay > 0:
            logger.debug("Throttled: waiting %.2fs before next request", delay)
            await asyncio.sleep(delay)
        self._throttle_until = None

    async def _run_response_hooks(self, response: aiohttp.ClientResponse) -> None:
        for hook in self._response_hooks:
            try:
                delay = hook(response)
                if inspect.isawaitable(delay):
                    delay = await delay
            except Exception:
                logger.exception("Response hook %r failed", hook)
                continue
            if delay:
                self.set_throttle(float(delay))

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
