"""Thin REST transport over HTTPClient."""

from __future__ import annotations

from typing import Any

from .http_client import HTTPClient


class RESTTransport:
    """GET/POST against one base URL with default headers."""

    def __init__(
        self,
        base_url: str,
        http: HTTPClient | None = None,
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url
        self._http = http or HTTPClient(timeout=timeout)
        self._headers = dict(headers or {})

    @property
    def http(self) -> HTTPClient:
        return self._http

    def _url(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.base_url}{path}"

    def _merge_headers(self, headers: dict[str, str] | None) -> dict[str, str] | None:
        if not self._headers and not headers:
            return None
        return {**self._headers, **(headers or {})}

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        error_body: bool = False,
    ) -> Any:
        return await self._http.get(
            self._url(path),
            params=params,
            headers=self._merge_headers(headers),
            error_body=error_body,
        )

    async def post(
        self,
        path: str,
        data: dict[str, Any] | None = None,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        error_body: bool = False,
    ) -> Any:
        return await self._http.post(
            self._url(path),
            data=data,
            json=json_body,
            params=params,
            headers=self._merge_headers(headers),
            error_body=error_body,
        )

    async def close(self) -> None:
        await self._http.close()
