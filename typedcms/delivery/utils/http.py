"""HTTP client helper."""

from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from ..core.exceptions import DecodeError, RateLimitError, TransportError


class HTTPClient:
    """Async HTTP client wrapper.

    Non-2xx responses raise ``TransportError`` (``RateLimitError`` for 429),
    bodies that are not JSON raise ``DecodeError``. Nothing is retried.
    """

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

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def build_url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body."""
        url = self.build_url(url)
        merged = {**self.headers, **(headers or {})}
        try:
            async with self.session.get(url, params=params, headers=merged) as response:
                if response.status == 429:
                    retry_after = _retry_after(response.headers.get("X-Contentful-RateLimit-Reset"))
                    raise RateLimitError(f"Rate limit exceeded for {url}", retry_after=retry_after)
                if not 200 <= response.status < 300:
                    raise TransportError(
                        f"Request failed: {response.status} {response.reason or ''}".rstrip(),
                        status_code=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise DecodeError(f"Malformed JSON response from {url}: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()


def _retry_after(value: str | None, default: int = 60) -> int:
    try:
        return max(int(value), 0) if value is not None else default
    except ValueError:
        return default
