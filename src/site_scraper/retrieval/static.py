"""Lightweight retrieval strategy: a single HTTP GET with a browser persona."""

import asyncio
import logging
from typing import Optional

import httpx

from site_scraper.constants import (
    BLOCKING_STATUS_CODES,
    DEFAULT_HEADERS,
    DEFAULT_MAX_REDIRECTS,
)
from site_scraper.errors import BlockingSignalError
from site_scraper.retrieval.challenge import detect_challenge

logger = logging.getLogger(__name__)


class StaticFetcher:
    """Fetches pages over plain HTTP with httpx.

    TLS certificates are not verified so that self-signed and misconfigured
    sites can still be scraped. Use as an async context manager, or call
    :meth:`close` when the crawl job ends:

        async with StaticFetcher() as fetcher:
            html = await fetcher.fetch("https://example.com", timeout=10)
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            user_agent: Override for the default desktop Chrome user agent
            max_redirects: Redirect hops followed before giving up
            transport: Optional httpx transport (used by tests)
        """
        headers = dict(DEFAULT_HEADERS)
        if user_agent:
            headers["User-Agent"] = user_agent

        self._client = httpx.AsyncClient(
            headers=headers,
            verify=False,
            follow_redirects=True,
            max_redirects=max_redirects,
            transport=transport,
        )

    async def __aenter__(self) -> "StaticFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def fetch(self, url: str, timeout: float) -> Optional[str]:
        """Fetch a URL and return its HTML.

        Args:
            url: Absolute URL to fetch
            timeout: Seconds allowed for the request

        Returns:
            Page markup, or None when the response is not HTML

        Raises:
            BlockingSignalError: If the response is a bot-challenge page
            httpx.HTTPStatusError: For any other non-2xx response
            httpx.TimeoutException: If the whole fetch outlasts ``timeout``
            httpx.HTTPError: For transport failures
        """
        # httpx timeouts apply per read; the deadline covers the whole body
        try:
            response = await asyncio.wait_for(self._client.get(url, timeout=timeout), timeout)
        except asyncio.TimeoutError as e:
            raise httpx.TimeoutException(f"Fetching {url} took longer than {timeout}s") from e

        status = response.status_code

        if status in BLOCKING_STATUS_CODES:
            marker = detect_challenge(response.text, status)
            if marker:
                raise BlockingSignalError(url, marker, status)

        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "text/html" not in content_type:
            logger.debug(f"Skipping {url}: content-type {content_type or 'missing'}")
            return None

        html = response.text
        marker = detect_challenge(html, status)
        if marker:
            raise BlockingSignalError(url, marker, status)

        return html

    async def close(self) -> None:
        await self._client.aclose()
