"""Tests for the static HTTP retrieval strategy."""

import asyncio
import time

import httpx
import pytest

from site_scraper.errors import BlockingSignalError
from site_scraper.retrieval.static import StaticFetcher

pytest_plugins = ('pytest_asyncio',)

HTML_HEADERS = {"content-type": "text/html; charset=utf-8"}


def make_fetcher(handler, **kwargs) -> StaticFetcher:
    return StaticFetcher(transport=httpx.MockTransport(handler), **kwargs)


class TestStaticFetcher:
    """Test cases for StaticFetcher."""

    @pytest.mark.asyncio
    async def test_returns_html(self):
        """Test a 200 HTML response returns its markup."""
        def handler(request):
            return httpx.Response(200, headers=HTML_HEADERS, text="<title>Hi</title>")

        async with make_fetcher(handler) as fetcher:
            html = await fetcher.fetch("https://example.com/", timeout=5)

        assert html == "<title>Hi</title>"

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self):
        """Test the browser persona headers are sent."""
        seen = {}

        def handler(request):
            seen["headers"] = request.headers
            return httpx.Response(200, headers=HTML_HEADERS, text="ok")

        async with make_fetcher(handler, user_agent="TestAgent/1.0") as fetcher:
            await fetcher.fetch("https://example.com/", timeout=5)

        headers = seen["headers"]
        assert headers["User-Agent"] == "TestAgent/1.0"
        assert headers["Accept-Language"].startswith("en-US")
        assert headers["Sec-Fetch-Mode"] == "navigate"

    @pytest.mark.asyncio
    async def test_non_html_returns_none(self):
        def handler(request):
            return httpx.Response(200, headers={"content-type": "application/pdf"}, content=b"%PDF")

        async with make_fetcher(handler) as fetcher:
            assert await fetcher.fetch("https://example.com/doc", timeout=5) is None

    @pytest.mark.asyncio
    async def test_challenge_on_200_raises(self):
        def handler(request):
            return httpx.Response(200, headers=HTML_HEADERS, text="<title>Just a moment...</title>")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(BlockingSignalError) as exc_info:
                await fetcher.fetch("https://example.com/", timeout=5)

        assert exc_info.value.marker == "just a moment..."
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_challenge_on_403_raises(self):
        """Test a 403 block page is a blocking signal, not a status error."""
        def handler(request):
            return httpx.Response(403, headers=HTML_HEADERS, text="<h1>You have been blocked</h1>")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(BlockingSignalError) as exc_info:
                await fetcher.fetch("https://example.com/", timeout=5)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_plain_403_raises_status_error(self):
        def handler(request):
            return httpx.Response(403, headers=HTML_HEADERS, text="Forbidden")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await fetcher.fetch("https://example.com/", timeout=5)

        assert exc_info.value.response.status_code == 403

    @pytest.mark.asyncio
    async def test_not_found_raises_status_error(self):
        def handler(request):
            return httpx.Response(404, headers=HTML_HEADERS, text="<title>Not found</title>")

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(httpx.HTTPStatusError):
                await fetcher.fetch("https://example.com/missing", timeout=5)

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"location": "https://example.com/new"})
            return httpx.Response(200, headers=HTML_HEADERS, text="new page")

        async with make_fetcher(handler) as fetcher:
            assert await fetcher.fetch("https://example.com/old", timeout=5) == "new page"

    @pytest.mark.asyncio
    async def test_too_many_redirects(self):
        def handler(request):
            return httpx.Response(302, headers={"location": "https://example.com/loop"})

        async with make_fetcher(handler, max_redirects=2) as fetcher:
            with pytest.raises(httpx.TooManyRedirects):
                await fetcher.fetch("https://example.com/loop", timeout=5)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_fetcher(handler) as fetcher:
            with pytest.raises(httpx.ConnectError):
                await fetcher.fetch("https://example.com/", timeout=5)

    @pytest.mark.asyncio
    async def test_slow_body_hits_total_deadline(self):
        """Test a body trickled one byte at a time is cut off at the timeout."""
        async def trickle():
            for byte in b"<html><title>Slow</title><p>drip</p></html>":
                await asyncio.sleep(0.1)
                yield bytes([byte])

        def handler(request):
            return httpx.Response(200, headers=HTML_HEADERS, content=trickle())

        async with make_fetcher(handler) as fetcher:
            started = time.monotonic()
            with pytest.raises(httpx.TimeoutException):
                await fetcher.fetch("https://example.com/slow", timeout=0.5)
            elapsed = time.monotonic() - started

        assert elapsed < 2.0
