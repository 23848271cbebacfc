"""
Rendered retrieval strategy using a headless Playwright browser.

Used when the lightweight HTTP fetch is gated by a bot challenge. The browser
is launched lazily on the first fetch and reused for every page of one crawl
job; each page gets its own isolated browser context.
"""
import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright
from playwright_stealth import Stealth

from site_scraper.browser_config import BrowserConfig
from site_scraper.errors import BlockingSignalError, RendererUnavailableError
from site_scraper.retrieval.challenge import detect_challenge

logger = logging.getLogger(__name__)

_SCROLL_SCRIPT = "fraction => window.scrollTo(0, document.body.scrollHeight * fraction)"


class RenderedFetcher:
    """
    Playwright-based fetcher for pages behind JavaScript challenges.

        async with RenderedFetcher(BrowserConfig()) as fetcher:
            html = await fetcher.fetch("https://example.com", timeout=10)
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self._config = config or BrowserConfig()
        self._stealth = Stealth()
        self._playwright = None
        self._browser = None

    async def __aenter__(self) -> "RenderedFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _get_browser(self):
        if self._browser is None:
            await self._launch()
        return self._browser

    async def _launch(self) -> None:
        """Start Playwright and launch the configured browser.

        Raises:
            RendererUnavailableError: If no browser runtime can be started
        """
        logger.info(
            f"Launching {self._config.browser_type} browser "
            f"(headless={self._config.headless})"
        )
        try:
            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self._config.browser_type)
            self._browser = await launcher.launch(
                headless=self._config.headless,
                args=self._config.launch_args,
            )
        except (PlaywrightError, OSError) as e:
            await self.close()
            raise RendererUnavailableError(
                f"Headless {self._config.browser_type} is not available: {e}"
            ) from e

    async def fetch(self, url: str, timeout: float) -> Optional[str]:
        """
        Render a URL and return the resulting HTML.

        Args:
            url: Absolute URL to render
            timeout: Seconds allowed for navigation

        Returns:
            Rendered markup, or None when the document is not HTML

        Raises:
            BlockingSignalError: If the challenge is still showing after waiting
            RendererUnavailableError: If the browser cannot be launched
            playwright.async_api.Error: For navigation failures and timeouts
        """
        browser = await self._get_browser()
        context = await browser.new_context(
            viewport=self._config.viewport,
            user_agent=self._config.user_agent,
            extra_http_headers=self._config.extra_headers,
            locale="en-US",
            ignore_https_errors=True,
            java_script_enabled=True,
        )

        try:
            page = await context.new_page()
            if self._config.stealth_mode:
                await self._stealth.apply_stealth_async(page)

            logger.debug(f"Rendering: {url}")

            response = await page.goto(
                url,
                wait_until=self._config.wait_until,
                timeout=timeout * 1000,  # Playwright uses milliseconds
            )

            status = response.status if response else 200
            if response is not None:
                content_type = response.headers.get("content-type", "").lower()
                if content_type and "text/html" not in content_type:
                    logger.debug(f"Skipping {url}: content-type {content_type}")
                    return None

            # Give an interstitial time to run its checks and redirect
            await page.wait_for_timeout(self._config.settle_ms)
            await self._scroll(page)

            html = await page.content()
            if detect_challenge(html, status):
                logger.info(f"Challenge still showing at {url}, waiting {self._config.challenge_wait_ms}ms")
                await page.wait_for_timeout(self._config.challenge_wait_ms)
                html = await page.content()
                marker = detect_challenge(html, status)
                if marker:
                    raise BlockingSignalError(url, marker, status)

            return html

        finally:
            # Always close context to ensure isolation
            await context.close()

    async def _scroll(self, page) -> None:
        """Scroll part of the way down to trigger lazy-loaded content."""
        try:
            await page.evaluate(_SCROLL_SCRIPT, self._config.scroll_fraction)
        except PlaywrightError as e:
            logger.debug(f"Scroll failed: {e}")

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser:
            logger.info("Closing browser")
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
