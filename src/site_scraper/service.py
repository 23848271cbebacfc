"""Entry point for scraping a site: adapter selection, then crawling."""

import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

from site_scraper.adapters import select_adapter
from site_scraper.config import ScraperConfig
from site_scraper.constants import DEFAULT_MAX_PAGES, MAX_PAGES_LIMIT, WEB_SCHEMES
from site_scraper.errors import ErrorKind, ScrapeError
from site_scraper.models import SiteResult
from site_scraper.site_crawler import SiteCrawler

logger = logging.getLogger(__name__)


def validate_request(url: str, max_pages: Optional[int] = None) -> Tuple[str, int]:
    """Check a scrape request before it reaches the crawler.

    Args:
        url: Seed URL supplied by the caller
        max_pages: Requested page count (defaults to DEFAULT_MAX_PAGES)

    Returns:
        Tuple of (stripped URL, max_pages clamped to 1..MAX_PAGES_LIMIT)

    Raises:
        ScrapeError: If the URL is not an absolute http(s) URL
    """
    url = (url or "").strip()
    if not url:
        raise ScrapeError(ErrorKind.INVALID_INPUT, "URL is required")

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as e:
        raise ScrapeError(ErrorKind.INVALID_INPUT) from e

    if parts.scheme not in WEB_SCHEMES or not hostname:
        raise ScrapeError(
            ErrorKind.INVALID_INPUT,
            "Please provide a valid URL with http or https protocol",
        )

    pages = DEFAULT_MAX_PAGES if max_pages is None else int(max_pages)
    return url, max(1, min(pages, MAX_PAGES_LIMIT))


async def scrape_site(
    url: str,
    max_pages: Optional[int] = None,
    config: Optional[ScraperConfig] = None,
    crawler: Optional[SiteCrawler] = None,
) -> SiteResult:
    """Scrape a website.

    Hosts with a registered adapter are answered by that adapter; everything
    else goes through the breadth-first crawler.

    Args:
        url: Absolute http(s) seed URL
        max_pages: Maximum number of pages to collect (clamped to 1..5)
        config: Process configuration (defaults to built-in values)
        crawler: Optional preconfigured crawler (used by tests)

    Returns:
        SiteResult for the site

    Raises:
        ScrapeError: If the site could not be scraped
    """
    config = config or ScraperConfig()
    if max_pages is None:
        max_pages = config.max_pages
    url, max_pages = validate_request(url, max_pages)

    adapter = select_adapter(url)
    if adapter is not None:
        logger.info(f"Using {adapter.name} adapter for {url}")
        return await adapter.scrape(url, max_pages)

    if crawler is None:
        crawler = SiteCrawler.from_config(config, max_pages=max_pages)
    return await crawler.crawl_site(url)
