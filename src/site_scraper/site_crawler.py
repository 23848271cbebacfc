"""Breadth-first site crawler with static-to-rendered escalation."""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Deque, List, Optional, Protocol, Set
from urllib.parse import urljoin, urlsplit

from site_scraper.browser_config import BrowserConfig
from site_scraper.config import ScraperConfig
from site_scraper.constants import DEFAULT_MAX_PAGES, DEFAULT_PAGE_TIMEOUT_SECONDS, WEB_SCHEMES
from site_scraper.errors import (
    BlockingSignalError,
    ErrorKind,
    RendererUnavailableError,
    ScrapeError,
    translate_error,
)
from site_scraper.extractor import extract_page
from site_scraper.links import url_host
from site_scraper.models import PageResult, SiteResult
from site_scraper.retrieval import RenderedFetcher, RetrievalMode, StaticFetcher

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    """Contract shared by the static and rendered retrieval strategies."""

    async def fetch(self, url: str, timeout: float) -> Optional[str]: ...

    async def close(self) -> None: ...


FetcherFactory = Callable[[], PageFetcher]


@dataclass
class CrawlJob:
    """Mutable state of one traversal, owned by a single crawl run.

    A URL enters the queue at most once while unvisited. Once dequeued and
    attempted it is marked visited whatever the outcome.
    """

    start_url: str
    base_url: str
    base_domain: str
    max_pages: int
    timeout: float
    mode: RetrievalMode = RetrievalMode.STATIC
    visited: Set[str] = field(default_factory=set)
    queue: Deque[str] = field(default_factory=deque)
    queued: Set[str] = field(default_factory=set)
    pages: List[PageResult] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        start_url: str,
        max_pages: int,
        timeout: float,
        mode: RetrievalMode = RetrievalMode.STATIC,
    ) -> "CrawlJob":
        """Create a job with the seed URL as the only queued entry.

        Raises:
            ScrapeError: If the seed is not an absolute http(s) URL
        """
        parts = urlsplit(start_url)
        host = url_host(start_url)
        if parts.scheme not in WEB_SCHEMES or not host:
            raise ScrapeError(ErrorKind.INVALID_INPUT)

        job = cls(
            start_url=start_url,
            base_url=f"{parts.scheme}://{host}",
            base_domain=host,
            max_pages=max_pages,
            timeout=timeout,
            mode=mode,
        )
        job.push(start_url)
        return job

    @property
    def is_full(self) -> bool:
        return len(self.pages) >= self.max_pages

    def push(self, url: str) -> bool:
        if url in self.visited or url in self.queued:
            return False
        self.queue.append(url)
        self.queued.add(url)
        return True

    def pop(self) -> str:
        url = self.queue.popleft()
        self.queued.discard(url)
        return url

    def enqueue_links(self, paths) -> int:
        """Queue internal paths resolved against the base URL.

        Returns:
            Number of newly queued URLs
        """
        return sum(1 for path in paths if self.push(urljoin(self.base_url, path)))


class SiteCrawler:
    """Crawls a site breadth-first, one page at a time.

    The crawler holds only settings; everything that changes during a crawl
    lives in a :class:`CrawlJob`, so one SiteCrawler can serve concurrent
    crawls.

    The seed page is first fetched with the lightweight static strategy. If
    that yields a bot challenge, the job is thrown away and the whole
    traversal restarts once with the headless browser.
    """

    def __init__(
        self,
        max_pages: int = DEFAULT_MAX_PAGES,
        timeout: float = DEFAULT_PAGE_TIMEOUT_SECONDS,
        static_factory: FetcherFactory = StaticFetcher,
        rendered_factory: FetcherFactory = RenderedFetcher,
    ):
        """Initialize the site crawler.

        Args:
            max_pages: Maximum number of pages to collect
            timeout: Per-fetch timeout in seconds
            static_factory: Builds the plain HTTP fetcher for a job
            rendered_factory: Builds the headless browser fetcher for a job
        """
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self.max_pages = max_pages
        self.timeout = timeout
        self._factories = {
            RetrievalMode.STATIC: static_factory,
            RetrievalMode.RENDERED: rendered_factory,
        }

    @classmethod
    def from_config(cls, config: ScraperConfig, max_pages: Optional[int] = None) -> "SiteCrawler":
        """Build a crawler whose fetchers follow ``config``."""
        browser_config = BrowserConfig(headless=config.headless, user_agent=config.user_agent)
        return cls(
            max_pages=max_pages or config.max_pages,
            timeout=config.timeout,
            static_factory=partial(
                StaticFetcher,
                user_agent=config.user_agent,
                max_redirects=config.max_redirects,
            ),
            rendered_factory=partial(RenderedFetcher, browser_config),
        )

    async def crawl_site(self, start_url: str) -> SiteResult:
        """Crawl a site starting from ``start_url``.

        Args:
            start_url: Absolute http(s) seed URL

        Returns:
            SiteResult with pages in the order they were crawled

        Raises:
            ScrapeError: If the crawl fails as a whole
        """
        logger.info(f"Starting site crawl from: {start_url} (max pages: {self.max_pages})")
        started = time.monotonic()

        try:
            job = await self._run_phases(start_url)
        except Exception as e:
            error = translate_error(e)
            logger.error(f"Crawl of {start_url} failed: {error.message} ({e})")
            if error is e:
                raise
            raise error from e

        result = SiteResult.from_pages(job.base_url, job.pages)
        logger.info(
            f"Crawl complete: {result.total_pages} pages from {job.base_url} "
            f"in {time.monotonic() - started:.2f}s ({job.mode.value} mode)"
        )
        return result

    async def _run_phases(self, start_url: str) -> CrawlJob:
        """Run the static phase, then the rendered phase if the seed was blocked."""
        job = CrawlJob.create(start_url, self.max_pages, self.timeout, RetrievalMode.STATIC)
        try:
            await self._run_job(job)
            return job
        except BlockingSignalError as e:
            logger.warning(
                f"Static fetch of {start_url} hit a bot challenge ({e.marker}); "
                f"restarting crawl with headless browser"
            )

        job = CrawlJob.create(start_url, self.max_pages, self.timeout, RetrievalMode.RENDERED)
        await self._run_job(job)
        return job

    async def _run_job(self, job: CrawlJob) -> None:
        fetcher = self._factories[job.mode]()
        try:
            await self._crawl_loop(job, fetcher)
        finally:
            await fetcher.close()

    async def _crawl_loop(self, job: CrawlJob, fetcher: PageFetcher) -> None:
        while job.queue and not job.is_full:
            url = job.pop()
            if url in job.visited:
                continue

            try:
                page = await self._crawl_page(job, fetcher, url)
            except RendererUnavailableError:
                raise
            except BlockingSignalError as e:
                job.visited.add(url)
                if job.mode is RetrievalMode.STATIC and url == job.start_url:
                    raise
                self._handle_page_failure(job, url, e)
                continue
            except Exception as e:
                job.visited.add(url)
                self._handle_page_failure(job, url, e)
                continue

            job.visited.add(url)
            if page is None:
                continue

            job.pages.append(page)
            logger.info(f"[{len(job.pages)}/{job.max_pages}] Scraped {url}")

            if not job.is_full:
                added = job.enqueue_links(page.internal_links)
                logger.debug(f"Queued {added} new links from {url}")

        if not job.pages:
            raise ScrapeError(ErrorKind.NO_PAGES_SCRAPED)

    async def _crawl_page(
        self, job: CrawlJob, fetcher: PageFetcher, url: str
    ) -> Optional[PageResult]:
        html = await fetcher.fetch(url, job.timeout)
        if html is None:
            logger.debug(f"Skipping non-HTML page: {url}")
            return None
        return extract_page(html, url, job.base_domain)

    def _handle_page_failure(self, job: CrawlJob, url: str, error: Exception) -> None:
        """Absorb a page failure, or re-raise it when nothing can be salvaged."""
        logger.warning(f"Failed to scrape {url}: {error}")
        if not job.pages and not job.queue:
            raise error
