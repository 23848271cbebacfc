"""Site scraper: bounded same-domain crawling with structured content extraction."""

__version__ = "0.1.0"

from site_scraper.site_crawler import SiteCrawler, CrawlJob
from site_scraper.service import scrape_site, validate_request
from site_scraper.extractor import extract_page
from site_scraper.links import classify_links
from site_scraper.models import (
    Heading,
    ImageRecord,
    PageResult,
    SiteResult,
)
from site_scraper.errors import (
    ErrorKind,
    ScrapeError,
    BlockingSignalError,
    RendererUnavailableError,
)
from site_scraper.config import ScraperConfig, settings
from site_scraper.browser_config import BrowserConfig

# Retrieval strategies
from site_scraper.retrieval import (
    RetrievalMode,
    StaticFetcher,
    RenderedFetcher,
    detect_challenge,
)

# Site adapters
from site_scraper.adapters import (
    GitHubProfileAdapter,
    select_adapter,
)

__all__ = [
    # Core
    "SiteCrawler",
    "CrawlJob",
    "scrape_site",
    "validate_request",
    "extract_page",
    "classify_links",
    # Models
    "Heading",
    "ImageRecord",
    "PageResult",
    "SiteResult",
    # Errors
    "ErrorKind",
    "ScrapeError",
    "BlockingSignalError",
    "RendererUnavailableError",
    # Config
    "ScraperConfig",
    "BrowserConfig",
    "settings",
    # Retrieval
    "RetrievalMode",
    "StaticFetcher",
    "RenderedFetcher",
    "detect_challenge",
    # Adapters
    "GitHubProfileAdapter",
    "select_adapter",
]
