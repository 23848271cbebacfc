"""Tests for request validation and adapter dispatch."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from site_scraper.config import ScraperConfig
from site_scraper.errors import ErrorKind, ScrapeError
from site_scraper.models import SiteResult
from site_scraper.service import scrape_site, validate_request

pytest_plugins = ('pytest_asyncio',)


class TestValidateRequest:
    """Test cases for validate_request."""

    def test_valid_url(self):
        assert validate_request("  https://example.com/  ", 3) == ("https://example.com/", 3)

    @pytest.mark.parametrize("requested,clamped", [(None, 5), (0, 1), (-4, 1), (1, 1), (99, 5)])
    def test_max_pages_clamped(self, requested, clamped):
        assert validate_request("https://example.com", requested)[1] == clamped

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_missing_url(self, url):
        with pytest.raises(ScrapeError) as exc_info:
            validate_request(url)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert exc_info.value.message == "URL is required"

    @pytest.mark.parametrize("url", ["example.com", "ftp://example.com", "mailto:a@b.c", "https://"])
    def test_bad_scheme_or_host(self, url):
        with pytest.raises(ScrapeError) as exc_info:
            validate_request(url)
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT
        assert exc_info.value.status_hint == 400


class TestScrapeSite:
    """Test cases for scrape_site."""

    @pytest.mark.asyncio
    async def test_uses_crawler(self):
        expected = SiteResult(site_title="Home", base_url="https://example.com")
        crawler = MagicMock()
        crawler.crawl_site = AsyncMock(return_value=expected)

        result = await scrape_site("https://example.com/", crawler=crawler)

        assert result is expected
        crawler.crawl_site.assert_awaited_once_with("https://example.com/")

    @pytest.mark.asyncio
    async def test_builds_crawler_with_clamped_pages(self):
        expected = SiteResult(site_title="Home", base_url="https://example.com")
        with patch("site_scraper.service.SiteCrawler") as crawler_cls:
            crawler_cls.from_config.return_value.crawl_site = AsyncMock(return_value=expected)
            config = ScraperConfig(max_pages=2)

            await scrape_site("https://example.com/", max_pages=50, config=config)
            crawler_cls.from_config.assert_called_with(config, max_pages=5)

            await scrape_site("https://example.com/", config=config)
            crawler_cls.from_config.assert_called_with(config, max_pages=2)

    @pytest.mark.asyncio
    async def test_adapter_takes_precedence(self):
        expected = SiteResult(site_title="octocat", base_url="https://github.com")
        adapter = MagicMock()
        adapter.name = "github"
        adapter.scrape = AsyncMock(return_value=expected)
        crawler = MagicMock()
        crawler.crawl_site = AsyncMock()

        with patch("site_scraper.service.select_adapter", return_value=adapter):
            result = await scrape_site("https://github.com/octocat", max_pages=2, crawler=crawler)

        assert result is expected
        adapter.scrape.assert_awaited_once_with("https://github.com/octocat", 2)
        crawler.crawl_site.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_url_never_reaches_crawler(self):
        crawler = MagicMock()
        crawler.crawl_site = AsyncMock()

        with pytest.raises(ScrapeError):
            await scrape_site("not a url", crawler=crawler)

        crawler.crawl_site.assert_not_awaited()
