from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
import os

from site_scraper.constants import (
    DEFAULT_MAX_PAGES,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_PAGE_TIMEOUT_SECONDS,
    DESKTOP_USER_AGENT,
    GITHUB_API_URL as DEFAULT_GITHUB_API_URL,
)

load_dotenv()  # Loads variables from .env file


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    GITHUB_API_URL = os.getenv("GITHUB_API_URL", DEFAULT_GITHUB_API_URL)
    GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")  # Optional, raises the API rate limit


settings = Settings()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ScraperConfig:
    """Configuration for one scraper process."""
    max_pages: int = DEFAULT_MAX_PAGES
    timeout: float = DEFAULT_PAGE_TIMEOUT_SECONDS
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    user_agent: str = DESKTOP_USER_AGENT
    headless: bool = True
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Load configuration from environment variables.

        Returns:
            ScraperConfig: Configuration instance with values from environment
        """
        return cls(
            max_pages=int(os.getenv("SCRAPER_MAX_PAGES", str(DEFAULT_MAX_PAGES))),
            timeout=float(os.getenv("SCRAPER_PAGE_TIMEOUT", str(DEFAULT_PAGE_TIMEOUT_SECONDS))),
            max_redirects=int(os.getenv("SCRAPER_MAX_REDIRECTS", str(DEFAULT_MAX_REDIRECTS))),
            user_agent=os.getenv("SCRAPER_USER_AGENT", DESKTOP_USER_AGENT),
            headless=_env_bool("SCRAPER_HEADLESS", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("SCRAPER_LOG_FILE"),
        )
