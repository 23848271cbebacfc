"""
Browser configuration for the rendered retrieval strategy.

This module provides a validated Pydantic configuration model for the
Playwright-backed fetcher.
"""
from typing import List, Literal

from pydantic import BaseModel, Field

from site_scraper.constants import (
    ACCEPT_HEADER,
    ACCEPT_LANGUAGE,
    CHALLENGE_SECONDARY_WAIT_MS,
    CHALLENGE_SETTLE_MS,
    DESKTOP_USER_AGENT,
    DESKTOP_VIEWPORT_HEIGHT,
    DESKTOP_VIEWPORT_WIDTH,
)


class BrowserConfig(BaseModel):
    """
    Configuration for the Playwright-based RenderedFetcher.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    stealth_mode: bool = Field(
        default=True,
        description="Apply playwright-stealth evasions to every page"
    )

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to launch"
    )

    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle",
        description="When to consider navigation complete"
    )

    settle_ms: int = Field(
        default=CHALLENGE_SETTLE_MS,
        description="Fixed wait after navigation so a challenge page can resolve",
        ge=0,
        le=60000
    )

    challenge_wait_ms: int = Field(
        default=CHALLENGE_SECONDARY_WAIT_MS,
        description="Extra wait when challenge markers are still present",
        ge=0,
        le=120000
    )

    scroll_fraction: float = Field(
        default=0.5,
        description="Fraction of the page height to scroll to trigger lazy content",
        ge=0.0,
        le=1.0
    )

    viewport_width: int = Field(default=DESKTOP_VIEWPORT_WIDTH, ge=320, le=3840)
    viewport_height: int = Field(default=DESKTOP_VIEWPORT_HEIGHT, ge=240, le=2160)

    user_agent: str = Field(
        default=DESKTOP_USER_AGENT,
        description="User agent matching the static fetcher's persona"
    )

    launch_args: List[str] = Field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-blink-features=AutomationControlled",
        ],
        description="Extra command-line arguments for the browser process"
    )

    @property
    def extra_headers(self) -> dict:
        return {"Accept-Language": ACCEPT_LANGUAGE, "Accept": ACCEPT_HEADER}

    @property
    def viewport(self) -> dict:
        return {"width": self.viewport_width, "height": self.viewport_height}
