"""
Bot-challenge detection for fetched markup.

Both retrieval strategies run fetched HTML through :func:`detect_challenge`.
A match means the site served an interstitial (Cloudflare "Just a moment...",
browser verification, WAF block page) instead of real content.
"""
import logging
from typing import Optional

from site_scraper.constants import BLOCKING_STATUS_CODES

logger = logging.getLogger(__name__)


# Interstitial markers seen on pages served with a 200 status
CHALLENGE_PAGE_INDICATORS = (
    "cf-browser-verification",
    "cf_clearance",
    "checking your browser",
    "just a moment...",
    "please wait while we verify your browser",
    "checking if the site connection is secure",
    "ddos protection by",
    "please complete the security check to access",
    "browser verification</title>",
)

# Markers of an outright block page, only trusted on a blocking status code
BLOCK_PAGE_INDICATORS = {
    "cloudflare": (
        "attention required! | cloudflare",
        "performance & security by cloudflare",
        "please turn javascript on and reload the page",
    ),
    "sucuri": (
        "sucuri website firewall",
        "access denied - sucuri",
    ),
    "imperva": (
        "incapsula incident",
        "powered by incapsula",
    ),
    "datadome": (
        "blocked by datadome",
        "datadome captcha",
    ),
    "perimeterx": (
        "press & hold",
        "perimeterx",
    ),
    "generic": (
        "please verify you are human",
        "prove you are not a robot",
        "complete the captcha",
        "you have been blocked",
    ),
}


def detect_challenge(html: Optional[str], status_code: int = 200) -> Optional[str]:
    """
    Detect whether markup is a bot-challenge page.

    Args:
        html: Page markup
        status_code: HTTP status the markup was served with

    Returns:
        The matched marker, or None if the page looks like real content
    """
    if not html:
        return None

    html_lower = html.lower()

    for indicator in CHALLENGE_PAGE_INDICATORS:
        if indicator in html_lower:
            return indicator

    if status_code in BLOCKING_STATUS_CODES:
        for provider, patterns in BLOCK_PAGE_INDICATORS.items():
            for pattern in patterns:
                if pattern in html_lower:
                    logger.debug(f"Block page from {provider}: {pattern!r}")
                    return pattern

    return None
