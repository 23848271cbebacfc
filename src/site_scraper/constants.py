# src/site_scraper/constants.py
"""Centralized constants for the site scraper.

This module contains magic numbers and fixed tables that are used across
multiple modules. For user-configurable values, see config.py and
browser_config.py.
"""

# =============================================================================
# Crawl Limits
# =============================================================================

# Default number of pages collected per crawl job
DEFAULT_MAX_PAGES = 5

# Upper bound the caller clamps max_pages into
MAX_PAGES_LIMIT = 5

# Per-fetch timeout in seconds
DEFAULT_PAGE_TIMEOUT_SECONDS = 10.0

# Redirect hops followed by the static fetcher
DEFAULT_MAX_REDIRECTS = 5


# =============================================================================
# Extraction Limits
# =============================================================================

MAX_HEADINGS = 50
MAX_HEADING_LENGTH = 500  # exclusive

MAX_PARAGRAPHS = 100
MIN_PARAGRAPH_LENGTH = 20  # exclusive
MAX_PARAGRAPH_LENGTH = 5000  # exclusive

MAX_IMAGES = 50
MAX_INTERNAL_LINKS = 100
MAX_EXTERNAL_LINKS = 50

UNTITLED_PAGE = "Untitled Page"

HEADING_TAGS = ("h1", "h2", "h3")

# Removed from the tree before paragraphs are collected
BOILERPLATE_SELECTORS = (
    "script, style, nav, footer, header, aside, "
    ".nav, .footer, .header, .sidebar"
)

# Case-insensitive substrings marking an analytics image
TRACKING_PIXEL_PATTERNS = ("pixel", "tracker", "beacon", "1x1", "spacer")
TRACKING_PIXEL_EXTENSIONS = (".gif",)


# =============================================================================
# Link Classification
# =============================================================================

NON_PAGE_EXTENSIONS = (
    ".pdf", ".doc", ".docx", ".xls", ".xlsx",
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp",
    ".mp3", ".mp4", ".avi", ".mov",
    ".zip", ".rar", ".tar", ".gz",
)

NON_PAGE_PREFIXES = ("#", "mailto:", "tel:", "javascript:")

WEB_SCHEMES = ("http", "https")


# =============================================================================
# Browser Persona
# =============================================================================

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

ACCEPT_HEADER = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/avif,image/webp,image/apng,*/*;q=0.8"
)

ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Full header set sent by the static fetcher
DEFAULT_HEADERS = {
    "User-Agent": DESKTOP_USER_AGENT,
    "Accept": ACCEPT_HEADER,
    "Accept-Language": ACCEPT_LANGUAGE,
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Upgrade-Insecure-Requests": "1",
}

DESKTOP_VIEWPORT_WIDTH = 1920
DESKTOP_VIEWPORT_HEIGHT = 1080


# =============================================================================
# Challenge Handling
# =============================================================================

# Wait after navigation so an interstitial can resolve itself
CHALLENGE_SETTLE_MS = 3000

# Second wait when the interstitial is still showing
CHALLENGE_SECONDARY_WAIT_MS = 5000

# Status codes whose body is inspected for challenge markers
BLOCKING_STATUS_CODES = frozenset({403, 429, 503})


# =============================================================================
# Site Adapters
# =============================================================================

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_TIMEOUT_SECONDS = 10.0
