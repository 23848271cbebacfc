"""Link classification for scraped pages.

Splits the anchors of a page into internal paths (same host as the crawl's
base domain) and external absolute URLs. Pure functions, no network access.
"""

from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from site_scraper.constants import (
    MAX_EXTERNAL_LINKS,
    MAX_INTERNAL_LINKS,
    NON_PAGE_EXTENSIONS,
    NON_PAGE_PREFIXES,
    WEB_SCHEMES,
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def url_host(url: str) -> Optional[str]:
    """Return the ``host[:port]`` of a URL, or None when it cannot be parsed.

    Default ports are omitted so ``https://example.com:443`` and
    ``https://example.com`` share a host.
    """
    try:
        parts = urlsplit(url)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None
    if not hostname:
        return None
    if ":" in hostname:
        hostname = f"[{hostname}]"
    if port is not None and port != _DEFAULT_PORTS.get(parts.scheme):
        return f"{hostname}:{port}"
    return hostname


def resolve_url(href: str, base: str) -> Optional[str]:
    """Resolve ``href`` against ``base``; None for malformed input."""
    try:
        absolute = urljoin(base, href.strip())
        urlsplit(absolute).port  # raises on a malformed port
    except ValueError:
        return None
    return absolute


def url_path(url: str) -> str:
    """Site-relative path of an absolute URL, ``/`` when empty."""
    return urlsplit(url).path or "/"


def normalize_href(url: str) -> str:
    """Serialise an absolute URL the way a browser reports ``anchor.href``.

    The host is lowercased, a default port is dropped and an empty path
    becomes ``/``. URLs carrying credentials keep their netloc untouched.
    """
    parts = urlsplit(url)
    netloc = parts.netloc
    if "@" not in netloc:
        netloc = url_host(url) or netloc
    return urlunsplit(
        (parts.scheme.lower(), netloc, parts.path or "/", parts.query, parts.fragment)
    )


def is_valid_page_link(path: str) -> bool:
    """Check that a link target looks like a crawlable HTML page.

    Args:
        path: URL path or raw href

    Returns:
        False for anchors, mailto/tel/javascript targets and file downloads
    """
    lowered = path.lower()
    if lowered.startswith(NON_PAGE_PREFIXES):
        return False
    return not lowered.endswith(NON_PAGE_EXTENSIONS)


def _is_web_url(url: str) -> bool:
    return urlsplit(url).scheme in WEB_SCHEMES


def extract_internal_links(soup: BeautifulSoup, page_url: str, base_domain: str) -> list[str]:
    """Collect same-domain page paths from every anchor, in document order."""
    links: list[str] = []
    seen_paths: set[str] = set()

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or not is_valid_page_link(href):
            continue

        absolute = resolve_url(href, page_url)
        if absolute is None or url_host(absolute) != base_domain:
            continue

        path = url_path(absolute)
        if path in seen_paths or not is_valid_page_link(path):
            continue

        seen_paths.add(path)
        links.append(path)
        if len(links) >= MAX_INTERNAL_LINKS:
            break

    return links


def extract_external_links(soup: BeautifulSoup, page_url: str, base_domain: str) -> list[str]:
    """Collect off-domain http(s) URLs from every anchor, in document order."""
    links: list[str] = []
    seen_hrefs: set[str] = set()

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href in seen_hrefs or href.startswith("#"):
            continue

        absolute = resolve_url(href, page_url)
        if absolute is None or not _is_web_url(absolute):
            continue

        host = url_host(absolute)
        if host is None or host == base_domain:
            continue

        seen_hrefs.add(href)
        links.append(normalize_href(absolute))
        if len(links) >= MAX_EXTERNAL_LINKS:
            break

    return links


def classify_links(
    soup: BeautifulSoup, page_url: str, base_domain: str
) -> tuple[list[str], list[str]]:
    """Split a page's anchors into internal paths and external URLs.

    Args:
        soup: Parsed page markup
        page_url: Absolute URL the markup was fetched from
        base_domain: Host of the crawl's seed URL

    Returns:
        Tuple of (internal paths, external absolute URLs)
    """
    return (
        extract_internal_links(soup, page_url, base_domain),
        extract_external_links(soup, page_url, base_domain),
    )
