"""Content extraction from fetched page markup.

Turns raw HTML into the fields of a :class:`~site_scraper.models.PageResult`.
Every function here is pure: the same markup always yields the same fields.
"""

from typing import Optional

from bs4 import BeautifulSoup

from site_scraper.constants import (
    BOILERPLATE_SELECTORS,
    HEADING_TAGS,
    MAX_HEADING_LENGTH,
    MAX_HEADINGS,
    MAX_IMAGES,
    MAX_PARAGRAPH_LENGTH,
    MAX_PARAGRAPHS,
    MIN_PARAGRAPH_LENGTH,
    TRACKING_PIXEL_EXTENSIONS,
    TRACKING_PIXEL_PATTERNS,
    UNTITLED_PAGE,
)
from site_scraper.links import classify_links, resolve_url, url_host, url_path
from site_scraper.models import Heading, ImageRecord, PageResult

HTML_PARSER = "html.parser"


def _first_text(soup: BeautifulSoup, tag: str) -> str:
    element = soup.find(tag)
    return element.get_text().strip() if element else ""


def extract_title(soup: BeautifulSoup) -> str:
    """First <title>, else first <h1>, else a placeholder."""
    return _first_text(soup, "title") or _first_text(soup, "h1") or UNTITLED_PAGE


def extract_meta_description(soup: BeautifulSoup) -> str:
    """meta[name=description], falling back to og:description."""
    for attrs in ({"name": "description"}, {"property": "og:description"}):
        tag = soup.find("meta", attrs=attrs)
        content = (tag.get("content") or "").strip() if tag else ""
        if content:
            return content
    return ""


def extract_headings(soup: BeautifulSoup) -> list[Heading]:
    headings = []
    for element in soup.find_all(list(HEADING_TAGS)):
        text = element.get_text().strip()
        if text and len(text) < MAX_HEADING_LENGTH:
            headings.append(Heading(level=element.name.lower(), text=text))
    return headings[:MAX_HEADINGS]


def extract_content(soup: BeautifulSoup) -> list[str]:
    """Collect body paragraphs after stripping navigation and page chrome.

    Note:
        Mutates ``soup``; callers pass a tree they no longer need.
    """
    for element in soup.select(BOILERPLATE_SELECTORS):
        element.decompose()

    content = []
    for paragraph in soup.find_all("p"):
        text = paragraph.get_text().strip()
        if MIN_PARAGRAPH_LENGTH < len(text) < MAX_PARAGRAPH_LENGTH:
            content.append(text)
            if len(content) >= MAX_PARAGRAPHS:
                break
    return content


def is_tracking_pixel(url: str) -> bool:
    lowered = url.lower()
    if any(pattern in lowered for pattern in TRACKING_PIXEL_PATTERNS):
        return True
    return lowered.endswith(TRACKING_PIXEL_EXTENSIONS)


def extract_images(soup: BeautifulSoup, page_url: str) -> list[ImageRecord]:
    """Images with absolute URLs, skipping duplicates and tracking pixels."""
    images = []
    seen: set[str] = set()

    for img in soup.find_all("img"):
        src = img.get("src") or img.get("data-src")
        if not src or src in seen:
            continue

        absolute = resolve_url(src, page_url)
        if absolute is None or is_tracking_pixel(absolute):
            continue

        seen.add(src)
        images.append(ImageRecord(src=absolute, alt=(img.get("alt") or "").strip()))
        if len(images) >= MAX_IMAGES:
            break

    return images


def extract_page(html: str, page_url: str, base_domain: Optional[str] = None) -> PageResult:
    """Extract all structured fields of a page.

    Args:
        html: Raw page markup
        page_url: Absolute URL the markup was fetched from
        base_domain: Host scoping internal links (defaults to the page's host)

    Returns:
        PageResult for the page
    """
    domain = base_domain or url_host(page_url)
    soup = BeautifulSoup(html, HTML_PARSER)
    internal_links, external_links = classify_links(soup, page_url, domain)

    return PageResult(
        url=url_path(page_url),
        full_url=page_url,
        title=extract_title(soup),
        meta_description=extract_meta_description(soup),
        headings=tuple(extract_headings(soup)),
        images=tuple(extract_images(soup, page_url)),
        internal_links=tuple(internal_links),
        external_links=tuple(external_links),
        # Pruning runs last; it removes nav/header/footer from the tree
        content=tuple(extract_content(soup)),
    )
