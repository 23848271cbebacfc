"""Data models for scraped sites."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class Heading:
    """A heading element (h1-h3) in document order."""

    level: str
    text: str

    def to_dict(self) -> dict:
        return {"level": self.level, "text": self.text}


@dataclass(frozen=True)
class ImageRecord:
    """An image resolved to an absolute URL."""

    src: str
    alt: str = ""

    def to_dict(self) -> dict:
        return {"src": self.src, "alt": self.alt}


@dataclass(frozen=True)
class PageResult:
    """Structured content extracted from one fetched page."""

    url: str  # site-relative path
    full_url: str
    title: str
    meta_description: str = ""
    headings: tuple[Heading, ...] = ()
    content: tuple[str, ...] = ()
    images: tuple[ImageRecord, ...] = ()
    internal_links: tuple[str, ...] = ()
    external_links: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to the JSON wire format."""
        return {
            "url": self.url,
            "fullUrl": self.full_url,
            "title": self.title,
            "metaDescription": self.meta_description,
            "headings": [h.to_dict() for h in self.headings],
            "content": list(self.content),
            "images": [img.to_dict() for img in self.images],
            "internalLinks": list(self.internal_links),
            "externalLinks": list(self.external_links),
        }


@dataclass
class SiteResult:
    """Terminal output of one crawl job."""

    site_title: str
    base_url: str
    pages: list[PageResult] = field(default_factory=list)
    scraped_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @classmethod
    def from_pages(cls, base_url: str, pages: list[PageResult]) -> "SiteResult":
        """Build a result whose title is the first page's title."""
        return cls(
            site_title=pages[0].title if pages else "",
            base_url=base_url,
            pages=list(pages),
        )

    def to_dict(self) -> dict:
        """Convert to the JSON wire format."""
        return {
            "siteTitle": self.site_title,
            "baseUrl": self.base_url,
            "scrapedAt": self.scraped_at.isoformat(),
            "totalPages": self.total_pages,
            "pages": [page.to_dict() for page in self.pages],
        }
