"""Error taxonomy for the site scraper.

Transport-level failures (DNS, refused connections, TLS, HTTP status errors,
Playwright navigation errors) are translated into ``ScrapeError`` once, at the
crawl boundary, by :func:`translate_error`. A ``ScrapeError`` passes through
unchanged after that.
"""

import socket
import ssl
from enum import Enum
from typing import Iterator, Optional

import httpx


class ErrorKind(str, Enum):
    """Machine-checkable failure kinds."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"
    CERTIFICATE_ERROR = "certificate_error"
    ACCESS_DENIED = "access_denied"
    RATE_LIMITED = "rate_limited"
    NO_PAGES_SCRAPED = "no_pages_scraped"
    TRANSPORT_FAILURE = "transport_failure"


DEFAULT_STATUS_HINTS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 400,
    ErrorKind.UNREACHABLE: 503,
    ErrorKind.CERTIFICATE_ERROR: 400,
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.NO_PAGES_SCRAPED: 403,
    ErrorKind.TRANSPORT_FAILURE: 500,
}

DEFAULT_MESSAGES = {
    ErrorKind.INVALID_INPUT: "Invalid URL format provided.",
    ErrorKind.NOT_FOUND: "Website not found. Please check the URL.",
    ErrorKind.UNREACHABLE: "Connection refused. The website may be down.",
    ErrorKind.CERTIFICATE_ERROR: "SSL certificate error. The website has an invalid certificate.",
    ErrorKind.ACCESS_DENIED: "Access denied (403). This website blocks automated scraping requests.",
    ErrorKind.RATE_LIMITED: "Too many requests (429). Please try again later.",
    ErrorKind.NO_PAGES_SCRAPED: (
        "Could not scrape any pages from this website. "
        "The site may block scraping or require authentication."
    ),
    ErrorKind.TRANSPORT_FAILURE: "Failed to scrape the website. Please try again.",
}


class ScrapeError(Exception):
    """Domain error returned to the caller of a crawl job."""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        status_hint: Optional[int] = None,
    ):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.status_hint = status_hint if status_hint is not None else DEFAULT_STATUS_HINTS[kind]
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "error": self.message,
            "status": self.status_hint,
        }


class BlockingSignalError(Exception):
    """Raised when fetched markup is a bot-challenge page instead of content."""

    def __init__(self, url: str, marker: str, status_code: Optional[int] = None):
        self.url = url
        self.marker = marker
        self.status_code = status_code
        super().__init__(f"Bot challenge detected at {url} ({marker})")


class RendererUnavailableError(Exception):
    """Raised when no headless browser can be launched in this environment."""


# Substrings in error text, checked in order, for errors whose exception
# chain carries no typed OS-level cause (Playwright reports net::ERR_* codes).
_MESSAGE_PATTERNS = (
    (ErrorKind.NOT_FOUND, (
        "err_name_not_resolved",
        "enotfound",
        "name or service not known",
        "nodename nor servname",
        "getaddrinfo failed",
        "temporary failure in name resolution",
    )),
    (ErrorKind.UNREACHABLE, (
        "err_connection_refused",
        "econnrefused",
        "connection refused",
    )),
    (ErrorKind.CERTIFICATE_ERROR, (
        "err_cert_",
        "certificate",
        "cert_has_expired",
        "self_signed_cert",
    )),
    (ErrorKind.INVALID_INPUT, (
        "invalid url",
        "err_invalid_url",
    )),
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _status_error(status_code: int) -> Optional[ScrapeError]:
    if status_code == 403:
        return ScrapeError(ErrorKind.ACCESS_DENIED)
    if status_code == 429:
        return ScrapeError(ErrorKind.RATE_LIMITED)
    return None


def translate_error(exc: BaseException) -> ScrapeError:
    """Map any exception raised during a crawl job onto the error taxonomy.

    Args:
        exc: Exception that escaped the crawl loop

    Returns:
        ScrapeError describing the failure
    """
    if isinstance(exc, ScrapeError):
        return exc

    if isinstance(exc, BlockingSignalError):
        if exc.status_code == 429:
            return ScrapeError(ErrorKind.RATE_LIMITED)
        return ScrapeError(ErrorKind.ACCESS_DENIED)

    if isinstance(exc, RendererUnavailableError):
        return ScrapeError(
            ErrorKind.ACCESS_DENIED,
            "This website blocks automated requests and no headless browser is available.",
        )

    if isinstance(exc, httpx.HTTPStatusError):
        mapped = _status_error(exc.response.status_code)
        if mapped:
            return mapped
        return ScrapeError(ErrorKind.TRANSPORT_FAILURE)

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ScrapeError(ErrorKind.INVALID_INPUT)

    for link in _exception_chain(exc):
        if isinstance(link, socket.gaierror):
            return ScrapeError(ErrorKind.NOT_FOUND)
        if isinstance(link, ConnectionRefusedError):
            return ScrapeError(ErrorKind.UNREACHABLE)
        if isinstance(link, ssl.SSLError):
            return ScrapeError(ErrorKind.CERTIFICATE_ERROR)

    text = " ".join(str(link) for link in _exception_chain(exc)).lower()
    for kind, patterns in _MESSAGE_PATTERNS:
        if any(pattern in text for pattern in patterns):
            return ScrapeError(kind)

    return ScrapeError(ErrorKind.TRANSPORT_FAILURE)

