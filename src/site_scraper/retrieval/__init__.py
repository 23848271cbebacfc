"""
Retrieval strategies.

Both fetchers share one contract: ``await fetch(url, timeout)`` returns page
markup, or None for non-HTML responses, and raises ``BlockingSignalError``
when the site serves a bot challenge. ``await close()`` releases resources.
"""

from enum import Enum

from .challenge import detect_challenge
from .rendered import RenderedFetcher
from .static import StaticFetcher


class RetrievalMode(str, Enum):
    """Which fetcher a crawl job is currently using."""

    STATIC = "static"
    RENDERED = "rendered"


__all__ = [
    "RetrievalMode",
    "StaticFetcher",
    "RenderedFetcher",
    "detect_challenge",
]
