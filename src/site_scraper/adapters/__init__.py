"""
Site-specific adapters.

Some hosts are better answered from a documented API than by crawling. The
registry is an ordered tuple of ``(matcher, factory)`` pairs checked before
the generic crawler; the first matcher that accepts the seed URL wins, and
its adapter fully owns the request.
"""

from typing import Callable, Optional, Protocol, Tuple

from site_scraper.models import SiteResult

from .github import GitHubProfileAdapter, matches_github_profile


class SiteAdapter(Protocol):
    """A bypass that produces a SiteResult without crawling."""

    name: str

    async def scrape(self, url: str, max_pages: int = 1) -> SiteResult: ...


AdapterEntry = Tuple[Callable[[str], bool], Callable[[], SiteAdapter]]

ADAPTER_REGISTRY: Tuple[AdapterEntry, ...] = (
    (matches_github_profile, GitHubProfileAdapter),
)


def select_adapter(url: str, registry: Tuple[AdapterEntry, ...] = ADAPTER_REGISTRY) -> Optional[SiteAdapter]:
    """Return the adapter registered for ``url``, or None for generic crawling."""
    for matcher, factory in registry:
        if matcher(url):
            return factory()
    return None


__all__ = [
    "ADAPTER_REGISTRY",
    "GitHubProfileAdapter",
    "SiteAdapter",
    "select_adapter",
]
