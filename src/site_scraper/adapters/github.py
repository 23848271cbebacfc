"""
GitHub profile adapter.

GitHub profile pages are rendered client-side and rate-limit scrapers, so
``https://github.com/<login>`` is answered from the public REST API
(``GET /users/<login>``) instead of crawling.
"""
import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from site_scraper.config import settings
from site_scraper.constants import GITHUB_API_TIMEOUT_SECONDS
from site_scraper.errors import ErrorKind, ScrapeError
from site_scraper.models import Heading, ImageRecord, PageResult, SiteResult

logger = logging.getLogger(__name__)

GITHUB_HOSTS = frozenset({"github.com", "www.github.com"})
GITHUB_BASE_URL = "https://github.com"

# Top-level github.com routes that are not user logins
RESERVED_PATHS = frozenset({
    "about", "apps", "collections", "contact", "customer-stories", "enterprise",
    "events", "explore", "features", "login", "marketplace", "new",
    "notifications", "orgs", "organizations", "pricing", "pulls", "issues",
    "search", "security", "settings", "signup", "site", "sponsors", "team",
    "topics", "trending",
})


def login_from_url(url: str) -> Optional[str]:
    """Return the user login a github.com URL points at, if any."""
    parts = urlsplit(url)
    if (parts.hostname or "") not in GITHUB_HOSTS:
        return None

    segments = [segment for segment in parts.path.split("/") if segment]
    if not segments:
        return None

    login = segments[0]
    if login.lower() in RESERVED_PATHS:
        return None
    return login


def matches_github_profile(url: str) -> bool:
    return login_from_url(url) is not None


def _normalize_blog(blog: str) -> Optional[str]:
    blog = blog.strip()
    if not blog:
        return None
    if not blog.startswith(("http://", "https://")):
        blog = f"https://{blog}"
    return blog


def profile_to_page(profile: dict, requested_url: str) -> PageResult:
    """Map a GitHub ``/users/<login>`` payload onto a PageResult."""
    login = profile.get("login") or login_from_url(requested_url) or ""
    name = (profile.get("name") or "").strip()
    bio = (profile.get("bio") or "").strip()

    headings = [Heading(level="h1", text=name or login)]
    if name:
        headings.append(Heading(level="h2", text=login))

    content = []
    if bio:
        content.append(bio)
    if profile.get("company"):
        content.append(f"Company: {profile['company']}")
    if profile.get("location"):
        content.append(f"Location: {profile['location']}")
    content.append(
        f"{profile.get('public_repos', 0)} public repositories, "
        f"{profile.get('followers', 0)} followers, "
        f"{profile.get('following', 0)} following"
    )
    if profile.get("created_at"):
        content.append(f"Member since {profile['created_at'][:10]}")

    images = []
    if profile.get("avatar_url"):
        images.append(ImageRecord(src=profile["avatar_url"], alt=f"{login} avatar"))

    external_links = []
    blog = _normalize_blog(profile.get("blog") or "")
    if blog and urlsplit(blog).hostname not in GITHUB_HOSTS:
        external_links.append(blog)
    if profile.get("twitter_username"):
        external_links.append(f"https://twitter.com/{profile['twitter_username']}")

    return PageResult(
        url=f"/{login}",
        full_url=profile.get("html_url") or requested_url,
        title=f"{name} ({login})" if name else login,
        meta_description=bio,
        headings=tuple(headings),
        content=tuple(content),
        images=tuple(images),
        internal_links=(),
        external_links=tuple(external_links),
    )


class GitHubProfileAdapter:
    """Answers github.com profile URLs with one REST API lookup."""

    name = "github"

    def __init__(
        self,
        api_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = GITHUB_API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = (api_url or settings.GITHUB_API_URL).rstrip("/")
        self.token = token if token is not None else settings.GITHUB_TOKEN
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def scrape(self, url: str, max_pages: int = 1) -> SiteResult:
        """Look up the profile a github.com URL points at.

        Args:
            url: github.com profile URL
            max_pages: Ignored; a profile is always a single page

        Returns:
            SiteResult with one page describing the user

        Raises:
            ScrapeError: If the user does not exist or the API fails
        """
        login = login_from_url(url)
        if login is None:
            raise ScrapeError(ErrorKind.INVALID_INPUT, "Not a GitHub profile URL.")

        logger.info(f"Looking up GitHub user {login} via {self.api_url}")
        try:
            async with httpx.AsyncClient(
                base_url=self.api_url,
                headers=self._headers(),
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"/users/{login}")
        except httpx.HTTPError as e:
            raise ScrapeError(
                ErrorKind.UNREACHABLE, "GitHub API is unreachable. Please try again later."
            ) from e

        if response.status_code == 404:
            raise ScrapeError(
                ErrorKind.NOT_FOUND, f"GitHub user '{login}' not found.", status_hint=404
            )
        if response.status_code in (403, 429) and response.headers.get("x-ratelimit-remaining") == "0":
            raise ScrapeError(ErrorKind.RATE_LIMITED, "GitHub API rate limit exceeded.")
        if response.is_error:
            raise ScrapeError(
                ErrorKind.UNREACHABLE,
                f"GitHub API returned HTTP {response.status_code}.",
            )

        try:
            profile = response.json()
        except ValueError as e:
            raise ScrapeError(
                ErrorKind.UNREACHABLE, "GitHub API returned a response that is not JSON."
            ) from e
        if not isinstance(profile, dict):
            raise ScrapeError(ErrorKind.UNREACHABLE, "GitHub API returned an unexpected payload.")

        page = profile_to_page(profile, url)
        return SiteResult.from_pages(GITHUB_BASE_URL, [page])
