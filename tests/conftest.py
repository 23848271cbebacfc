"""Shared fixtures for the site scraper tests."""

from typing import Dict, List, Optional, Union

import pytest


class FakeFetcher:
    """In-memory fetcher serving canned markup or raising canned errors."""

    def __init__(self, responses: Dict[str, Union[str, None, BaseException]]):
        self.responses = responses
        self.fetched: List[str] = []
        self.timeouts: List[float] = []
        self.closed = False

    async def fetch(self, url: str, timeout: float) -> Optional[str]:
        self.fetched.append(url)
        self.timeouts.append(timeout)
        if url not in self.responses:
            raise RuntimeError(f"unexpected fetch: {url}")
        response = self.responses[url]
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


class FetcherFactory:
    """Records every fetcher it builds so tests can inspect them."""

    def __init__(self, responses: Dict[str, Union[str, None, BaseException]]):
        self.responses = responses
        self.created: List[FakeFetcher] = []

    def __call__(self) -> FakeFetcher:
        fetcher = FakeFetcher(self.responses)
        self.created.append(fetcher)
        return fetcher

    @property
    def fetched(self) -> List[str]:
        return [url for fetcher in self.created for url in fetcher.fetched]


@pytest.fixture
def make_factory():
    return FetcherFactory
