"""Shared fixtures for the news scraper tests."""

from pathlib import Path

import pytest

from core.models import Article
from scrapers.page_scraper import PageScraper

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class StubHTTPClient:
    """Stands in for AsyncHTTPClient: serves canned pages or raises a canned error."""

    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.requested = []

    async def fetch_text(self, url):
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        return self.pages[url]


@pytest.fixture
def load_fixture():
    def _load(name):
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def news_page_html(load_fixture):
    return load_fixture("news_page.html")


@pytest.fixture
def empty_page_html(load_fixture):
    return load_fixture("empty_page.html")


@pytest.fixture
def stub_client_factory():
    return StubHTTPClient


@pytest.fixture
def scraper_for():
    """Build a PageScraper whose client serves ``pages`` (url -> html)."""

    def _build(pages=None, error=None):
        return PageScraper(StubHTTPClient(pages, error))

    return _build


@pytest.fixture
def make_article():
    def _make(headline, date="Not available", author="Unknown", link=None):
        return Article(
            headline=headline,
            link=link or f"https://example.com/{headline.lower().replace(' ', '-')}",
            source="example.com",
            author=author,
            date=date,
        )

    return _make
