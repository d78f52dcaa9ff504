# File: scrapers/page_scraper.py
"""Scrape a list of articles from an arbitrary news page"""
import re
import time
from typing import List, Tuple
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from core.exceptions import NotFoundError, ValidationError
from core.models import Article, DEFAULT_AUTHOR, DEFAULT_DATE
from processing.deduplicator import ArticleDeduplicator
from scrapers.block_scanner import scan_blocks
from scrapers.field_extractor import FieldExtractor
from utils.http_client import AsyncHTTPClient
from utils.logger import get_logger
from utils.url_resolver import resolve_url

logger = get_logger(__name__)

NO_ARTICLES_ERROR = "No articles found"
NO_ARTICLES_MESSAGE = (
    "The scraper could not find any articles. "
    "The website structure might be different than expected."
)

WHITESPACE_RE = re.compile(r'\s')


def validate_url(raw: str) -> Tuple[str, str]:
    """Check a requested URL and return ``(url, hostname)``"""
    if not raw or not isinstance(raw, str) or not raw.strip():
        raise ValidationError("URL is required")

    url = raw.strip()
    if WHITESPACE_RE.search(url):
        raise ValidationError("Invalid URL format")

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        parsed.port  # raises ValueError when out of range
    except ValueError:
        raise ValidationError("Invalid URL format")

    if parsed.scheme not in ('http', 'https') or not hostname:
        raise ValidationError("Invalid URL format")

    return url, hostname


class PageScraper:
    """Fetches a page and turns its repeating blocks into articles"""

    def __init__(self, http_client: AsyncHTTPClient, field_extractor: FieldExtractor = None):
        self.http_client = http_client
        self.field_extractor = field_extractor or FieldExtractor()

    async def scrape_url(self, raw: str) -> List[Article]:
        """Scrape ``raw`` and return its articles in page order.

        Raises ValidationError, FetchError or NotFoundError; there is no
        partial result.
        """
        url, hostname = validate_url(raw)
        start_time = time.time()

        logger.info(f"🔍 Attempting to scrape URL: {url}", extra={'url': url})
        html_content = await self.http_client.fetch_text(url)

        articles = self.extract_articles(html_content, url, hostname)
        duration = time.time() - start_time

        if not articles:
            logger.warning(f"No articles found on {url}. HTML structure might be different.",
                           extra={'url': url, 'duration': duration})
            raise NotFoundError(NO_ARTICLES_ERROR, NO_ARTICLES_MESSAGE)

        logger.info(f"📄 Found {len(articles)} articles on {url} in {duration:.2f}s",
                    extra={'url': url, 'duration': duration, 'source': hostname, 'articles': len(articles)})
        return articles

    def extract_articles(self, html_content: str, url: str, hostname: str) -> List[Article]:
        """Run scan, extraction, link resolution and de-duplication over a document"""
        soup = BeautifulSoup(html_content, 'html.parser')
        deduplicator = ArticleDeduplicator()
        articles = []
        candidates = 0

        for node in scan_blocks(soup):
            candidates += 1
            fields = self.field_extractor.extract(node)

            if not fields.headline:
                continue

            link = resolve_url(url, fields.link) if fields.link else url

            if not deduplicator.accept(link, fields.headline):
                continue

            articles.append(Article(
                headline=fields.headline,
                link=link,
                source=hostname,
                author=fields.author or DEFAULT_AUTHOR,
                date=fields.date or DEFAULT_DATE
            ))

        logger.debug(f"Scanned {candidates} candidate blocks, kept {len(articles)}")
        return articles
