# File: orchestration/session.py
"""Client-side state for one user browsing scrape results"""
from typing import List

from core.exceptions import NotFoundError, ScraperError
from core.models import Article, SortMode
from processing.ranker import rank_articles
from scrapers.page_scraper import PageScraper
from utils.logger import get_logger

logger = get_logger(__name__)

PREDEFINED_FILTERS = ['Technology', 'Politics', 'Business', 'Sports', 'Entertainment', 'Science']


class ScrapeSession:
    """Holds the current results, active filters, sort mode and request status.

    Each new request starts from a clean slate: results and error text from the
    previous attempt are dropped before the request goes out, and ``loading``
    is only true while it is in flight.
    """

    def __init__(self, scraper: PageScraper, sort_mode: SortMode = SortMode.NEWEST_FIRST):
        self.scraper = scraper
        self.url = ''
        self.articles: List[Article] = []
        self.error = ''
        self.message = ''
        self.loading = False
        self.filters: List[str] = []
        self.sort_mode = sort_mode

    async def submit(self, url: str) -> bool:
        """Scrape ``url``; return True on success, False with ``error`` set otherwise"""
        self.url = url
        self.articles = []
        self.error = ''
        self.message = ''
        self.loading = True

        try:
            self.articles = await self.scraper.scrape_url(url)
            return True
        except NotFoundError as e:
            self.error = e.error
            self.message = e.message
        except ScraperError as e:
            self.error = str(e) or 'An error occurred'
        except Exception as e:
            logger.exception(f"Unexpected error while scraping {url}")
            self.error = str(e) or 'An error occurred'
        finally:
            self.loading = False

        logger.info(f"Scrape of {url} failed: {self.error}")
        return False

    def add_filter(self, keyword: str):
        keyword = keyword.strip()
        if keyword and keyword not in self.filters:
            self.filters.append(keyword)

    def remove_filter(self, keyword: str):
        self.filters = [f for f in self.filters if f != keyword]

    def visible_articles(self) -> List[Article]:
        return rank_articles(self.articles, self.filters, self.sort_mode)
