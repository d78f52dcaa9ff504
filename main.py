# File: main.py
"""Main entry point for the news page scraper"""
import asyncio
import csv
import json
import locale
import sys
from typing import List
from urllib.parse import urlparse

from config.settings import ConfigManager
from core.exceptions import ConfigurationError, ScraperError
from core.models import Article, SortMode
from orchestration.session import ScrapeSession
from processing.ranker import rank_articles
from scrapers.page_scraper import PageScraper
from server.app import run_server
from utils.http_client import AsyncHTTPClient
from utils.logger import setup_logging, get_logger


class NewsScraperApp:
    """Main application class"""

    def __init__(self, config_path: str = "news_scraper_config.yaml"):
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()

        setup_logging(self.config_manager.get_logging_config())
        self.logger = get_logger('main')

        try:
            locale.setlocale(locale.LC_COLLATE, '')
        except locale.Error as e:
            self.logger.warning(f"Could not apply the environment collation locale: {e}")

        self.http_config = self.config_manager.get_http_config()
        self.server_config = self.config_manager.get_server_config()

    def serve(self, port: int = None):
        if port is not None:
            self.server_config.port = port
        run_server(self.http_config, self.server_config)

    async def scrape(self, url: str, sort_mode: SortMode, keywords: List[str]) -> List[Article]:
        """Scrape a URL and return the articles as they would be displayed"""
        async with AsyncHTTPClient(self.http_config) as http_client:
            session = ScrapeSession(PageScraper(http_client), sort_mode)
            for keyword in keywords:
                session.add_filter(keyword)

            if not await session.submit(url):
                raise ScraperError(f"{session.error}. {session.message}".strip(' .'))

            return session.visible_articles()

    async def show_articles(self, url: str, sort_mode: SortMode, keywords: List[str]):
        articles = await self.scrape(url, sort_mode, keywords)

        self.logger.info(f"=== {len(articles)} articles from {url} ({sort_mode.value}) ===")
        self._print_articles(articles)

    def rank_export(self, filename: str, sort_mode: SortMode, keywords: List[str]) -> List[Article]:
        """Re-rank the articles of a previous JSON export without fetching again"""
        articles = self._load_json(filename)
        ranked = rank_articles(articles, keywords, sort_mode)

        self.logger.info(f"=== {len(ranked)} of {len(articles)} articles from {filename} ({sort_mode.value}) ===")
        self._print_articles(ranked)
        return ranked

    @staticmethod
    def _print_articles(articles: List[Article]):
        for article in articles:
            print(article.headline)
            print(f"  By {article.author} • {article.date}")
            print(f"  Source: {article.source}")
            print(f"  {article.link}")
            print()

    async def export_data(self, url: str, format: str = 'csv'):
        """Export the articles of a page to a CSV or JSON file"""
        articles = await self.scrape(url, SortMode.NEWEST_FIRST, [])
        host = urlparse(url).hostname or 'page'

        if format == 'csv':
            filename = f'news_export_{host}.csv'
            self._export_csv(articles, filename)
        elif format == 'json':
            filename = f'news_export_{host}.json'
            self._export_json(articles, filename)
        else:
            self.logger.error(f"Unsupported export format: {format}")
            return None

        self.logger.info(f"Exported {len(articles)} articles to {filename}")
        return filename

    @staticmethod
    def _export_csv(articles: List[Article], filename: str):
        with open(filename, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=['headline', 'author', 'date', 'source', 'link'])
            writer.writeheader()
            for article in articles:
                writer.writerow(article.to_dict())

    @staticmethod
    def _export_json(articles: List[Article], filename: str):
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump({'articles': [a.to_dict() for a in articles]}, f, indent=2, ensure_ascii=False)

    @staticmethod
    def _load_json(filename: str) -> List[Article]:
        try:
            with open(filename, encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ScraperError(f"Export file not found: {filename}")
        except json.JSONDecodeError as e:
            raise ScraperError(f"Invalid export file {filename}: {e}")

        try:
            return [Article.from_dict(item) for item in data['articles']]
        except (KeyError, TypeError, ValueError) as e:
            raise ScraperError(f"Invalid export file {filename}: {e}")


def print_usage():
    modes = ', '.join(mode.value for mode in SortMode)
    print("Usage:")
    print("  python -m main serve [port]                        # Run the HTTP API")
    print("  python -m main scrape <url> [sort_mode] [keyword ...]  # Print articles")
    print("  python -m main export <url> [csv|json]             # Export articles")
    print("  python -m main rank <json_file> [sort_mode] [keyword ...]  # Re-rank an export")
    print()
    print(f"Sort modes: {modes}")
    print()
    print("Examples:")
    print("  python -m main serve 3001")
    print("  python -m main scrape https://example.com/news relevance Politics")
    print("  python -m main export https://example.com/news json")
    print("  python -m main rank news_export_example.com.json oldest-first Sports")


def main():
    """Main CLI interface"""
    if len(sys.argv) < 2:
        print_usage()
        return

    command = sys.argv[1]

    try:
        app = NewsScraperApp()

        if command == "serve":
            port = int(sys.argv[2]) if len(sys.argv) > 2 else None
            app.serve(port)

        elif command == "scrape":
            if len(sys.argv) < 3:
                print_usage()
                return
            sort_mode = SortMode(sys.argv[3]) if len(sys.argv) > 3 else SortMode.NEWEST_FIRST
            asyncio.run(app.show_articles(sys.argv[2], sort_mode, sys.argv[4:]))

        elif command == "export":
            if len(sys.argv) < 3:
                print_usage()
                return
            format = sys.argv[3] if len(sys.argv) > 3 else 'csv'
            asyncio.run(app.export_data(sys.argv[2], format))

        elif command == "rank":
            if len(sys.argv) < 3:
                print_usage()
                return
            sort_mode = SortMode(sys.argv[3]) if len(sys.argv) > 3 else SortMode.NEWEST_FIRST
            app.rank_export(sys.argv[2], sort_mode, sys.argv[4:])

        else:
            print(f"Unknown command: {command}")

    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except ScraperError as e:
        print(f"Scraper error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Invalid argument: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("Application stopped by user")


if __name__ == "__main__":
    main()
