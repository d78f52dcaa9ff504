# File: utils/http_client.py
"""Async HTTP client for fetching pages to scrape"""
import asyncio
from typing import Optional

import aiohttp

from config.settings import HTTPConfig
from core.exceptions import FetchError
from utils.logger import get_logger

logger = get_logger(__name__)


class AsyncHTTPClient:
    """Shared aiohttp session with browser-like headers, redirect cap and timeouts.

    Construct once at startup and pass it to whatever needs to fetch pages.
    Requests are never retried: a failed fetch raises FetchError straight away.
    """

    def __init__(self, config: Optional[HTTPConfig] = None):
        self.config = config or HTTPConfig()
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry"""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def open(self):
        if self.session is not None:
            return

        timeout = aiohttp.ClientTimeout(
            total=self.config.total_timeout,
            connect=self.config.connect_timeout,
            sock_read=self.config.read_timeout
        )

        headers = {
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5'
        }

        self.session = aiohttp.ClientSession(
            timeout=timeout,
            headers=headers,
            raise_for_status=False
        )

    async def close(self):
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return the decoded body.

        Any status below 400 counts as success. Redirects are followed up to
        ``max_redirects`` hops.
        """
        if self.session is None:
            raise FetchError("HTTP client is not open")

        # aiohttp gives up on the max_redirects-th hop itself, not after it
        try:
            async with self.session.get(
                    url,
                    allow_redirects=self.config.max_redirects > 0,
                    max_redirects=self.config.max_redirects + 1
            ) as response:
                if response.status >= 400:
                    logger.warning(f"Client error {response.status} for {url}",
                                   extra={'url': url, 'status': response.status})
                    raise FetchError(f"Request failed with status code {response.status}")

                content = await response.text(errors='replace')
                logger.debug(f"Successfully fetched {url} ({response.status}, {len(content)} chars)")
                return content

        except aiohttp.TooManyRedirects:
            logger.warning(f"Too many redirects for {url}")
            raise FetchError(f"Maximum number of redirects exceeded ({self.config.max_redirects})")
        except asyncio.TimeoutError:
            logger.warning(f"Timeout on {url}")
            raise FetchError(f"Timeout of {self.config.total_timeout}s exceeded")
        except aiohttp.ClientError as e:
            logger.warning(f"Request error on {url}: {e}")
            raise FetchError(str(e) or e.__class__.__name__)
