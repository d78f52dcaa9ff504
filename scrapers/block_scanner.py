# File: scrapers/block_scanner.py
"""Locate repeating article-like blocks in a page"""
from typing import Iterator, List

from bs4 import BeautifulSoup, Tag

# Common structural selectors for news listings, tried in this order
BLOCK_SELECTORS: List[str] = [
    'article',
    '.article',
    '.post',
    '.news-item',
    '.story',
    '.entry',
    '.item',
    'div[class*="article"]',
    'div[class*="post"]',
    'div[class*="news"]',
]


def scan_blocks(soup: BeautifulSoup, selectors: List[str] = None) -> Iterator[Tag]:
    """Yield every node matched by every selector.

    Selectors are not mutually exclusive: a node matching several of them is
    yielded once per match, so callers must de-duplicate.
    """
    for selector in selectors or BLOCK_SELECTORS:
        for node in soup.select(selector):
            yield node
