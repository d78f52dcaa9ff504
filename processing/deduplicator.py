# File: processing/deduplicator.py
"""Per-scrape duplicate filtering by link and headline"""
from typing import List, Set


class ArticleDeduplicator:
    """Tracks what one scrape has already emitted.

    A candidate is a duplicate when its link was emitted before, or when its
    headline exactly matches an earlier one. The first occurrence always wins.
    """

    def __init__(self):
        self.seen_links: Set[str] = set()
        self.seen_headlines: List[str] = []

    def is_duplicate(self, link: str, headline: str) -> bool:
        if link in self.seen_links:
            return True
        return headline in self.seen_headlines

    def accept(self, link: str, headline: str) -> bool:
        """Record the candidate and return True, or return False for a duplicate"""
        if self.is_duplicate(link, headline):
            return False

        self.seen_links.add(link)
        self.seen_headlines.append(headline)
        return True
