# File: scrapers/field_extractor.py
"""Pull headline, author, date and link out of a candidate article block"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from bs4 import Tag

# Attributes that might carry the article URL, in priority order
URL_ATTRIBUTES = ['href', 'data-href', 'data-url', 'data-link']


def extract_href(element: Tag) -> Optional[str]:
    """Return the first usable URL attribute of ``element``, or None.

    Empty values, bare ``#`` anchors and ``javascript:`` pseudo-links are skipped.
    """
    for attr in URL_ATTRIBUTES:
        value = element.get(attr)
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value and value != '#' and not value.startswith('javascript:'):
            return value
    return None


def element_text(element: Tag) -> str:
    return element.get_text().strip()


# (selector, extractor) pairs, evaluated left to right, first non-empty wins
Rule = Tuple[str, Callable[[Tag], Optional[str]]]

HEADLINE_RULES: List[Rule] = [
    ('h1', element_text),
    ('h2', element_text),
    ('h3', element_text),
    ('[class*="title"]', element_text),
    ('[class*="headline"]', element_text),
]

AUTHOR_RULES: List[Rule] = [
    ('[class*="author"]', element_text),
    ('[class*="byline"]', element_text),
]

DATE_RULES: List[Rule] = [
    ('time', element_text),
    ('[class*="date"]', element_text),
    ('[class*="time"]', element_text),
]

LINK_RULES: List[Rule] = [
    ('a[href]', extract_href),
    ('[class*="link"][href]', extract_href),
    ('[data-href]', extract_href),
    ('[data-url]', extract_href),
    ('[data-link]', extract_href),
]


@dataclass(frozen=True)
class ExtractedFields:
    headline: str = ''
    author: str = ''
    date: str = ''
    link: Optional[str] = None


class FieldExtractor:
    """Applies ordered rule lists to a single candidate node"""

    def __init__(self,
                 headline_rules: List[Rule] = None,
                 author_rules: List[Rule] = None,
                 date_rules: List[Rule] = None,
                 link_rules: List[Rule] = None):
        self.headline_rules = headline_rules or HEADLINE_RULES
        self.author_rules = author_rules or AUTHOR_RULES
        self.date_rules = date_rules or DATE_RULES
        self.link_rules = link_rules or LINK_RULES

    def extract(self, node: Tag) -> ExtractedFields:
        return ExtractedFields(
            headline=self._first_text(node, self.headline_rules),
            author=self._first_text(node, self.author_rules),
            date=self._first_text(node, self.date_rules),
            link=self._first_link(node)
        )

    @staticmethod
    def _first_text(node: Tag, rules: List[Rule]) -> str:
        for selector, extractor in rules:
            for element in node.select(selector):
                value = extractor(element)
                if value:
                    return value
        return ''

    def _first_link(self, node: Tag) -> Optional[str]:
        # Only the first descendant per selector is considered
        for selector, extractor in self.link_rules:
            element = node.select_one(selector)
            if element is not None:
                href = extractor(element)
                if href:
                    return href

        # Fall back to the block itself (e.g. <a class="story" href=...>)
        return extract_href(node)
