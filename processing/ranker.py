# File: processing/ranker.py
"""Keyword filtering and display ordering for scraped articles"""
import locale
import unicodedata
from typing import Iterable, List, Sequence

from core.models import Article, SortMode
from processing.date_parser import parse_date


def headline_collation_key(headline: str):
    """Sort key comparing letters before accents and case, then by locale collation"""
    decomposed = unicodedata.normalize('NFKD', headline)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), locale.strxfrm(headline)


def _normalize_filters(filters: Iterable[str]) -> List[str]:
    return [keyword.lower() for keyword in filters or []]


def matches_filters(article: Article, keywords: Sequence[str]) -> bool:
    """True if any keyword occurs in the headline or the author (case-insensitive)"""
    if not keywords:
        return True
    headline = article.headline.lower()
    author = article.author.lower()
    return any(keyword in headline or keyword in author for keyword in keywords)


def relevance_score(article: Article, keywords: Sequence[str]) -> int:
    """Number of keywords found in the headline"""
    headline = article.headline.lower()
    return sum(1 for keyword in keywords if keyword in headline)


def filter_articles(articles: Iterable[Article], filters: Iterable[str]) -> List[Article]:
    keywords = _normalize_filters(filters)
    return [article for article in articles if matches_filters(article, keywords)]


def sort_articles(articles: Iterable[Article], mode: SortMode, filters: Iterable[str] = ()) -> List[Article]:
    """Return a new list ordered for display"""
    articles = list(articles)

    if mode == SortMode.RELEVANCE:
        keywords = _normalize_filters(filters)
        # Equal scores keep their incoming order
        return sorted(articles, key=lambda a: -relevance_score(a, keywords))

    timestamps = {id(article): parse_date(article.date) for article in articles}
    sign = -1 if mode == SortMode.NEWEST_FIRST else 1
    return sorted(
        articles,
        key=lambda a: (sign * timestamps[id(a)], headline_collation_key(a.headline))
    )


def rank_articles(articles: Iterable[Article], filters: Iterable[str] = (),
                  mode: SortMode = SortMode.NEWEST_FIRST) -> List[Article]:
    """Filter by keywords, then sort according to ``mode``"""
    filters = list(filters or [])
    return sort_articles(filter_articles(articles, filters), mode, filters)
