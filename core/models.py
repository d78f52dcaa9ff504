# File: core/models.py
"""Article data model and display settings"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

DEFAULT_AUTHOR = "Unknown"
DEFAULT_DATE = "Not available"


class SortMode(Enum):
    NEWEST_FIRST = "newest-first"
    OLDEST_FIRST = "oldest-first"
    RELEVANCE = "relevance"


@dataclass(frozen=True)
class Article:
    """A single article found on a scraped page"""
    headline: str
    link: str
    source: str
    author: str = DEFAULT_AUTHOR
    date: str = DEFAULT_DATE

    def __post_init__(self):
        """Validate required fields"""
        if not self.headline or not self.headline.strip():
            raise ValueError("Headline is a required field")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'headline': self.headline,
            'author': self.author,
            'date': self.date,
            'source': self.source,
            'link': self.link
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Article':
        """Create instance from dictionary"""
        return cls(
            headline=data['headline'],
            link=data['link'],
            source=data.get('source', ''),
            author=data.get('author') or DEFAULT_AUTHOR,
            date=data.get('date') or DEFAULT_DATE
        )
