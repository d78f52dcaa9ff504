# File: core/exceptions.py
"""Custom exceptions for the scraper"""


class ScraperError(Exception):
    """Base exception for scraper errors"""
    pass


class ConfigurationError(ScraperError):
    """Configuration-related errors"""
    pass


class ValidationError(ScraperError):
    """Bad or missing request input"""
    pass


class FetchError(ScraperError):
    """Network, transport or HTTP status failure while fetching a page"""
    pass


class NotFoundError(ScraperError):
    """The page was fetched but no article blocks were found"""

    def __init__(self, error: str, message: str):
        super().__init__(error)
        self.error = error
        self.message = message


class ResolutionError(ScraperError):
    """A link could not be resolved against its base URL"""
    pass
