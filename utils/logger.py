# File: utils/logger.py
"""Logging for the scraper, the HTTP API and the CLI"""
import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, List

ROOT_LOGGER_NAME = 'news_scraper'

STANDARD_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Keys passed through ``extra=`` by the scraper and the fetch client
EXTRA_FIELDS = ('url', 'source', 'status', 'articles', 'duration')

DEFAULT_LOGGING = {
    'level': 'INFO',
    'file_enabled': False,
    'file_path': 'news_scraper.log',
    'console_enabled': True,
    'format': 'standard'
}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, carrying the scrape context of the record"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'function': record.funcName,
            'line': record.lineno
        }

        for field in EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is None:
                continue
            log_entry[field] = round(value, 3) if field == 'duration' else value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


def _build_handlers(config: Dict[str, Any]) -> List[logging.Handler]:
    handlers = []
    if config.get('console_enabled', True):
        handlers.append(logging.StreamHandler(sys.stdout))
    if config.get('file_enabled', False):
        handlers.append(logging.FileHandler(config.get('file_path', DEFAULT_LOGGING['file_path']), encoding='utf-8'))
    return handlers


def setup_logging(config: Dict[str, Any] = None) -> logging.Logger:
    """Configure the ``news_scraper`` logger tree; calling it again replaces the handlers"""
    config = {**DEFAULT_LOGGING, **(config or {})}

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(config['level']).upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = JSONFormatter() if config['format'] == 'json' else logging.Formatter(STANDARD_FORMAT)
    for handler in _build_handlers(config):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``news_scraper`` logger, e.g. ``news_scraper.scrapers.page_scraper``"""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
