# File: processing/date_parser.py
"""Best-effort conversion of free-text article dates into sortable instants"""
import re
import time
from datetime import datetime, timedelta
from typing import Optional

from dateutil import parser as dateutil_parser

from utils.logger import get_logger

logger = get_logger(__name__)

# Explicit formats, tried in order before anything more lenient
DATE_FORMATS = [
    '%B %d, %Y',                # June 7, 2020
    '%B %d %Y',                 # June 7 2020
    '%b %d, %Y',                # Jun 7, 2020
    '%Y-%m-%d',                 # 2020-06-07
    '%m/%d/%Y',                 # 06/07/2020
    '%H:%M',                    # 13:45 (today)
    '%Y-%m-%dT%H:%M:%S.%f%z',   # 2020-06-07T13:45:00.000Z
]

TIME_ONLY_RE = re.compile(r'^(\d{1,2}):(\d{2})$')
RELATIVE_RE = re.compile(r'(\d+)\s+(minute|hour|day|week|month|year)s?\s+ago', re.IGNORECASE)

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

# Months and years are fixed approximations
UNIT_MS = {
    'minute': MINUTE_MS,
    'hour': HOUR_MS,
    'day': DAY_MS,
    'week': 7 * DAY_MS,
    'month': 30 * DAY_MS,
    'year': 365 * DAY_MS,
}


def _to_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def _today() -> datetime:
    return datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_formats(raw: str) -> Optional[int]:
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            continue

        if fmt == '%H:%M':
            parsed = _today().replace(hour=parsed.hour, minute=parsed.minute)
        return _to_millis(parsed)
    return None


def _parse_iso(raw: str) -> Optional[int]:
    try:
        return _to_millis(datetime.fromisoformat(raw.replace('Z', '+00:00')))
    except ValueError:
        return None


def _parse_time_only(raw: str) -> Optional[int]:
    match = TIME_ONLY_RE.match(raw)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    # Out-of-range values roll over into the next hour/day
    return _to_millis(_today() + timedelta(hours=hours, minutes=minutes))


def _parse_relative(raw: str) -> Optional[int]:
    match = RELATIVE_RE.search(raw)
    if not match:
        return None
    amount, unit = int(match.group(1)), match.group(2).lower()
    return int(time.time() * 1000) - amount * UNIT_MS[unit]


def _parse_fallback(raw: str) -> Optional[int]:
    try:
        return _to_millis(dateutil_parser.parse(raw))
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date {raw!r}: {e}")
        return None


PARSERS = [_parse_formats, _parse_iso, _parse_time_only, _parse_relative, _parse_fallback]


def parse_date(raw: str) -> int:
    """Return ``raw`` as epoch milliseconds, or 0 when it cannot be understood.

    0 sorts as the oldest possible date.
    """
    if not raw:
        return 0

    for parser in PARSERS:
        try:
            result = parser(raw)
        except (ValueError, OverflowError, OSError) as e:
            logger.debug(f"Date parser {parser.__name__} failed on {raw!r}: {e}")
            continue
        if result is not None:
            return result
    return 0
