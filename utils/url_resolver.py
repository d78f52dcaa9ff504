# File: utils/url_resolver.py
"""Turn relative, root-relative and protocol-relative links into absolute URLs"""
import re
from urllib.parse import urljoin, urlparse

from core.exceptions import ResolutionError
from utils.logger import get_logger

logger = get_logger(__name__)

ABSOLUTE_URL_RE = re.compile(r'^(http|https)://')

# Characters never allowed in a URI reference (RFC 3986); non-ASCII passes as IRI
INVALID_REFERENCE_RE = re.compile(r'[\x00-\x20\x7f<>"{}|\\^`]')


def _check_reference(candidate: str):
    if INVALID_REFERENCE_RE.search(candidate):
        raise ResolutionError(f"Illegal character in link: {candidate!r}")
    if candidate.count('#') > 1:
        raise ResolutionError(f"Link has more than one fragment: {candidate!r}")


def _split_base(base: str):
    try:
        parsed = urlparse(base)
        port = parsed.port
    except ValueError as e:
        raise ResolutionError(f"Malformed base URL {base!r}: {e}")

    if not parsed.scheme or not parsed.hostname:
        raise ResolutionError(f"Base URL is not absolute: {base!r}")

    host = parsed.hostname
    if ':' in host:
        host = f'[{host}]'
    if port is not None:
        host = f'{host}:{port}'
    return parsed.scheme, host


def _resolve(base: str, candidate: str) -> str:
    if ABSOLUTE_URL_RE.match(candidate):
        return candidate

    _check_reference(candidate)
    scheme, host = _split_base(base)

    if candidate.startswith('//'):
        return f'{scheme}:{candidate}'

    if candidate.startswith('/'):
        return f'{scheme}://{host}{candidate}'

    try:
        return urljoin(base, candidate)
    except ValueError as e:
        raise ResolutionError(f"Cannot resolve {candidate!r} against {base!r}: {e}")


def resolve_url(base: str, candidate: str) -> str:
    """Resolve ``candidate`` against ``base``.

    Never raises: a link that cannot be resolved degrades to ``base``.
    """
    try:
        return _resolve(base, candidate)
    except ResolutionError as e:
        logger.debug(f"Falling back to base URL: {e}")
        return base
