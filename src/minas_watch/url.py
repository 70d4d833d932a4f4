"""URL handling utilities."""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl, unquote_plus, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

_TRACKING_PARAMS = frozenset({"oc", "ved", "ei", "gws_rd"})


def _is_tracking_param(key: str) -> bool:
    lower = key.lower()
    return lower.startswith("utm_") or lower in _TRACKING_PARAMS


def canonicalize_url(raw_url: str) -> str:
    """Strip the fragment and known tracking parameters from a URL.

    Args:
        raw_url: The URL to canonicalize.

    Returns:
        The canonical absolute URL, or the trimmed input if it does not parse
        as an absolute URL.
    """
    if not raw_url:
        return ""

    candidate = raw_url.strip()
    try:
        parts = urlsplit(candidate)
    except ValueError:
        logger.debug(f"Could not parse url {candidate!r}")
        return candidate
    if not parts.scheme or not parts.netloc:
        return candidate

    query = urlencode(
        [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if not _is_tracking_param(k)]
    )
    return urlunsplit(
        (parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", query, "")
    )


def decode_url_part(value: str) -> str:
    """Decode a percent-encoded query or path component, treating ``+`` as space."""
    if not value:
        return ""
    try:
        return unquote_plus(value, errors="strict")
    except UnicodeDecodeError:
        return value.replace("+", " ")
