"""Turn raw extractions into canonical items."""

import hashlib
import logging
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from minas_watch.data import FeedConfig, Item, RawExtraction, format_timestamp
from minas_watch.extract import clean_text, extract_entries
from minas_watch.url import canonicalize_url

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "Unknown"
ID_LENGTH = 16


def _parse_rfc2822_date(value: str) -> datetime | None:
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None


def _parse_iso_date(value: str) -> datetime | None:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_published(value: str) -> datetime | None:
    """Parse an RSS ``pubDate`` (RFC 2822) or Atom ``updated`` (ISO 8601) value.

    Naive values are taken as UTC. Dates at or before the epoch count as
    unresolved.
    """
    value = value.strip() if value else ""
    if not value:
        return None
    parsed = _parse_rfc2822_date(value) or _parse_iso_date(value)
    if parsed is None:
        logger.debug(f"Unparseable published date {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        if parsed.timestamp() <= 0:
            return None
    except (OverflowError, OSError, ValueError):
        return None
    return parsed


def build_item_id(parts: list[str]) -> str:
    """Short stable hash over the identity-bearing fields."""
    return hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()[:ID_LENGTH]


def normalize_item(raw: RawExtraction, feed: FeedConfig) -> Item | None:
    """Build an Item from a raw extraction, or None if title or link is empty.

    Args:
        raw: Field values scraped from one entry block.
        feed: The feed the entry came from.

    Returns:
        The normalized Item, or None when the entry must be discarded.
    """
    title = clean_text(raw.title)
    link = canonicalize_url(clean_text(raw.link))
    source = clean_text(raw.source) or UNKNOWN_SOURCE

    if not title or not link:
        return None

    published = parse_published(raw.published)
    published_at = format_timestamp(published) if published else None
    published_ts = int(published.timestamp() * 1000) if published else 0

    item_id = build_item_id([raw.guid or "", link, title, published_at or "", source])
    return Item(
        id=item_id,
        title=title,
        link=link,
        source=source,
        published_at=published_at,
        published_ts=published_ts,
        feed=feed,
    )


def parse_feed(payload: object, feed: FeedConfig) -> list[Item]:
    """Extract and normalize every usable entry of a feed payload."""
    items: list[Item] = []
    for raw in extract_entries(payload):
        item = normalize_item(raw, feed)
        if item is not None:
            items.append(item)
    return items
