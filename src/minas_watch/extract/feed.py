"""RSS and Atom entry extraction."""

import logging
from enum import StrEnum

from minas_watch.data import RawExtraction
from minas_watch.extract.markup import (
    extract_blocks,
    extract_first_block,
    extract_tag_href,
    extract_tag_text,
    has_tag,
)

logger = logging.getLogger(__name__)

RSS_FALLBACK_TITLE = "RSS Feed"
ATOM_FALLBACK_TITLE = "Atom Feed"


class FeedFormat(StrEnum):
    """Syndication format detected from a payload."""

    RSS = "rss"
    ATOM = "atom"
    UNKNOWN = "unknown"


def detect_format(payload: object) -> FeedFormat:
    """Detect whether ``payload`` looks like RSS, Atom, or neither."""
    if not payload or not isinstance(payload, str):
        return FeedFormat.UNKNOWN
    if has_tag(payload, "rss") or has_tag(payload, "channel"):
        return FeedFormat.RSS
    if has_tag(payload, "feed") and has_tag(payload, "entry"):
        return FeedFormat.ATOM
    return FeedFormat.UNKNOWN


def parse_rss(payload: str) -> list[RawExtraction]:
    channel = extract_first_block(payload, "channel")
    channel_title = extract_tag_text(channel, "title") or RSS_FALLBACK_TITLE

    return [
        RawExtraction(
            title=extract_tag_text(block, "title"),
            link=extract_tag_text(block, "link"),
            source=extract_tag_text(block, "source") or channel_title,
            published=extract_tag_text(block, "pubDate"),
            guid=extract_tag_text(block, "guid"),
        )
        for block in extract_blocks(payload, "item")
    ]


def parse_atom(payload: str) -> list[RawExtraction]:
    feed_title = extract_tag_text(payload, "title") or ATOM_FALLBACK_TITLE

    return [
        RawExtraction(
            title=extract_tag_text(entry, "title"),
            link=extract_tag_href(entry, "link") or extract_tag_text(entry, "link"),
            source=extract_tag_text(entry, "source") or feed_title,
            published=extract_tag_text(entry, "updated") or extract_tag_text(entry, "published"),
            guid=extract_tag_text(entry, "id"),
        )
        for entry in extract_blocks(payload, "entry")
    ]


def extract_entries(payload: object) -> list[RawExtraction]:
    """Extract raw entries from an RSS or Atom payload.

    An unrecognized format is not an error: it simply has no entries.

    Args:
        payload: Response body believed to be RSS or Atom.

    Returns:
        One RawExtraction per item/entry block, in document order.
    """
    if not isinstance(payload, str):
        return []
    feed_format = detect_format(payload)
    if feed_format == FeedFormat.RSS:
        return parse_rss(payload)
    if feed_format == FeedFormat.ATOM:
        return parse_atom(payload)
    logger.debug("Payload is neither RSS nor Atom, no entries extracted")
    return []
