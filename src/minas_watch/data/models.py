"""Core data models for Minas Watch."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class SourceType(StrEnum):
    """Classification of a feed by the kind of outlet behind it.

    Declaration order is also the ranking order: official sources outrank
    OSINT social accounts, which outrank sensors, which outrank wire copy.
    """

    OFFICIAL = "official"
    OSINT_SOCIAL = "osint_social"
    SENSOR = "sensor"
    WIRE = "wire"

    @classmethod
    def parse(cls, raw: object) -> "SourceType":
        """Normalize an arbitrary value, defaulting to WIRE."""
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.WIRE


@dataclass(frozen=True)
class FeedConfig:
    """A resolved feed with its trust and classification metadata."""

    feed_url: str
    feed_label: str
    source_type: SourceType = SourceType.WIRE
    region_tags: tuple[str, ...] = ()
    trust_tier: int = 3
    first_hand: bool = False
    base_priority: float = 20.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "feedUrl": self.feed_url,
            "feedLabel": self.feed_label,
            "sourceType": self.source_type.value,
            "regionTags": list(self.region_tags),
            "trustTier": self.trust_tier,
            "firstHand": self.first_hand,
            "basePriority": self.base_priority,
        }


@dataclass(frozen=True)
class RawExtraction:
    """Raw field values scraped from a single RSS item or Atom entry."""

    title: str = ""
    link: str = ""
    source: str = ""
    published: str = ""
    guid: str = ""


@dataclass(frozen=True)
class Item:
    """A normalized news item, carrying a copy of its feed's metadata."""

    id: str
    title: str
    link: str
    feed: FeedConfig
    source: str = "Unknown"
    published_at: str | None = None
    published_ts: int = 0

    @property
    def feed_url(self) -> str:
        return self.feed.feed_url

    @property
    def feed_label(self) -> str:
        return self.feed.feed_label

    @property
    def source_type(self) -> SourceType:
        return self.feed.source_type

    @property
    def region_tags(self) -> tuple[str, ...]:
        return self.feed.region_tags

    @property
    def trust_tier(self) -> int:
        return self.feed.trust_tier

    @property
    def first_hand(self) -> bool:
        return self.feed.first_hand

    @property
    def base_priority(self) -> float:
        return self.feed.base_priority

    def to_dict(self) -> dict[str, Any]:
        feed = self.feed.to_dict()
        return {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "source": self.source,
            "publishedAt": self.published_at,
            **feed,
        }


@dataclass(frozen=True)
class FeedError:
    """A per-feed failure recorded during a refresh."""

    feed_url: str
    feed_label: str
    source_type: SourceType
    first_hand: bool
    trust_tier: int
    message: str

    @classmethod
    def for_feed(cls, feed: FeedConfig, message: str) -> "FeedError":
        return cls(
            feed_url=feed.feed_url,
            feed_label=feed.feed_label,
            source_type=feed.source_type,
            first_hand=feed.first_hand,
            trust_tier=feed.trust_tier,
            message=message,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "feedUrl": self.feed_url,
            "feedLabel": self.feed_label,
            "sourceType": self.source_type.value,
            "firstHand": self.first_hand,
            "trustTier": self.trust_tier,
            "message": self.message,
        }


@dataclass(frozen=True)
class FetchReport:
    """Outcome of one fetch wave: merged items and per-feed failures."""

    items: tuple[Item, ...] = ()
    errors: tuple[FeedError, ...] = ()


@dataclass(frozen=True)
class Snapshot:
    """The published state: ranked items plus feed catalog and latest errors."""

    refreshed_at: datetime | None = None
    items: tuple[Item, ...] = ()
    feeds: tuple[FeedConfig, ...] = ()
    errors: tuple[FeedError, ...] = ()

    @property
    def item_ids(self) -> tuple[str, ...]:
        """Ordered identity list used for change detection."""
        return tuple(item.id for item in self.items)

    def to_dict(self, limit: int | None = None) -> dict[str, Any]:
        """Serialize to the external snapshot shape, capped at ``limit`` items."""
        items = self.items if limit is None else self.items[: max(limit, 0)]
        refreshed_at = None
        if self.refreshed_at is not None:
            refreshed_at = format_timestamp(self.refreshed_at)
        return {
            "refreshedAt": refreshed_at,
            "count": len(items),
            "feeds": [feed.to_dict() for feed in self.feeds],
            "items": [item.to_dict() for item in items],
            "errors": [error.to_dict() for error in self.errors],
        }


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with milliseconds, e.g. ``2026-02-01T10:00:00.000Z``."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
