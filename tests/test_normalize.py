"""Tests for item normalization."""

from datetime import UTC, datetime

import pytest

from minas_watch.data import FeedConfig, RawExtraction, SourceType
from minas_watch.normalize import build_item_id, normalize_item, parse_feed, parse_published

FEED = FeedConfig(
    feed_url="https://example.com/rss.xml",
    feed_label="Example",
    source_type=SourceType.OFFICIAL,
    trust_tier=4,
    first_hand=True,
    base_priority=40.0,
)


def _raw(**overrides) -> RawExtraction:
    defaults = dict(
        title="Ceasefire announced",
        link="https://example.com/story?utm_source=rss#top",
        source="Example Wire",
        published="Sun, 01 Feb 2026 10:00:00 GMT",
        guid="guid-1",
    )
    defaults.update(overrides)
    return RawExtraction(**defaults)


class TestParsePublished:
    """Tests for parse_published."""

    def test_rfc2822(self):
        """Should parse RSS pubDate values."""
        assert parse_published("Sun, 01 Feb 2026 10:00:00 GMT") == datetime(2026, 2, 1, 10, tzinfo=UTC)

    def test_rfc2822_with_offset(self):
        """Should keep the instant when an offset is given."""
        parsed = parse_published("Sun, 01 Feb 2026 12:00:00 +0200")
        assert parsed is not None
        assert parsed.astimezone(UTC) == datetime(2026, 2, 1, 10, tzinfo=UTC)

    def test_iso8601_zulu(self):
        """Should parse Atom timestamps with a Z suffix."""
        assert parse_published("2026-02-01T09:30:00.000Z") == datetime(2026, 2, 1, 9, 30, tzinfo=UTC)

    def test_naive_iso_is_utc(self):
        """Should treat naive timestamps as UTC."""
        assert parse_published("2026-02-01T09:30:00") == datetime(2026, 2, 1, 9, 30, tzinfo=UTC)

    @pytest.mark.parametrize("value", ["", "   ", "yesterday", "1970-01-01T00:00:00Z", "1969-07-20T20:17:00Z"])
    def test_unresolved(self, value: str):
        """Should return None for empty, unparseable or non-positive dates."""
        assert parse_published(value) is None


class TestNormalizeItem:
    """Tests for normalize_item."""

    def test_builds_item(self):
        """Should clean fields, canonicalize the link and format the date."""
        item = normalize_item(_raw(), FEED)
        assert item is not None
        assert item.title == "Ceasefire announced"
        assert item.link == "https://example.com/story"
        assert item.source == "Example Wire"
        assert item.published_at == "2026-02-01T10:00:00.000Z"
        assert item.published_ts == 1769940000000
        assert item.feed is FEED
        assert len(item.id) == 16

    def test_id_is_stable(self):
        """Should produce the same id for the same entry."""
        first = normalize_item(_raw(), FEED)
        second = normalize_item(_raw(), FEED)
        assert first is not None and second is not None
        assert first.id == second.id

    def test_id_covers_identity_fields(self):
        """Should hash guid, link, title, published date and source."""
        item = normalize_item(_raw(), FEED)
        assert item is not None
        expected = build_item_id(
            ["guid-1", "https://example.com/story", "Ceasefire announced", "2026-02-01T10:00:00.000Z", "Example Wire"]
        )
        assert item.id == expected

    def test_id_changes_with_guid(self):
        """Should give different ids to entries with different guids."""
        a = normalize_item(_raw(guid="a"), FEED)
        b = normalize_item(_raw(guid="b"), FEED)
        assert a is not None and b is not None
        assert a.id != b.id

    def test_missing_source_defaults_to_unknown(self):
        """Should fall back to "Unknown" when no source text survives cleaning."""
        item = normalize_item(_raw(source="<b> </b>"), FEED)
        assert item is not None
        assert item.source == "Unknown"

    def test_unparseable_date(self):
        """Should keep the item with no date and a zero timestamp."""
        item = normalize_item(_raw(published="not a date"), FEED)
        assert item is not None
        assert item.published_at is None
        assert item.published_ts == 0

    @pytest.mark.parametrize(("title", "link"), [("", "https://example.com/x"), ("Title", ""), ("<br/>", "https://example.com/x")])
    def test_discards_without_title_or_link(self, title: str, link: str):
        """Should discard entries missing a title or a link."""
        assert normalize_item(_raw(title=title, link=link), FEED) is None


class TestParseFeed:
    """Tests for parse_feed."""

    def test_parses_and_filters(self):
        """Should normalize usable entries and drop the rest."""
        payload = """
        <rss><channel><title>Outlet</title>
          <item><title>Kept</title><link>https://example.com/kept</link></item>
          <item><title></title><link>https://example.com/dropped</link></item>
        </channel></rss>
        """
        items = parse_feed(payload, FEED)
        assert [i.title for i in items] == ["Kept"]
        assert items[0].source == "Outlet"
        assert items[0].feed_label == "Example"

    def test_oversized_entity_keeps_sibling_items(self):
        """Should keep every item when one title holds an unconvertible numeric entity."""
        payload = (
            "<rss><channel><title>Outlet</title>"
            "<item><title>Good</title><link>https://example.com/good</link></item>"
            "<item><title>Bad &#" + "1" * 5000 + "; entity</title><link>https://example.com/bad</link></item>"
            "</channel></rss>"
        )
        items = parse_feed(payload, FEED)
        assert sorted(i.title for i in items) == ["Bad entity", "Good"]

    def test_non_feed_payload(self):
        """Should return no items for a payload that is not a feed."""
        assert parse_feed("<html><body>Service unavailable</body></html>", FEED) == []
