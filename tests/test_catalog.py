"""Tests for the feed catalog and label inference."""

import pytest

from minas_watch.catalog import (
    BUILTIN_SOURCES,
    DEFAULT_FEEDS,
    FeedCatalog,
    build_feed_config,
    build_feed_label,
    clamp_trust_tier,
    normalize_region_tags,
    to_label_case,
)
from minas_watch.data import SourceType

BBC_MIDDLE_EAST = "https://feeds.bbci.co.uk/news/world/middle_east/rss.xml"
GOOGLE_NEWS_WAR = "https://news.google.com/rss/search?q=Israel+Iran+war&hl=en-US&gl=US&ceid=US:en"

# -- Label inference --


def test_to_label_case() -> None:
    assert to_label_case("middle_east") == "Middle East"
    assert to_label_case("israel-iran  WAR") == "Israel Iran WAR"
    assert to_label_case("UN news") == "UN News"


def test_label_google_news_uses_query() -> None:
    assert build_feed_label(GOOGLE_NEWS_WAR) == "Google News: Israel Iran War"


def test_label_google_news_without_query() -> None:
    assert build_feed_label("https://news.google.com/rss") == "Google News"


def test_label_host_override_and_path() -> None:
    assert build_feed_label(BBC_MIDDLE_EAST) == "BBC - Middle East"


def test_label_skips_blacklisted_host_parts() -> None:
    assert build_feed_label("https://www.aljazeera.com/xml/rss/all.xml") == "Aljazeera - All.xml"


def test_label_host_only() -> None:
    assert build_feed_label("https://www.bellingcat.com/") == "Bellingcat"


def test_label_empty_and_unparseable() -> None:
    assert build_feed_label("") == "Feed"
    assert build_feed_label("not a url") == "Not A Url"


# -- Trust tier and metadata normalization --


@pytest.mark.parametrize(
    ("raw", "source_type", "expected"),
    [
        (4, SourceType.WIRE, 4),
        (0, SourceType.OFFICIAL, 1),
        (9, SourceType.SENSOR, 5),
        ("2", SourceType.WIRE, 2),
        (3.0, SourceType.OFFICIAL, 3),
        (2.5, SourceType.OFFICIAL, 4),
        (2.5, SourceType.WIRE, 3),
        ("high", SourceType.OSINT_SOCIAL, 4),
        (None, SourceType.WIRE, 3),
        (True, SourceType.OFFICIAL, 4),
        (10**400, SourceType.WIRE, 5),
        (-(10**400), SourceType.OFFICIAL, 1),
    ],
)
def test_clamp_trust_tier(raw: object, source_type: SourceType, expected: int) -> None:
    assert clamp_trust_tier(raw, source_type) == expected


def test_normalize_region_tags() -> None:
    assert normalize_region_tags([" Israel", "iran", "ISRAEL", "", 3]) == ("israel", "iran")
    assert normalize_region_tags("israel") == ()
    assert normalize_region_tags(None) == ()


def test_build_feed_config_defaults_by_source_type() -> None:
    official = build_feed_config("https://gov.example/rss", source_type="official")
    assert official.trust_tier == 4
    assert official.base_priority == 40.0

    sensor = build_feed_config("https://sensor.example/atom", source_type="sensor", base_priority="x")
    assert sensor.base_priority == 30.0


def test_build_feed_config_huge_values_do_not_overflow() -> None:
    feed = build_feed_config("https://wire.example/rss", trust_tier=10**400, base_priority=10**400)
    assert feed.trust_tier == 5
    assert feed.base_priority == 20.0


def test_build_feed_config_label_falls_back_to_inferred() -> None:
    feed = build_feed_config(BBC_MIDDLE_EAST, label="   ")
    assert feed.feed_label == "BBC - Middle East"


def test_build_feed_config_first_hand_requires_true() -> None:
    assert build_feed_config("https://a.example", first_hand="yes").first_hand is False
    assert build_feed_config("https://a.example", first_hand=True).first_hand is True


# -- FeedCatalog --


def test_default_feeds_match_builtin_table() -> None:
    catalog = FeedCatalog()
    assert catalog.urls == DEFAULT_FEEDS
    assert len(catalog) == len(BUILTIN_SOURCES)


def test_resolve_known_url_uses_table_metadata() -> None:
    catalog = FeedCatalog()
    [feed] = catalog.resolve(["https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/4.5_day.atom"])
    assert feed.source_type == SourceType.SENSOR
    assert feed.trust_tier == 5
    assert feed.first_hand is True
    assert feed.feed_label == "USGS - M4.5+ Earthquakes"


def test_resolve_builtin_without_label_infers_it() -> None:
    catalog = FeedCatalog()
    [feed] = catalog.resolve([BBC_MIDDLE_EAST])
    assert feed.feed_label == "BBC - Middle East"
    assert feed.source_type == SourceType.WIRE


def test_resolve_unknown_url_gets_fallback() -> None:
    catalog = FeedCatalog()
    [feed] = catalog.resolve(["https://blog.example.org/world/"])
    assert feed.source_type == SourceType.WIRE
    assert feed.trust_tier == 3
    assert feed.first_hand is False
    assert feed.base_priority == 20.0
    assert feed.region_tags == ()
    assert feed.feed_label == "Blog - World"


def test_resolve_collapses_duplicates_in_first_order() -> None:
    catalog = FeedCatalog(sources=[])
    feeds = catalog.resolve(
        [
            "https://b.example/rss",
            "https://a.example/rss",
            " https://b.example/rss ",
            "",
            "https://a.example/rss",
        ]
    )
    assert [f.feed_url for f in feeds] == ["https://b.example/rss", "https://a.example/rss"]


def test_extra_sources_override_builtin() -> None:
    catalog = FeedCatalog(
        extra_sources=[
            {
                "url": BBC_MIDDLE_EAST,
                "label": "BBC ME",
                "source_type": "official",
                "trust_tier": 12,
            }
        ]
    )
    feed = catalog.get(BBC_MIDDLE_EAST)
    assert feed is not None
    assert feed.feed_label == "BBC ME"
    assert feed.source_type == SourceType.OFFICIAL
    assert feed.trust_tier == 5
    assert len(catalog) == len(BUILTIN_SOURCES)


def test_catalog_skips_entries_without_url() -> None:
    catalog = FeedCatalog(sources=[{"label": "No url"}, {"url": "https://a.example/rss"}])
    assert catalog.urls == ["https://a.example/rss"]
    assert "https://a.example/rss" in catalog
    assert "https://missing.example/rss" not in catalog
    assert len(catalog) == 1


def test_catalog_clamps_huge_integer_trust_tier() -> None:
    catalog = FeedCatalog(sources=[{"url": "https://x.example/rss", "trust_tier": 10**400}])
    feed = catalog.get("https://x.example/rss")
    assert feed is not None
    assert feed.trust_tier == 5
