"""Built-in table of known feeds and their trust metadata.

Each entry is a raw mapping that goes through the same normalization as
user-declared sources (see ``resolver.build_feed_config``).
"""

from typing import Any

BUILTIN_SOURCES: list[dict[str, Any]] = [
    # Official
    {
        "url": "https://news.un.org/feed/subscribe/en/news/region/middle-east/feed/rss.xml",
        "label": "UN News - Middle East",
        "source_type": "official",
        "region_tags": ["middle-east", "un"],
        "trust_tier": 4,
        "first_hand": True,
        "base_priority": 40,
    },
    {
        "url": "https://www.iaea.org/feeds/topnews",
        "label": "IAEA - Top News",
        "source_type": "official",
        "region_tags": ["iran", "nuclear"],
        "trust_tier": 5,
        "first_hand": True,
        "base_priority": 45,
    },
    {
        "url": "https://www.state.gov/rss-feed/press-releases/feed/",
        "label": "US State Department - Press Releases",
        "source_type": "official",
        "region_tags": ["us"],
        "trust_tier": 4,
        "first_hand": True,
        "base_priority": 40,
    },
    # OSINT / social
    {
        "url": "https://israelpalestine.liveuamap.com/rss",
        "label": "Liveuamap - Israel/Palestine",
        "source_type": "osint_social",
        "region_tags": ["israel", "palestine"],
        "trust_tier": 3,
        "first_hand": True,
        "base_priority": 35,
    },
    {
        "url": "https://www.bellingcat.com/feed/",
        "label": "Bellingcat",
        "source_type": "osint_social",
        "region_tags": ["global"],
        "trust_tier": 4,
        "first_hand": False,
        "base_priority": 30,
    },
    # Sensors
    {
        "url": "https://earthquake.usgs.gov/earthquakes/feed/v1.0/summary/4.5_day.atom",
        "label": "USGS - M4.5+ Earthquakes",
        "source_type": "sensor",
        "region_tags": ["global", "seismic"],
        "trust_tier": 5,
        "first_hand": True,
        "base_priority": 30,
    },
    {
        "url": "https://www.gdacs.org/xml/rss.xml",
        "label": "GDACS - Disaster Alerts",
        "source_type": "sensor",
        "region_tags": ["global"],
        "trust_tier": 4,
        "first_hand": True,
        "base_priority": 28,
    },
    # Wire
    {
        "url": "https://news.google.com/rss/search?q=Israel+Iran+war&hl=en-US&gl=US&ceid=US:en",
        "source_type": "wire",
        "region_tags": ["israel", "iran"],
        "trust_tier": 3,
        "first_hand": False,
        "base_priority": 20,
    },
    {
        "url": "https://news.google.com/rss/search?q=Israel+Iran+conflict&hl=en-US&gl=US&ceid=US:en",
        "source_type": "wire",
        "region_tags": ["israel", "iran"],
        "trust_tier": 3,
        "first_hand": False,
        "base_priority": 20,
    },
    {
        "url": "https://feeds.bbci.co.uk/news/world/middle_east/rss.xml",
        "source_type": "wire",
        "region_tags": ["middle-east"],
        "trust_tier": 4,
        "first_hand": False,
        "base_priority": 25,
    },
    {
        "url": "https://www.aljazeera.com/xml/rss/all.xml",
        "label": "Al Jazeera",
        "source_type": "wire",
        "region_tags": ["middle-east"],
        "trust_tier": 3,
        "first_hand": False,
        "base_priority": 20,
    },
]

DEFAULT_FEEDS: list[str] = [source["url"] for source in BUILTIN_SOURCES]
