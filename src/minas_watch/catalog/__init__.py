"""Feed catalog module."""

from minas_watch.catalog.labels import build_feed_label, to_label_case
from minas_watch.catalog.resolver import (
    DEFAULT_BASE_PRIORITY,
    FeedCatalog,
    build_feed_config,
    clamp_trust_tier,
    fallback_feed_config,
    normalize_region_tags,
)
from minas_watch.catalog.sources import BUILTIN_SOURCES, DEFAULT_FEEDS

__all__ = [
    "BUILTIN_SOURCES",
    "DEFAULT_BASE_PRIORITY",
    "DEFAULT_FEEDS",
    "FeedCatalog",
    "build_feed_config",
    "build_feed_label",
    "clamp_trust_tier",
    "fallback_feed_config",
    "normalize_region_tags",
    "to_label_case",
]
