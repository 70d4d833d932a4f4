"""Minas Watch: credibility-ranked aggregation of RSS/Atom feeds."""

from minas_watch.catalog import FeedCatalog, build_feed_label
from minas_watch.config import MinasWatchConfig, config_from_env, create_from_config, load_config
from minas_watch.data import (
    FeedConfig,
    FeedError,
    FetchReport,
    Item,
    RawExtraction,
    Snapshot,
    SourceType,
)
from minas_watch.errors import FeedFetchError, MinasWatchError, RefreshFailedError
from minas_watch.extract import extract_entries
from minas_watch.fetch import FeedFetcher, HttpFeedFetcher
from minas_watch.normalize import normalize_item, parse_feed
from minas_watch.notifier import SnapshotNotifier, SnapshotStream
from minas_watch.ranker import CredibilityRanker, ItemRanker
from minas_watch.refresh_logger import RefreshLogger
from minas_watch.service import NewsService
from minas_watch.url import canonicalize_url

__all__ = [
    # Models
    "FeedConfig",
    "FeedError",
    "FetchReport",
    "Item",
    "RawExtraction",
    "Snapshot",
    "SourceType",
    # Errors
    "FeedFetchError",
    "MinasWatchError",
    "RefreshFailedError",
    # Functions
    "build_feed_label",
    "canonicalize_url",
    "extract_entries",
    "normalize_item",
    "parse_feed",
    # Protocols
    "FeedFetcher",
    "ItemRanker",
    # Components
    "CredibilityRanker",
    "FeedCatalog",
    "HttpFeedFetcher",
    "NewsService",
    "SnapshotNotifier",
    "SnapshotStream",
    # Logging
    "RefreshLogger",
    # Config
    "MinasWatchConfig",
    "config_from_env",
    "create_from_config",
    "load_config",
]
