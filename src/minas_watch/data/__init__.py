"""Data models for Minas Watch."""

from minas_watch.data.models import (
    FeedConfig,
    FeedError,
    FetchReport,
    Item,
    RawExtraction,
    Snapshot,
    SourceType,
    format_timestamp,
)

__all__ = [
    "FeedConfig",
    "FeedError",
    "FetchReport",
    "Item",
    "RawExtraction",
    "Snapshot",
    "SourceType",
    "format_timestamp",
]
