"""Item ranking module."""

from minas_watch.ranker.base import ItemRanker
from minas_watch.ranker.credibility import (
    DEFAULT_QUOTA_SHARES,
    CredibilityRanker,
    compare_items,
    dedupe,
    provisional_sort,
    quota_caps,
    rank_items,
    select_with_quota,
    source_class_rank,
)

__all__ = [
    "DEFAULT_QUOTA_SHARES",
    "CredibilityRanker",
    "ItemRanker",
    "compare_items",
    "dedupe",
    "provisional_sort",
    "quota_caps",
    "rank_items",
    "select_with_quota",
    "source_class_rank",
]
