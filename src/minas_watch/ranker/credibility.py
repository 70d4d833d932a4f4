"""Credibility ranker: dedup, source-class ordering and diversity quotas.

Ranking runs in four steps over the merged items of one refresh:

1. Provisional sort by recency (then base priority) to decide which copy of a
   duplicated story survives.
2. Dedup by canonical link and by (source, title) signature.
3. Composite ordering: source class first, then recency/priority within a
   class, then priority/recency/trust/id across classes.
4. Diversity quota: a capped share of the limit per source type, then
   backfill of any unused slots in rank order.
"""

import logging
import math
from collections import Counter
from functools import cmp_to_key

from minas_watch.data import Item, SourceType

logger = logging.getLogger(__name__)

_BASE_CLASS_RANK: dict[SourceType, int] = {
    SourceType.OFFICIAL: 0,
    SourceType.OSINT_SOCIAL: 1,
    SourceType.SENSOR: 2,
    SourceType.WIRE: 3,
}
FIRST_HAND_BONUS = 2

DEFAULT_QUOTA_SHARES: dict[SourceType, float] = {
    SourceType.OFFICIAL: 0.50,
    SourceType.OSINT_SOCIAL: 0.35,
    SourceType.SENSOR: 0.20,
    SourceType.WIRE: 0.20,
}
MIN_QUOTA = 2


def source_class_rank(item: Item) -> int:
    """Lower is more important. First-hand sources move up two classes."""
    rank = _BASE_CLASS_RANK[item.source_type]
    if item.first_hand:
        rank -= FIRST_HAND_BONUS
    return rank


def _same_class(a: Item, b: Item) -> bool:
    return a.source_type == b.source_type and a.first_hand == b.first_hand


def _collapse(value: str) -> str:
    return " ".join(value.lower().split())


def _signature(item: Item) -> tuple[str, str]:
    return (_collapse(item.source), _collapse(item.title))


def _desc(a: float, b: float) -> int:
    """Comparator result that puts the larger value first."""
    return (a < b) - (a > b)


def compare_items(a: Item, b: Item) -> int:
    """Composite comparator, most important first."""
    rank_a, rank_b = source_class_rank(a), source_class_rank(b)
    if rank_a != rank_b:
        return rank_a - rank_b

    if _same_class(a, b):
        ladder = (
            _desc(a.published_ts, b.published_ts),
            _desc(a.base_priority, b.base_priority),
        )
    else:
        ladder = (
            _desc(a.base_priority, b.base_priority),
            _desc(a.published_ts, b.published_ts),
        )
    for result in ladder:
        if result:
            return result

    trust = _desc(a.trust_tier, b.trust_tier)
    if trust:
        return trust
    return (a.id > b.id) - (a.id < b.id)


def provisional_sort(items: list[Item]) -> list[Item]:
    """Newest first, ties broken by higher base priority. Stable."""
    return sorted(items, key=lambda item: (-item.published_ts, -item.base_priority))


def dedupe(items: list[Item]) -> list[Item]:
    """Drop items whose link or (source, title) signature was already kept.

    The first occurrence in the given order survives.
    """
    seen_links: set[str] = set()
    seen_signatures: set[tuple[str, str]] = set()
    kept: list[Item] = []

    for item in items:
        signature = _signature(item)
        if item.link in seen_links or signature in seen_signatures:
            continue
        seen_links.add(item.link)
        seen_signatures.add(signature)
        kept.append(item)

    return kept


def rank_items(items: list[Item]) -> list[Item]:
    """Order deduplicated items with the composite comparator.

    Input is first put in id order so the result depends only on the set of
    items, not on the order they arrived in.
    """
    canonical = sorted(items, key=lambda item: item.id)
    return sorted(canonical, key=cmp_to_key(compare_items))


def quota_caps(
    limit: int,
    shares: dict[SourceType, float] | None = None,
    min_quota: int = MIN_QUOTA,
) -> dict[SourceType, int]:
    """Per-source-type caps for a given limit."""
    shares = shares or DEFAULT_QUOTA_SHARES
    return {
        source_type: max(min_quota, math.floor(limit * shares.get(source_type, 0.0)))
        for source_type in SourceType
    }


def select_with_quota(
    ranked: list[Item],
    limit: int,
    shares: dict[SourceType, float] | None = None,
    min_quota: int = MIN_QUOTA,
) -> list[Item]:
    """Pick at most ``limit`` items while capping each source type's share.

    The first pass walks the ranked list admitting items whose source type is
    still under its cap. The second pass fills remaining slots with the best
    items not yet admitted, regardless of type.

    Returns:
        Selected items in rank order.
    """
    if limit <= 0:
        return []
    if len(ranked) <= limit:
        return list(ranked)

    caps = quota_caps(limit, shares, min_quota)
    counts: Counter[SourceType] = Counter()
    selected: set[int] = set()

    for index, item in enumerate(ranked):
        if len(selected) >= limit:
            break
        if counts[item.source_type] < caps[item.source_type]:
            counts[item.source_type] += 1
            selected.add(index)

    for index in range(len(ranked)):
        if len(selected) >= limit:
            break
        selected.add(index)

    return [item for index, item in enumerate(ranked) if index in selected]


class CredibilityRanker:
    """Rank merged feed items by source credibility and recency.

    Args:
        quota_shares: Share of the limit each source type may take in the
            first selection pass. Defaults to DEFAULT_QUOTA_SHARES.
        min_quota: Lower bound for every per-type cap, so small limits do
            not starve a class.
    """

    def __init__(
        self,
        quota_shares: dict[SourceType, float] | None = None,
        min_quota: int = MIN_QUOTA,
    ) -> None:
        self._shares = dict(quota_shares or DEFAULT_QUOTA_SHARES)
        self._min_quota = min_quota

    def rank(
        self,
        items: list[Item],
        limit: int,
    ) -> list[Item]:
        """Deduplicate, rank and apply the diversity quota.

        Args:
            items: Merged items from one refresh cycle.
            limit: Maximum number of items to publish.

        Returns:
            At most ``limit`` items, most important first.
        """
        if not items:
            return []

        unique = dedupe(provisional_sort(items))
        ranked = rank_items(unique)
        selected = select_with_quota(ranked, limit, self._shares, self._min_quota)

        logger.debug(
            "Ranked %d items: %d after dedup, %d published",
            len(items),
            len(unique),
            len(selected),
        )
        return selected
