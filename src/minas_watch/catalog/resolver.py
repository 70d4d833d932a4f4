"""Feed catalog: known-source lookup with inferred fallbacks."""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from minas_watch.catalog.labels import build_feed_label
from minas_watch.catalog.sources import BUILTIN_SOURCES
from minas_watch.data import FeedConfig, SourceType

logger = logging.getLogger(__name__)

MIN_TRUST_TIER = 1
MAX_TRUST_TIER = 5

DEFAULT_BASE_PRIORITY: dict[SourceType, float] = {
    SourceType.OFFICIAL: 40.0,
    SourceType.OSINT_SOCIAL: 35.0,
    SourceType.SENSOR: 30.0,
    SourceType.WIRE: 20.0,
}


def default_trust_tier(source_type: SourceType) -> int:
    return 3 if source_type == SourceType.WIRE else 4


def clamp_trust_tier(raw: Any, source_type: SourceType) -> int:
    """Clamp a trust tier to [1, 5].

    Non-integer input (bools, fractional numbers, non-numeric strings) falls
    back to the source type's default tier.
    """
    fallback = default_trust_tier(source_type)
    if raw is None or isinstance(raw, bool):
        return fallback
    if isinstance(raw, int):
        return min(max(raw, MIN_TRUST_TIER), MAX_TRUST_TIER)
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not value.is_integer():
        return fallback
    return min(max(int(value), MIN_TRUST_TIER), MAX_TRUST_TIER)


def coerce_base_priority(raw: Any, source_type: SourceType) -> float:
    """Return ``raw`` as a finite float, or the source type's default priority."""
    fallback = DEFAULT_BASE_PRIORITY[source_type]
    if raw is None or isinstance(raw, bool):
        return fallback
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return fallback
    return value if math.isfinite(value) else fallback


def normalize_region_tags(raw: Any) -> tuple[str, ...]:
    """Lowercase, trim and deduplicate region tags, keeping first-seen order."""
    if raw is None or isinstance(raw, str | bytes) or not isinstance(raw, Iterable):
        return ()
    seen: set[str] = set()
    tags: list[str] = []
    for value in raw:
        if not isinstance(value, str):
            continue
        tag = value.strip().lower()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tuple(tags)


def build_feed_config(
    url: str,
    *,
    label: str | None = None,
    source_type: Any = None,
    region_tags: Any = None,
    trust_tier: Any = None,
    first_hand: Any = False,
    base_priority: Any = None,
) -> FeedConfig:
    """Build a normalized FeedConfig from loosely typed metadata."""
    resolved_type = SourceType.parse(source_type)
    return FeedConfig(
        feed_url=url,
        feed_label=label.strip() if label and label.strip() else build_feed_label(url),
        source_type=resolved_type,
        region_tags=normalize_region_tags(region_tags),
        trust_tier=clamp_trust_tier(trust_tier, resolved_type),
        first_hand=first_hand is True,
        base_priority=coerce_base_priority(base_priority, resolved_type),
    )


def fallback_feed_config(url: str) -> FeedConfig:
    """Metadata for a URL that is not in the catalog: untrusted wire copy."""
    return build_feed_config(
        url,
        source_type=SourceType.WIRE,
        trust_tier=3,
        first_hand=False,
        base_priority=20,
    )


class FeedCatalog:
    """Static table of known feeds.

    Args:
        sources: Raw source mappings (``url``, ``label``, ``source_type``,
            ``region_tags``, ``trust_tier``, ``first_hand``, ``base_priority``).
            Defaults to the built-in table.
        extra_sources: Additional mappings; these override built-in entries
            that share the same URL.
    """

    def __init__(
        self,
        sources: Iterable[Mapping[str, Any]] | None = None,
        *,
        extra_sources: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._entries: dict[str, FeedConfig] = {}
        for raw in [*(BUILTIN_SOURCES if sources is None else sources), *extra_sources]:
            url = str(raw.get("url") or "").strip()
            if not url:
                logger.warning(f"Skipping catalog entry without url: {raw!r}")
                continue
            self._entries[url] = build_feed_config(
                url,
                label=raw.get("label"),
                source_type=raw.get("source_type"),
                region_tags=raw.get("region_tags"),
                trust_tier=raw.get("trust_tier"),
                first_hand=raw.get("first_hand", False),
                base_priority=raw.get("base_priority"),
            )

    @property
    def urls(self) -> list[str]:
        """Known feed URLs in declaration order."""
        return list(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, url: str) -> FeedConfig | None:
        return self._entries.get(url)

    def resolve(self, requested_urls: Iterable[str]) -> list[FeedConfig]:
        """Resolve requested feed URLs to FeedConfigs.

        Duplicates collapse to their first occurrence; blank entries are
        skipped; unknown URLs get inferred fallback metadata.

        Args:
            requested_urls: Feed URLs in the desired order.

        Returns:
            One FeedConfig per distinct URL, in first-occurrence order.
        """
        resolved: dict[str, FeedConfig] = {}
        for raw_url in requested_urls:
            url = raw_url.strip()
            if not url or url in resolved:
                continue
            known = self._entries.get(url)
            if known is None:
                logger.debug(f"Feed {url} not in catalog, using fallback metadata")
                known = fallback_feed_config(url)
            resolved[url] = known
        return list(resolved.values())
