"""Pydantic configuration models for Minas Watch."""

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from minas_watch.catalog import DEFAULT_FEEDS
from minas_watch.fetch import USER_AGENT


def to_positive_int(raw: Any, fallback: int | None) -> int | None:
    """Return ``raw`` as a positive integer, or ``fallback`` if it is not one."""
    if raw is None or isinstance(raw, bool):
        return fallback
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    if not value.is_integer() or value <= 0:
        return fallback
    return int(value)


def parse_feed_list(raw: Any) -> list[str]:
    """Parse a comma-separated string or a list of URLs; empty means defaults."""
    if isinstance(raw, str):
        values = raw.split(",")
    elif isinstance(raw, list | tuple):
        values = [value for value in raw if isinstance(value, str)]
    else:
        return list(DEFAULT_FEEDS)
    feeds = [value.strip() for value in values if value.strip()]
    return feeds or list(DEFAULT_FEEDS)


# ============================================================
# Service Config
# ============================================================


class NewsServiceConfig(BaseModel):
    """Tuning for the refresh loop, cache and fetcher.

    Invalid or missing scalar values fall back to their defaults instead of
    failing validation.
    """

    refresh_ms: int = 120_000
    max_items: int = 1000
    fetch_timeout_ms: int = 7000
    cache_ttl_ms: int | None = None
    feeds: list[str] = Field(default_factory=lambda: list(DEFAULT_FEEDS))
    user_agent: str = USER_AGENT

    model_config = {"frozen": True}

    @field_validator("refresh_ms", "max_items", "fetch_timeout_ms", mode="before")
    @classmethod
    def positive_or_default(cls, v: Any, info: ValidationInfo) -> int:
        default = cls.model_fields[info.field_name].default
        return to_positive_int(v, default)  # type: ignore[return-value]

    @field_validator("cache_ttl_ms", mode="before")
    @classmethod
    def ttl_positive_or_unset(cls, v: Any) -> int | None:
        return to_positive_int(v, None)

    @field_validator("feeds", mode="before")
    @classmethod
    def feeds_or_default(cls, v: Any) -> list[str]:
        return parse_feed_list(v)

    @property
    def effective_cache_ttl_ms(self) -> int:
        """Cache TTL, defaulting to the refresh interval."""
        return self.cache_ttl_ms or self.refresh_ms


# ============================================================
# Catalog Config
# ============================================================


class FeedSourceConfig(BaseModel):
    """An extra catalog entry declared in configuration."""

    url: str
    label: str | None = None
    source_type: str = "wire"
    region_tags: list[str] = Field(default_factory=list)
    trust_tier: Any = None
    first_hand: bool = False
    base_priority: float | None = None

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-refresh JSON logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class MinasWatchConfig(BaseModel):
    """Root configuration for Minas Watch."""

    service: NewsServiceConfig = Field(default_factory=NewsServiceConfig)
    sources: list[FeedSourceConfig] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
