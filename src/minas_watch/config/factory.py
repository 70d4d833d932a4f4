"""Factory functions to create components from configuration."""

from pathlib import Path

from minas_watch.catalog import FeedCatalog
from minas_watch.config.models import MinasWatchConfig, NewsServiceConfig
from minas_watch.fetch import HttpFeedFetcher
from minas_watch.ranker import CredibilityRanker
from minas_watch.refresh_logger import RefreshLogger
from minas_watch.service import NewsService


def create_catalog(config: MinasWatchConfig) -> FeedCatalog:
    """Create the feed catalog: built-in table plus configured sources."""
    return FeedCatalog(extra_sources=[source.model_dump() for source in config.sources])


def create_fetcher(config: NewsServiceConfig) -> HttpFeedFetcher:
    """Create the HTTP fetcher from service config."""
    return HttpFeedFetcher(
        timeout_ms=config.fetch_timeout_ms,
        user_agent=config.user_agent,
    )


def create_service(
    config: MinasWatchConfig,
    refresh_logger: RefreshLogger | None = None,
) -> NewsService:
    """Create a news service with its catalog, fetcher and ranker."""
    catalog = create_catalog(config)
    service_config = config.service
    return NewsService(
        feeds=catalog.resolve(service_config.feeds),
        fetcher=create_fetcher(service_config),
        ranker=CredibilityRanker(),
        max_items=service_config.max_items,
        refresh_interval_ms=service_config.refresh_ms,
        cache_ttl_ms=service_config.effective_cache_ttl_ms,
        refresh_logger=refresh_logger,
    )


def create_from_config(
    config: MinasWatchConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[NewsService, RefreshLogger | None]:
    """Create a complete service from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (service, refresh_logger).
        refresh_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    refresh_logger: RefreshLogger | None = None
    if log_enabled:
        refresh_logger = RefreshLogger(log_dir=log_dir, enabled=True)

    service = create_service(config, refresh_logger=refresh_logger)
    return (service, refresh_logger)
