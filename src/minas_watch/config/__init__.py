"""Configuration module for Minas Watch."""

from minas_watch.config.factory import create_from_config
from minas_watch.config.loader import config_from_env, get_default_config_path, load_config
from minas_watch.config.models import (
    FeedSourceConfig,
    LoggingConfig,
    MinasWatchConfig,
    NewsServiceConfig,
)

__all__ = [
    "FeedSourceConfig",
    "LoggingConfig",
    "MinasWatchConfig",
    "NewsServiceConfig",
    "config_from_env",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
