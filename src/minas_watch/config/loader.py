"""YAML and environment configuration loading utilities."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from minas_watch.config.models import MinasWatchConfig

# Environment variable -> NewsServiceConfig field
ENV_FIELDS: dict[str, str] = {
    "NEWS_REFRESH_MS": "refresh_ms",
    "NEWS_MAX_ITEMS": "max_items",
    "NEWS_FETCH_TIMEOUT_MS": "fetch_timeout_ms",
    "NEWS_CACHE_TTL_MS": "cache_ttl_ms",
    "NEWS_FEEDS": "feeds",
}


def load_config(path: Path | str) -> MinasWatchConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated MinasWatchConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    return MinasWatchConfig.model_validate(raw or {})


def config_from_env(
    environ: Mapping[str, str] | None = None,
    base: MinasWatchConfig | None = None,
) -> MinasWatchConfig:
    """Apply ``NEWS_*`` environment overrides on top of a base config.

    Only variables that are present override; invalid values fall back to
    the field defaults like any other config input.

    Args:
        environ: Environment mapping (defaults to ``os.environ``).
        base: Config to override (defaults to an all-default config).

    Returns:
        New validated MinasWatchConfig.
    """
    environ = os.environ if environ is None else environ
    base = base or MinasWatchConfig()

    service: dict[str, Any] = base.service.model_dump()
    for env_name, field_name in ENV_FIELDS.items():
        if env_name in environ:
            service[field_name] = environ[env_name]

    return MinasWatchConfig.model_validate({**base.model_dump(), "service": service})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parent.parent.parent.parent / "configs" / "default.yaml"
