#!/usr/bin/env python
"""CLI for the Minas Watch feed aggregator."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from minas_watch.config import config_from_env, create_from_config, get_default_config_path, load_config
from minas_watch.errors import RefreshFailedError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    config: Path | None = None
    limit: int | None = None
    watch: bool = False
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path | None) -> Path | None:
        if v is not None and not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @field_validator("limit")
    @classmethod
    def limit_must_be_positive(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError(f"Limit must be positive: {v}")
        return v


async def run(args: CLIArgs) -> None:
    """Fetch once and print the snapshot, or keep watching for changes.

    Args:
        args: Validated CLI arguments.
    """
    base = load_config(args.config) if args.config else None
    config = config_from_env(base=base)
    service, refresh_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    logger.info(f"Aggregating {len(service.feeds)} feeds")
    for feed in service.feeds:
        logger.info(f"  {feed.feed_label} ({feed.source_type.value}, T{feed.trust_tier})")

    if not args.watch:
        snapshot = await service.get_latest(args.limit)
        print(json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False))
        for error in snapshot.errors:
            logger.warning(f"{error.feed_label}: {error.message}")
        if refresh_logger and refresh_logger.last_log_path:
            logger.info(f"\nRefresh log written to: {refresh_logger.last_log_path}")
        return

    service.start()
    try:
        async with service.stream() as updates:
            async for snapshot in updates:
                refreshed = snapshot.to_dict()["refreshedAt"] or "never"
                logger.info(
                    f"[{refreshed}] {len(snapshot.items)} items, {len(snapshot.errors)} feed errors"
                )
                for item in snapshot.items[: args.limit or 5]:
                    logger.info(f"  {item.title} ({item.source})")
    finally:
        await service.close()


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Aggregate and rank news feeds.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help=f"Path to YAML config file (e.g. {get_default_config_path()})",
    )
    parser.add_argument(
        "--limit",
        "-n",
        type=int,
        default=None,
        help="Maximum number of items to print",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        default=False,
        help="Keep refreshing and print every change",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON record of each refresh cycle",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for refresh logs (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()

    try:
        args = CLIArgs(
            config=ns.config,
            limit=ns.limit,
            watch=ns.watch,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except RefreshFailedError as e:
        logger.error(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
