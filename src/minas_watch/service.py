"""News service: cached snapshot, coalesced refreshes and change notification."""

import asyncio
import dataclasses
import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from minas_watch.data import FeedConfig, FeedError, Snapshot
from minas_watch.errors import RefreshFailedError
from minas_watch.fetch.base import FeedFetcher
from minas_watch.notifier import Listener, SnapshotNotifier, SnapshotStream
from minas_watch.ranker.base import ItemRanker
from minas_watch.ranker.credibility import CredibilityRanker
from minas_watch.refresh_logger import RefreshLogger

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS = 120_000
DEFAULT_MAX_ITEMS = 1000
MAX_REFRESH_COOLDOWN_MS = 30_000


class NewsService:
    """Owns the feed catalog and the published snapshot.

    Refreshes are coalesced: while one is in flight, every other caller
    awaits the same result instead of starting a second fetch wave. All
    snapshot mutation happens inside that single refresh task, so no lock is
    needed.

    Args:
        feeds: Resolved feeds to aggregate.
        fetcher: Fetches the feeds and reports per-feed failures.
        ranker: Turns merged items into the published slice.
        max_items: Upper bound on published items.
        refresh_interval_ms: Period of the background timer started by
            ``start()``.
        cache_ttl_ms: Snapshot age after which reads trigger a background
            refresh. Defaults to the refresh interval.
        notifier: Subscriber fan-out. A fresh one is created if omitted.
        refresh_logger: Optional per-cycle JSON logger.
        clock: Wall-clock source in seconds, injectable for tests.
    """

    def __init__(
        self,
        feeds: list[FeedConfig],
        fetcher: FeedFetcher,
        ranker: ItemRanker | None = None,
        *,
        max_items: int = DEFAULT_MAX_ITEMS,
        refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
        cache_ttl_ms: int | None = None,
        notifier: SnapshotNotifier | None = None,
        refresh_logger: RefreshLogger | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._feeds = tuple(feeds)
        self._fetcher = fetcher
        self._ranker = ranker or CredibilityRanker()
        self._max_items = max_items
        self._refresh_interval_s = refresh_interval_ms / 1000
        self._cache_ttl_s = (cache_ttl_ms or refresh_interval_ms) / 1000
        self._cooldown_s = min(MAX_REFRESH_COOLDOWN_MS / 1000, self._cache_ttl_s)
        self._notifier = notifier or SnapshotNotifier()
        self._refresh_logger = refresh_logger
        self._clock = clock

        self._snapshot = Snapshot(feeds=self._feeds)
        self._refreshed_ts = 0.0
        self._last_attempt_ts = 0.0
        self._last_attempt_errors: tuple[FeedError, ...] = ()
        self._inflight: asyncio.Task[Snapshot] | None = None
        self._background: set[asyncio.Task[Snapshot]] = set()
        self._timer: asyncio.Task[None] | None = None

    @property
    def feeds(self) -> tuple[FeedConfig, ...]:
        return self._feeds

    @property
    def max_items(self) -> int:
        return self._max_items

    @property
    def snapshot(self) -> Snapshot:
        """The current snapshot, without triggering any refresh."""
        return self._snapshot

    @property
    def refreshing(self) -> bool:
        return self._inflight is not None

    async def refresh(self, *, trigger: str = "manual") -> Snapshot:
        """Fetch all feeds and update the snapshot, coalescing concurrent calls.

        A caller that is cancelled while waiting does not cancel the refresh
        itself.

        Args:
            trigger: Label recorded in the refresh log.

        Returns:
            The snapshot held after the refresh.
        """
        if self._inflight is None:
            self._last_attempt_ts = self._clock()
            task = asyncio.ensure_future(self._run_refresh(trigger))
            self._inflight = task
            task.add_done_callback(self._clear_inflight)
        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: "asyncio.Task[Snapshot]") -> None:
        if self._inflight is task:
            self._inflight = None

    async def _run_refresh(self, trigger: str) -> Snapshot:
        if self._refresh_logger:
            self._refresh_logger.start_cycle(trigger)

        t0 = time.monotonic()
        report = await self._fetcher.fetch_all(list(self._feeds))
        self._last_attempt_errors = report.errors
        fetch_duration = time.monotonic() - t0

        if self._refresh_logger:
            self._refresh_logger.log_stage(
                stage="fetch",
                component=type(self._fetcher).__name__,
                input_data=list(self._feeds),
                output_data=report,
                duration_seconds=fetch_duration,
            )

        changed = False
        if report.items:
            t0 = time.monotonic()
            ranked = self._ranker.rank(list(report.items), self._max_items)
            rank_duration = time.monotonic() - t0

            if self._refresh_logger:
                self._refresh_logger.log_stage(
                    stage="rank",
                    component=type(self._ranker).__name__,
                    input_data={"item_count": len(report.items)},
                    output_data={"ids": [item.id for item in ranked]},
                    duration_seconds=rank_duration,
                )

            previous_ids = self._snapshot.item_ids
            now = self._clock()
            self._snapshot = Snapshot(
                refreshed_at=datetime.fromtimestamp(now, tz=UTC),
                items=tuple(ranked),
                feeds=self._feeds,
                errors=report.errors,
            )
            self._refreshed_ts = now
            changed = self._snapshot.item_ids != previous_ids

            logger.info(
                "Refreshed %d feeds: %d items published, %d feed errors",
                len(self._feeds),
                len(ranked),
                len(report.errors),
            )
            if changed:
                self._notifier.publish(self._snapshot)
        elif report.errors:
            logger.warning(
                "Refresh produced no items; keeping previous snapshot (%d feed errors)",
                len(report.errors),
            )
            self._snapshot = dataclasses.replace(self._snapshot, errors=report.errors)

        if self._refresh_logger:
            self._refresh_logger.finish_cycle(self._snapshot, changed=changed)

        return self._snapshot

    async def get_latest(self, limit: int | None = None) -> Snapshot:
        """Return the cached snapshot capped at ``limit`` items.

        With an empty cache this refreshes synchronously first. With a stale
        cache it starts a background refresh and returns the stale data
        immediately.

        Args:
            limit: Maximum number of items; capped at ``max_items``.

        Returns:
            The (possibly stale) snapshot.

        Raises:
            RefreshFailedError: No snapshot has ever succeeded and the forced
                refresh failed for every feed.
        """
        cap = self._max_items if limit is None else max(0, min(limit, self._max_items))

        if not self._snapshot.items:
            snapshot = await self.refresh(trigger="read")
            if not snapshot.items and self._last_attempt_errors:
                raise RefreshFailedError(self._last_attempt_errors)
        else:
            now = self._clock()
            stale = now - self._refreshed_ts >= self._cache_ttl_s
            cooled_down = now - self._last_attempt_ts >= self._cooldown_s
            if stale and cooled_down and not self.refreshing:
                self._refresh_in_background("stale")

        snapshot = self._snapshot
        return dataclasses.replace(snapshot, items=snapshot.items[:cap])

    def _refresh_in_background(self, trigger: str) -> None:
        self._last_attempt_ts = self._clock()
        task = asyncio.ensure_future(self.refresh(trigger=trigger))
        self._background.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: "asyncio.Task[Snapshot]") -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Background refresh failed: {exc}")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` whenever the published item set changes.

        Returns:
            A callable that unsubscribes the listener.
        """
        return self._notifier.subscribe(listener)

    def stream(self) -> SnapshotStream:
        """Open a stream that yields the current snapshot, then every change."""
        return self._notifier.open_stream(initial=self._snapshot)

    def start(self) -> None:
        """Refresh now and then every refresh interval. Requires a running loop."""
        if self._timer is not None:
            return
        self._timer = asyncio.get_running_loop().create_task(self._run_timer())

    async def _run_timer(self) -> None:
        while True:
            self._refresh_in_background("timer")
            await asyncio.sleep(self._refresh_interval_s)

    def stop(self) -> None:
        """Stop the background timer. An in-flight refresh still completes."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def close(self) -> None:
        """Stop the timer, wait for pending refreshes and close all subscribers."""
        self.stop()
        pending: list[Any] = list(self._background)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._notifier.close()
