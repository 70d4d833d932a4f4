"""Snapshot fan-out to subscribers.

Two kinds of subscribers are supported: callback listeners and bounded
streams. Neither may block or break the publisher: a listener that raises is
removed, and a stream whose queue is full is closed and removed.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from minas_watch.data import Snapshot

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], Any]

DEFAULT_STREAM_SIZE = 16


class SnapshotStream:
    """A bounded channel of snapshots for one subscriber.

    Iterate with ``async for``; iteration ends once the stream is closed and
    drained.
    """

    def __init__(self, maxsize: int, on_close: Callable[["SnapshotStream"], None]) -> None:
        self._queue: asyncio.Queue[Snapshot | None] = asyncio.Queue(maxsize=maxsize)
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, snapshot: Snapshot) -> bool:
        """Enqueue without waiting. Returns False if the stream is closed or full."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(snapshot)
        except asyncio.QueueFull:
            return False
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(None)
        except asyncio.QueueFull:
            # The reader is not waiting; it stops once the queue is drained.
            pass
        self._on_close(self)

    def __aiter__(self) -> "SnapshotStream":
        return self

    async def __anext__(self) -> Snapshot:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        snapshot = await self._queue.get()
        if snapshot is None:
            raise StopAsyncIteration
        return snapshot

    async def __aenter__(self) -> "SnapshotStream":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


class SnapshotNotifier:
    """Publish snapshots to listeners and streams.

    Args:
        stream_maxsize: Queue bound for each stream. A subscriber that falls
            this far behind is disconnected.
    """

    def __init__(self, stream_maxsize: int = DEFAULT_STREAM_SIZE) -> None:
        self._stream_maxsize = stream_maxsize
        self._listeners: dict[object, Listener] = {}
        self._streams: set[SnapshotStream] = set()
        self._pending: set[asyncio.Task[Any]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners) + len(self._streams)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with each published snapshot.

        The listener may be a plain function or a coroutine function.

        Returns:
            A callable that unsubscribes the listener.
        """
        token = object()
        self._listeners[token] = listener

        def unsubscribe() -> None:
            self._listeners.pop(token, None)

        return unsubscribe

    def open_stream(self, initial: Snapshot | None = None) -> SnapshotStream:
        """Open a bounded stream, optionally primed with an initial snapshot."""
        stream = SnapshotStream(self._stream_maxsize, on_close=self._streams.discard)
        if initial is not None:
            stream.offer(initial)
        self._streams.add(stream)
        return stream

    def publish(self, snapshot: Snapshot) -> None:
        """Deliver ``snapshot`` to every subscriber without blocking."""
        for token, listener in list(self._listeners.items()):
            try:
                result = listener(snapshot)
            except Exception:
                logger.warning("Listener raised, unsubscribing it", exc_info=True)
                self._listeners.pop(token, None)
                continue
            if inspect.isawaitable(result):
                self._track(token, result)

        for stream in list(self._streams):
            if not stream.offer(snapshot):
                logger.warning("Stream subscriber is not keeping up, disconnecting it")
                stream.close()

    def _track(self, token: object, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)

        def done(finished: asyncio.Task[Any]) -> None:
            self._pending.discard(finished)
            if finished.cancelled():
                return
            exc = finished.exception()
            if exc is not None:
                logger.warning(f"Async listener failed, unsubscribing it: {exc}")
                self._listeners.pop(token, None)

        task.add_done_callback(done)

    def close(self) -> None:
        """Close every stream and drop every listener."""
        for stream in list(self._streams):
            stream.close()
        self._listeners.clear()
