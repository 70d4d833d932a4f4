"""Exception types raised by Minas Watch."""

from minas_watch.data import FeedError


class MinasWatchError(Exception):
    """Base class for Minas Watch errors."""


class FeedFetchError(MinasWatchError):
    """A single feed could not be retrieved (bad status, timeout)."""


class RefreshFailedError(MinasWatchError):
    """No snapshot has ever succeeded and the forced refresh failed too."""

    def __init__(self, errors: tuple[FeedError, ...]) -> None:
        self.errors = errors
        details = "; ".join(f"{e.feed_label}: {e.message}" for e in errors)
        super().__init__(f"All {len(errors)} feeds failed: {details}")
