"""Feed fetching module."""

from minas_watch.fetch.base import FeedFetcher
from minas_watch.fetch.http import USER_AGENT, HttpFeedFetcher

__all__ = [
    "FeedFetcher",
    "HttpFeedFetcher",
    "USER_AGENT",
]
