"""Concurrent feed retrieval over HTTP."""

import asyncio
import logging

import httpx

from minas_watch.data import FeedConfig, FeedError, FetchReport, Item
from minas_watch.errors import FeedFetchError
from minas_watch.normalize import parse_feed

logger = logging.getLogger(__name__)

USER_AGENT = "MinasWatch/0.1 (+rss)"
ACCEPT = "application/rss+xml, application/atom+xml, application/xml, text/xml;q=0.9, */*;q=0.8"
DEFAULT_FETCH_TIMEOUT_MS = 7000
FALLBACK_ERROR_MESSAGE = "feed_fetch_failed"


class HttpFeedFetcher:
    """Fetch RSS/Atom feeds with httpx, one bounded request per feed.

    Args:
        timeout_ms: Per-feed deadline in milliseconds. A feed that has not
            answered by then is aborted and recorded as failed.
        user_agent: Client identity presented to feed servers.
    """

    def __init__(
        self,
        *,
        timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._timeout_ms = timeout_ms
        self._headers = {
            "User-Agent": user_agent,
            "Accept": ACCEPT,
        }

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    async def fetch_all(self, feeds: list[FeedConfig]) -> FetchReport:
        """Fetch all feeds concurrently and settle every outcome.

        Args:
            feeds: Resolved feeds to fetch.

        Returns:
            FetchReport with items from successful feeds (in catalog order)
            and a FeedError for each failed one.
        """
        timeout_s = self._timeout_ms / 1000
        async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as client:
            tasks = [self._fetch_with_deadline(client, feed, timeout_s) for feed in feeds]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        items: list[Item] = []
        errors: list[FeedError] = []
        for feed, result in zip(feeds, results, strict=True):
            if isinstance(result, BaseException):
                message = str(result) or FALLBACK_ERROR_MESSAGE
                logger.warning(f"Error fetching feed {feed.feed_url}: {message}")
                errors.append(FeedError.for_feed(feed, message))
                continue
            logger.debug(f"Fetched {len(result)} items from {feed.feed_url}")
            items.extend(result)

        return FetchReport(items=tuple(items), errors=tuple(errors))

    async def _fetch_with_deadline(
        self,
        client: httpx.AsyncClient,
        feed: FeedConfig,
        timeout_s: float,
    ) -> list[Item]:
        try:
            return await asyncio.wait_for(self._fetch_single(client, feed), timeout=timeout_s)
        except (TimeoutError, httpx.TimeoutException) as e:
            raise FeedFetchError(f"Timed out after {self._timeout_ms} ms") from e

    async def _fetch_single(self, client: httpx.AsyncClient, feed: FeedConfig) -> list[Item]:
        """Retrieve and parse a single feed."""
        response = await client.get(feed.feed_url, headers=self._headers)
        if not response.is_success:
            raise FeedFetchError(f"HTTP {response.status_code}")
        return parse_feed(response.text, feed)
