from typing import Protocol

from minas_watch.data import FeedConfig, FetchReport


class FeedFetcher(Protocol):
    """Interface for retrieving and parsing a set of feeds."""

    async def fetch_all(self, feeds: list[FeedConfig]) -> FetchReport:
        """Fetch every feed concurrently.

        One feed's failure must never affect another's: every retrieval runs
        to completion (or its own timeout) before the report is built.

        Args:
            feeds: Resolved feeds to fetch.

        Returns:
            FetchReport with the merged items of successful feeds and one
            FeedError per failed feed.
        """
        ...
