"""Tests for protocol compliance."""

from minas_watch.data import FeedConfig, FetchReport, Item
from minas_watch.fetch import HttpFeedFetcher
from minas_watch.ranker import CredibilityRanker
from minas_watch.service import NewsService

FEED = FeedConfig(feed_url="https://example.com/rss", feed_label="Example")


def test_http_fetcher_matches_protocol() -> None:
    """Verify HttpFeedFetcher structurally matches the FeedFetcher protocol."""
    fetcher = HttpFeedFetcher()
    assert hasattr(fetcher, "fetch_all")
    assert callable(fetcher.fetch_all)


def test_credibility_ranker_matches_protocol() -> None:
    """Verify CredibilityRanker structurally matches the ItemRanker protocol."""
    ranker = CredibilityRanker()
    assert hasattr(ranker, "rank")
    assert callable(ranker.rank)


class StaticFetcher:
    """A minimal fetcher returning a fixed report."""

    def __init__(self, report: FetchReport) -> None:
        self.report = report

    async def fetch_all(self, feeds: list[FeedConfig]) -> FetchReport:
        return self.report


class ReverseRanker:
    """A minimal ranker that reverses its input."""

    def rank(self, items: list[Item], limit: int) -> list[Item]:
        return list(reversed(items))[:limit]


async def test_service_accepts_any_protocol_implementation() -> None:
    """Any classes with the right method signatures can drive the service."""
    items = tuple(
        Item(id=f"id{i}", title=f"T{i}", link=f"https://example.com/{i}", feed=FEED) for i in range(3)
    )
    service = NewsService([FEED], StaticFetcher(FetchReport(items=items)), ReverseRanker(), max_items=2)

    snapshot = await service.refresh()

    assert snapshot.item_ids == ("id2", "id1")
