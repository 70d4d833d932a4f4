"""Protocol for item ranking."""

from typing import Protocol

from minas_watch.data import Item


class ItemRanker(Protocol):
    """Interface for turning merged feed items into the published slice."""

    def rank(
        self,
        items: list[Item],
        limit: int,
    ) -> list[Item]:
        """Deduplicate, order and bound the merged items of one refresh.

        Args:
            items: All items from the successful feeds of one cycle.
            limit: Maximum number of items to publish.

        Returns:
            At most ``limit`` items, most important first.
        """
        ...
