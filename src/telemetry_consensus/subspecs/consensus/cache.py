"""
Ordered per-height cache of consensus views.

Why Keep a Cache?
-----------------
Telemetry reporters relay every prevote, precommit and finalization they see.
The dashboard draws these as a matrix keyed by (height, reporter, voter). The
cache is the backing store of that matrix: one ConsensusView per block height
that any message has referenced.

Ordering
--------
Entries are exposed newest first, i.e. by descending height. Backfill walks
the cache downward from a trigger height, so the structure keeps:

1. **View storage**: Maps height to ConsensusView
2. **Height index**: Sorted list of heights, maintained with bisect

Lookups are O(1); walking the k heights below a given height is O(log n + k).

Each height appears at most once.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass, field

from telemetry_consensus.types import Address, BlockNumber

from .view import ConsensusView
from .vote import VoteRecord


@dataclass(slots=True)
class ConsensusCache:
    """Cache of consensus views, one per referenced block height."""

    _views: dict[BlockNumber, ConsensusView] = field(default_factory=dict)
    """View storage keyed by height."""

    _heights: list[BlockNumber] = field(default_factory=list)
    """Cached heights in ascending order."""

    def __len__(self) -> int:
        """Return the number of cached heights."""
        return len(self._views)

    def __contains__(self, height: int) -> bool:
        """Check if a height is in the cache."""
        return height in self._views

    def __iter__(self) -> Iterator[tuple[BlockNumber, ConsensusView]]:
        """Iterate over (height, view) pairs, newest first."""
        for height in reversed(self._heights):
            yield height, self._views[height]

    @property
    def is_empty(self) -> bool:
        """Check if the cache is empty."""
        return not self._views

    @property
    def highest(self) -> BlockNumber | None:
        """Highest cached height, or None if the cache is empty."""
        return self._heights[-1] if self._heights else None

    @property
    def lowest(self) -> BlockNumber | None:
        """Lowest cached height, or None if the cache is empty."""
        return self._heights[0] if self._heights else None

    def find(self, height: BlockNumber) -> tuple[ConsensusView, int] | None:
        """
        Look up the view for an exact height.

        Args:
            height: The block height to look up.

        Returns:
            The view and its position in newest-first order, or None if absent.
        """
        view = self._views.get(height)
        if view is None:
            return None

        # Position counted from the newest end of the ascending index.
        index = bisect.bisect_left(self._heights, height)
        return view, len(self._heights) - 1 - index

    def get_or_create_view(self, height: BlockNumber) -> ConsensusView:
        """Return the view for a height, inserting an empty one if absent."""
        view = self._views.get(height)
        if view is None:
            view = self._views[height] = ConsensusView()
            bisect.insort(self._heights, height)
        return view

    def get_or_create(
        self,
        height: BlockNumber,
        reporter: Address,
        voter: Address,
    ) -> VoteRecord:
        """
        Return the live record for a (height, reporter, voter) cell.

        Creates the view for the height and the reporter and voter entries
        within it as needed. Never fails.
        """
        return self.get_or_create_view(height).get_or_create(reporter, voter)

    def heights_below(self, height: BlockNumber) -> Iterator[BlockNumber]:
        """
        Iterate over cached heights strictly below `height`, highest first.

        Callers may create cells at the yielded heights while iterating, but
        must not insert or remove heights.
        """
        index = bisect.bisect_left(self._heights, height)
        while index > 0:
            index -= 1
            yield self._heights[index]

    def prune(self, max_heights: int) -> int:
        """
        Drop the lowest heights until at most `max_heights` remain.

        Args:
            max_heights: Number of heights to keep.

        Returns:
            Number of heights removed.
        """
        excess = len(self._heights) - max_heights
        if excess <= 0:
            return 0

        # The ascending index puts the oldest heights first.
        for height in self._heights[:excess]:
            del self._views[height]
        del self._heights[:excess]
        return excess

    def reset(self) -> None:
        """Remove all heights from the cache."""
        self._views.clear()
        self._heights.clear()
