"""
Backfill of implicit votes onto older cached heights.

Voting on a block is voting on all of its ancestors. When a vote for height H
arrives, every cached height below H receives an implicit vote for the same
(reporter, voter) pair, with a pointer back to H.

Early Termination
-----------------
The walk goes downward and stops at the first cell that already carries the
vote, explicitly or implicitly. Every earlier update ran the same walk, so all
heights below such a cell were resolved when it was. Each update therefore
costs O(distance to the last resolved height) instead of O(cache size).

The stop also preserves existing pointers: a cell implied by an even newer
vote keeps pointing at that vote.

Only heights strictly below the trigger are ever touched, and no new heights
are created.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from telemetry_consensus.types import Address, BlockNumber

from .cache import ConsensusCache
from .vote import VoteKind, VoteRecord

logger = logging.getLogger(__name__)

ResolvedPredicate = Callable[[VoteRecord], bool]
"""Returns True when a cell already carries the observation being propagated."""

CellMarker = Callable[[BlockNumber, VoteRecord], None]
"""Writes the implicit observation into the cell at the given height."""


@dataclass(slots=True)
class BackfillEngine:
    """Propagates observations backward through a consensus cache."""

    cache: ConsensusCache
    """Cache whose older heights receive the implicit marks."""

    def backfill(
        self,
        start: BlockNumber,
        reporter: Address,
        voter: Address,
        resolved: ResolvedPredicate,
        mark: CellMarker,
    ) -> int:
        """
        Walk the cached heights below `start` and mark unresolved cells.

        Args:
            start: Height of the triggering observation.
            reporter: Reporter whose cells are updated.
            voter: Voter whose cells are updated.
            resolved: Stop condition evaluated on each cell before marking.
            mark: Update applied to each unresolved cell.

        Returns:
            Number of cells marked.
        """
        marked = 0
        for height in self.cache.heights_below(start):
            record = self.cache.get_or_create(height, reporter, voter)
            if resolved(record):
                break
            mark(height, record)
            marked += 1

        if marked:
            logger.debug(
                "Backfilled %d heights below %d for reporter %s voter %s",
                marked,
                start,
                reporter,
                voter,
            )
        return marked

    def backfill_vote(
        self,
        start: BlockNumber,
        reporter: Address,
        voter: Address,
        kind: VoteKind,
        *,
        precommit_implies_prevote: bool = False,
    ) -> int:
        """
        Propagate a prevote or precommit seen at `start`.

        With `precommit_implies_prevote`, a precommit also marks the implicit
        prevote, and a cell only counts as resolved once it carries both.

        Returns:
            Number of cells marked.
        """
        extrapolate = precommit_implies_prevote and kind is VoteKind.PRECOMMIT

        def resolved(record: VoteRecord) -> bool:
            if extrapolate:
                return record.has_precommit and record.has_prevote
            return record.has_vote(kind)

        def mark(height: BlockNumber, record: VoteRecord) -> None:
            record.mark_implicit(kind, start)
            if extrapolate:
                record.implicit_prevoted = True

        return self.backfill(start, reporter, voter, resolved, mark)

    def backfill_finalization(self, start: BlockNumber, reporter: Address) -> int:
        """
        Propagate a finalization seen at `start` onto the reporter's own cells.

        A finalized block cannot exist without a prevote and a precommit, so
        every touched cell gets both extrapolated as well.

        Returns:
            Number of cells marked.
        """

        def resolved(record: VoteRecord) -> bool:
            return record.has_finalization

        def mark(height: BlockNumber, record: VoteRecord) -> None:
            record.finalized = True
            record.finalized_height = height
            record.implicit_finalized = True
            record.implicit_pointer = start
            record.prevoted = True
            record.precommitted = True
            record.implicit_prevoted = True
            record.implicit_precommitted = True

        return self.backfill(start, reporter, reporter, resolved, mark)
