"""Recorders applying explicit feed observations to the cache."""

from __future__ import annotations

from dataclasses import dataclass

from telemetry_consensus.types import Address, BlockHash, BlockNumber

from .backfill import BackfillEngine
from .cache import ConsensusCache
from .vote import VoteKind


@dataclass(slots=True)
class VoteRecorder:
    """Applies explicit prevotes and precommits."""

    cache: ConsensusCache
    """Cache receiving the explicit vote."""

    backfill: BackfillEngine
    """Engine propagating the vote to older heights."""

    precommit_implies_prevote: bool = False
    """Whether backfilled precommits also imply prevotes."""

    def record_vote(
        self,
        reporter: Address,
        height: BlockNumber,
        voter: Address,
        kind: VoteKind,
    ) -> int:
        """
        Record that `reporter` saw `voter` cast a vote of `kind` at `height`.

        Replaying the same vote changes nothing: the explicit flag is already
        set and backfill stops at the first resolved cell below.

        Returns:
            Number of older cells that received an implicit vote.
        """
        self.cache.get_or_create(height, reporter, voter).mark_explicit(kind)
        return self.backfill.backfill_vote(
            height,
            reporter,
            voter,
            kind,
            precommit_implies_prevote=self.precommit_implies_prevote,
        )


@dataclass(slots=True)
class FinalizationRecorder:
    """Applies explicit finalizations."""

    cache: ConsensusCache
    """Cache receiving the finalization."""

    backfill: BackfillEngine
    """Engine propagating the finalization to older heights."""

    def record_finalization(
        self,
        reporter: Address,
        height: BlockNumber,
        block_hash: BlockHash,
    ) -> int:
        """
        Record that `reporter` finalized the block at `height`.

        Finalization is a claim about the reporter's own view, so the cell
        used is (reporter, reporter).

        Returns:
            Number of older cells that were implicitly finalized.
        """
        record = self.cache.get_or_create(height, reporter, reporter)
        record.finalized = True
        record.finalized_hash = block_hash
        record.finalized_height = height

        # Extrapolated: a block is only finalized after it was prevoted and
        # precommitted, even if we subscribed too late to see those messages.
        record.prevoted = True
        record.precommitted = True

        return self.backfill.backfill_finalization(height, reporter)
