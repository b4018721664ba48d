"""
Finality tracker facade.

One tracker exists per subscribed chain. The feed dispatcher calls it once per
decoded event; every call mutates the cache synchronously and returns. The
rendering layer reads snapshots between calls.

::

    Feed dispatcher
           |
    FinalityTracker
           |
           +-- prevote / precommit  --> VoteRecorder         --> BackfillEngine
           +-- finalized            --> FinalizationRecorder --> BackfillEngine
           +-- authority_set        --> AuthoritySetTracker (cache reset)
           +-- best_block           --> stale event filter
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from telemetry_consensus.subspecs import metrics
from telemetry_consensus.types import Address, AuthoritySetId, BlockHash, BlockNumber

from .authority import AuthoritySetTracker
from .backfill import BackfillEngine
from .cache import ConsensusCache
from .config import TrackerConfig
from .recorders import FinalizationRecorder, VoteRecorder
from .snapshot import ConsensusSnapshot
from .vote import VoteKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FinalityTracker:
    """
    Reconstructs prevote, precommit and finalization state per block height.

    The tracker owns its cache exclusively. Callers never receive a live
    reference to it; `snapshot()` hands out deep copies.
    """

    config: TrackerConfig = field(default_factory=TrackerConfig)
    """Retention and extrapolation settings."""

    cache: ConsensusCache = field(default_factory=ConsensusCache)
    """Vote cache shared by all components below."""

    best: BlockNumber | None = None
    """Best block height announced by the feed, if any."""

    _votes: VoteRecorder = field(init=False, repr=False)
    _finalizations: FinalizationRecorder = field(init=False, repr=False)
    _authority: AuthoritySetTracker = field(init=False, repr=False)

    def __post_init__(self) -> None:
        backfill = BackfillEngine(self.cache)
        self._votes = VoteRecorder(
            self.cache,
            backfill,
            precommit_implies_prevote=self.config.precommit_implies_prevote,
        )
        self._finalizations = FinalizationRecorder(self.cache, backfill)
        self._authority = AuthoritySetTracker(self.cache)

    @property
    def authority_set_id(self) -> AuthoritySetId | None:
        """Id of the current authority set."""
        return self._authority.authority_set_id

    @property
    def authorities(self) -> list[Address]:
        """Copy of the current authority list."""
        return list(self._authority.authorities)

    @property
    def display_loading_screen(self) -> bool:
        """Whether no vote data has arrived since the last subscription."""
        return self._authority.display_loading_screen

    def prevote(
        self,
        reporter: Address,
        height: BlockNumber,
        block_hash: BlockHash,
        voter: Address,
    ) -> None:
        """Handle a prevote that `reporter` saw `voter` cast at `height`."""
        self._record_vote(reporter, height, voter, VoteKind.PREVOTE)

    def precommit(
        self,
        reporter: Address,
        height: BlockNumber,
        block_hash: BlockHash,
        voter: Address,
    ) -> None:
        """Handle a precommit that `reporter` saw `voter` cast at `height`."""
        self._record_vote(reporter, height, voter, VoteKind.PRECOMMIT)

    def finalized(self, reporter: Address, height: BlockNumber, block_hash: BlockHash) -> None:
        """Handle `reporter` announcing it finalized `height`."""
        if self._is_stale(height):
            return

        marked = self._finalizations.record_finalization(reporter, height, block_hash)
        metrics.finalizations_recorded.inc()
        metrics.backfilled_cells.labels(kind="finalized").inc(marked)
        self._after_update()

    def authority_set(self, set_id: AuthoritySetId, authorities: list[Address]) -> None:
        """Handle an authority set announcement."""
        if self._authority.on_authority_set(set_id, authorities):
            metrics.authority_set_resets.inc()
            metrics.cached_heights.set(0)

    def best_block(self, height: BlockNumber) -> None:
        """Record the chain's best block height."""
        self.best = height

    def reset(self) -> None:
        """Forget the authority set and all votes, e.g. after the chain is removed."""
        logger.info("Resetting finality tracker (%d cached heights)", len(self.cache))
        self._authority.forget()
        self.best = None
        metrics.cached_heights.set(0)

    def snapshot(self) -> ConsensusSnapshot:
        """Capture an immutable copy of the current state."""
        return ConsensusSnapshot.capture(
            self.cache,
            authority_set_id=self._authority.authority_set_id,
            authorities=self._authority.authorities,
            display_loading_screen=self._authority.display_loading_screen,
            best=self.best,
        )

    def _record_vote(
        self,
        reporter: Address,
        height: BlockNumber,
        voter: Address,
        kind: VoteKind,
    ) -> None:
        if self._is_stale(height):
            return

        marked = self._votes.record_vote(reporter, height, voter, kind)
        metrics.votes_recorded.labels(kind=kind.value).inc()
        metrics.backfilled_cells.labels(kind=kind.value).inc(marked)
        self._after_update()

    def _is_stale(self, height: BlockNumber) -> bool:
        """Check whether an event lags too far behind the best block to display."""
        window = self.config.stale_window
        if window is None or self.best is None or height >= self.best - window:
            return False

        logger.debug("Ignoring event for height %d, best block is %d", height, self.best)
        metrics.stale_events.inc()
        return True

    def _after_update(self) -> None:
        """Apply retention and leave the loading screen once data exists."""
        if self.config.max_heights is not None:
            pruned = self.cache.prune(self.config.max_heights)
            if pruned:
                logger.debug("Pruned %d old heights from the vote cache", pruned)

        self._authority.display_loading_screen = False
        metrics.cached_heights.set(len(self.cache))
