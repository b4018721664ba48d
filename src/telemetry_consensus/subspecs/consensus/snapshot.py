"""Read-only snapshots handed to the rendering layer."""

from __future__ import annotations

from dataclasses import asdict

from telemetry_consensus.types import (
    Address,
    AuthoritySetId,
    BlockHash,
    BlockNumber,
    StrictBaseModel,
)

from .cache import ConsensusCache
from .vote import VoteRecord


class VoteDetail(StrictBaseModel):
    """Immutable copy of a single vote record."""

    prevoted: bool = False
    """Prevote observed, or extrapolated from a finalization."""

    precommitted: bool = False
    """Precommit observed, or extrapolated from a finalization."""

    implicit_prevoted: bool = False
    """Prevote implied by a vote at a higher height."""

    implicit_precommitted: bool = False
    """Precommit implied by a vote at a higher height."""

    implicit_pointer: BlockNumber | None = None
    """Height of the observation that implied this cell."""

    finalized: bool = False
    """Reporter finalized this height, explicitly or implicitly."""

    finalized_hash: BlockHash | None = None
    """Hash announced with an explicit finalization."""

    finalized_height: BlockNumber | None = None
    """Height the finalization applies to."""

    implicit_finalized: bool = False
    """Finalization implied by a finalization at a higher height."""

    @classmethod
    def from_record(cls, record: VoteRecord) -> VoteDetail:
        """Copy a live record."""
        return cls(**asdict(record))


ViewDetail = dict[Address, dict[Address, VoteDetail]]
"""Reporter address -> voter address -> frozen record."""


class ConsensusSnapshot(StrictBaseModel):
    """
    Everything the dashboard needs to draw the vote matrix.

    Snapshots are deep copies. Later updates to the tracker never show up in
    a snapshot that was already handed out.
    """

    items: tuple[tuple[BlockNumber, ViewDetail], ...] = ()
    """(height, view) pairs, newest first."""

    authority_set_id: AuthoritySetId | None = None
    """Id of the authority set the votes belong to."""

    authorities: tuple[Address, ...] = ()
    """Ordered members of the authority set."""

    display_loading_screen: bool = True
    """Whether no usable vote data has arrived yet."""

    best: BlockNumber | None = None
    """Best block height last announced by the feed."""

    @classmethod
    def capture(
        cls,
        cache: ConsensusCache,
        *,
        authority_set_id: AuthoritySetId | None,
        authorities: list[Address],
        display_loading_screen: bool,
        best: BlockNumber | None,
    ) -> ConsensusSnapshot:
        """Copy the current cache contents and authority state."""
        items = tuple(
            (
                height,
                {
                    reporter: {
                        voter: VoteDetail.from_record(record) for voter, record in voters.items()
                    }
                    for reporter, voters in view.reporters.items()
                },
            )
            for height, view in cache
        )
        return cls(
            items=items,
            authority_set_id=authority_set_id,
            authorities=tuple(authorities),
            display_loading_screen=display_loading_screen,
            best=best,
        )

    @property
    def heights(self) -> list[BlockNumber]:
        """Captured heights, newest first."""
        return [height for height, _ in self.items]

    def get(self, height: int, reporter: Address, voter: Address) -> VoteDetail:
        """
        Read one cell of the matrix.

        Returns:
            The captured record, or an empty record if nothing was observed.
        """
        for item_height, view in self.items:
            if item_height == height:
                detail = view.get(reporter, {}).get(voter)
                return detail if detail is not None else VoteDetail()
        return VoteDetail()
