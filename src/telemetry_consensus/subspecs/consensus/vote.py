"""Per-cell vote records and the vote kinds that fill them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from telemetry_consensus.types import BlockHash, BlockNumber


class VoteKind(Enum):
    """The two voting rounds of the GRANDPA finality gadget."""

    PREVOTE = "prevote"
    PRECOMMIT = "precommit"


@dataclass(slots=True)
class VoteRecord:
    """
    What one reporter has seen of one voter at one block height.

    Explicit flags come straight from feed messages. Implicit flags are
    inferred: a vote on a block is a vote on all of its ancestors, so a vote
    seen at height H marks every cached height below H as well.

    Every flag only ever moves from False to True. The record is only cleared
    by dropping the whole cache.
    """

    prevoted: bool = False
    """An explicit prevote was observed (or extrapolated from finalization)."""

    precommitted: bool = False
    """An explicit precommit was observed (or extrapolated from finalization)."""

    implicit_prevoted: bool = False
    """A prevote on a descendant block implies a prevote here."""

    implicit_precommitted: bool = False
    """A precommit on a descendant block implies a precommit here."""

    implicit_pointer: BlockNumber | None = None
    """
    Height of the observation that caused the implicit marks.

    Always higher than the height of the cell itself.
    """

    finalized: bool = False
    """The reporter considers this height finalized."""

    finalized_hash: BlockHash | None = None
    """Hash reported with an explicit finalization."""

    finalized_height: BlockNumber | None = None
    """Height the finalization refers to."""

    implicit_finalized: bool = False
    """Finalization of a descendant block implies finalization here."""

    @property
    def has_prevote(self) -> bool:
        """Whether a prevote is known, explicitly or implicitly."""
        return self.prevoted or self.implicit_prevoted

    @property
    def has_precommit(self) -> bool:
        """Whether a precommit is known, explicitly or implicitly."""
        return self.precommitted or self.implicit_precommitted

    @property
    def has_finalization(self) -> bool:
        """Whether a finalization is known, explicitly or implicitly."""
        return self.finalized or self.implicit_finalized

    def has_vote(self, kind: VoteKind) -> bool:
        """Whether a vote of the given kind is known."""
        if kind is VoteKind.PREVOTE:
            return self.has_prevote
        return self.has_precommit

    def mark_explicit(self, kind: VoteKind) -> None:
        """Set the explicit flag for a vote kind."""
        if kind is VoteKind.PREVOTE:
            self.prevoted = True
        else:
            self.precommitted = True

    def mark_implicit(self, kind: VoteKind, pointer: BlockNumber) -> None:
        """Set the implicit flag for a vote kind and point at its cause."""
        if kind is VoteKind.PREVOTE:
            self.implicit_prevoted = True
        else:
            self.implicit_precommitted = True
        self.implicit_pointer = pointer
