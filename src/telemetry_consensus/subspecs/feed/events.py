"""
Feed Event Types.

Each feed frame decodes into a list of the events below. The dispatcher
consumes them in order and routes them to the finality tracker.

::

    Feed frame (JSON)
           |
    decode_frame
           |
    FeedDispatcher (pattern matching dispatch)
           |
           +-- PrevoteEvent / PrecommitEvent  --> FinalityTracker.prevote / precommit
           +-- FinalizedEvent                 --> FinalityTracker.finalized
           +-- AuthoritySetEvent              --> FinalityTracker.authority_set
           +-- BestBlockEvent                 --> FinalityTracker.best_block
           +-- Subscribed / ChainRemovedEvent --> FinalityTracker.reset
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from telemetry_consensus.types import Address, AuthoritySetId, BlockHash, BlockNumber

from .actions import FeedAction


@dataclass(frozen=True, slots=True)
class PrevoteEvent:
    """A reporter observed a prevote."""

    reporter: Address
    """Node that relayed the observation."""

    height: BlockNumber
    """Height of the block voted for."""

    block_hash: BlockHash
    """Hash of the block voted for."""

    voter: Address
    """Authority that cast the vote."""


@dataclass(frozen=True, slots=True)
class PrecommitEvent:
    """A reporter observed a precommit."""

    reporter: Address
    """Node that relayed the observation."""

    height: BlockNumber
    """Height of the block voted for."""

    block_hash: BlockHash
    """Hash of the block voted for."""

    voter: Address
    """Authority that cast the vote."""


@dataclass(frozen=True, slots=True)
class FinalizedEvent:
    """A reporter finalized a block."""

    reporter: Address
    """Node that finalized the block."""

    height: BlockNumber
    """Height of the finalized block."""

    block_hash: BlockHash
    """Hash of the finalized block."""


@dataclass(frozen=True, slots=True)
class AuthoritySetEvent:
    """The authority set was announced or changed."""

    set_id: AuthoritySetId
    """Version of the set."""

    authorities: tuple[Address, ...]
    """Ordered set members."""


@dataclass(frozen=True, slots=True)
class BestBlockEvent:
    """The chain's best block advanced."""

    height: BlockNumber
    """New best block height."""


@dataclass(frozen=True, slots=True)
class SubscribedEvent:
    """The feed switched its subscription to a chain."""

    chain: str
    """Label of the chain now subscribed to."""


@dataclass(frozen=True, slots=True)
class ChainRemovedEvent:
    """A chain disappeared from the feed."""

    chain: str
    """Label of the removed chain."""


@dataclass(frozen=True, slots=True)
class IgnoredEvent:
    """A well-formed message the tracker has no use for."""

    action: FeedAction
    """Action code of the message."""

    payload: Any
    """Raw decoded payload."""


FeedEvent = (
    PrevoteEvent
    | PrecommitEvent
    | FinalizedEvent
    | AuthoritySetEvent
    | BestBlockEvent
    | SubscribedEvent
    | ChainRemovedEvent
    | IgnoredEvent
)
"""Union of all events produced by the decoder."""
