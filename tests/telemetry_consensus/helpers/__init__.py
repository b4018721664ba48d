"""Test helpers for finality tracker unit tests."""

from __future__ import annotations

import json
from typing import Any

from telemetry_consensus.subspecs.consensus import ConsensusCache
from telemetry_consensus.subspecs.feed import FeedAction
from telemetry_consensus.types import Address, BlockHash, BlockNumber

REPORTER = Address("5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY")
"""Alice, relaying what she sees."""

VOTER = Address("5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty")
"""Bob, casting votes."""

OTHER_VOTER = Address("5FLSigC9HGRKVhB9FiEo4Y3koPsNmBmLJbpXg2mp1hXcS59Y")
"""Charlie, casting votes."""

OTHER_REPORTER = Address("5DAAnrj7VHTznn2AWBemMuyBwZWs6FNFjdyVXUeYum3PTXFy")
"""Dave, relaying what he sees."""

BLOCK_HASH = BlockHash("0x" + "ab" * 32)
"""Arbitrary block hash."""


def make_cache(*heights: int) -> ConsensusCache:
    """Create a cache holding empty views at the given heights."""
    cache = ConsensusCache()
    for height in heights:
        cache.get_or_create_view(BlockNumber(height))
    return cache


def make_frame(*messages: tuple[FeedAction | int, Any]) -> str:
    """Encode (action, payload) pairs as a feed frame."""
    flat: list[Any] = []
    for action, payload in messages:
        flat.extend([int(action), payload])
    return json.dumps(flat)


def vote_payload(height: int | str, reporter: str = REPORTER, voter: str = VOTER) -> list[Any]:
    """Payload of a prevote or precommit message."""
    return [reporter, height, BLOCK_HASH, voter]


def finalized_payload(height: int | str, reporter: str = REPORTER) -> list[Any]:
    """Payload of a finalization message."""
    return [reporter, height, BLOCK_HASH]


def authority_set_payload(set_id: int, authorities: list[str]) -> list[Any]:
    """Payload of an authority set message, including the trailing fields."""
    return [set_id, authorities, REPORTER, 1, BLOCK_HASH]
