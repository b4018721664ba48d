"""
GRANDPA finality tracking for the telemetry dashboard.

What Is Tracked?
----------------
Validators on a GRANDPA chain vote in two rounds, prevote and precommit, and
eventually finalize blocks. Telemetry nodes ("reporters") relay every vote
they observe from other validators ("voters"). The dashboard draws a matrix
of (height, reporter, voter) cells showing who saw what.

Implicit Votes
--------------
A vote on a block is a vote on all of its ancestors. Reporters only relay the
explicit votes, so the tracker infers the rest:

- A vote seen at height H marks cached heights below H as implicitly voted
- A finalization seen at height H marks cached heights below H as implicitly
  finalized, and extrapolates the prevote and precommit it requires

How It Works
------------
- The ConsensusCache holds one ConsensusView per referenced height
- Recorders set explicit flags, then run backfill downward
- Backfill stops at the first cell that already carries the vote
- An authority set change drops the whole cache
"""

from __future__ import annotations

__all__ = [
    # Facade
    "FinalityTracker",
    # Data model
    "ConsensusCache",
    "ConsensusView",
    "VoteKind",
    "VoteRecord",
    # Components
    "AuthoritySetTracker",
    "BackfillEngine",
    "FinalizationRecorder",
    "VoteRecorder",
    # Snapshots
    "ConsensusSnapshot",
    "VoteDetail",
    # Configuration
    "TrackerConfig",
    "MAX_CACHED_HEIGHTS",
    "STALE_BLOCK_WINDOW",
]

from .authority import AuthoritySetTracker
from .backfill import BackfillEngine
from .cache import ConsensusCache
from .config import MAX_CACHED_HEIGHTS, STALE_BLOCK_WINDOW, TrackerConfig
from .recorders import FinalizationRecorder, VoteRecorder
from .snapshot import ConsensusSnapshot, VoteDetail
from .tracker import FinalityTracker
from .view import ConsensusView
from .vote import VoteKind, VoteRecord
