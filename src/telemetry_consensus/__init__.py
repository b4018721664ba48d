"""GRANDPA finality tracking for a blockchain telemetry dashboard."""

from .subspecs.consensus import ConsensusSnapshot, FinalityTracker, TrackerConfig
from .subspecs.feed import FeedDispatcher

__all__ = [
    "ConsensusSnapshot",
    "FeedDispatcher",
    "FinalityTracker",
    "TrackerConfig",
]
