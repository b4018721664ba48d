"""
Shared pytest fixtures for all finality tracker tests.

Provides core fixtures used across multiple test modules.
Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

import pytest

from telemetry_consensus.subspecs.consensus import (
    BackfillEngine,
    ConsensusCache,
    FinalityTracker,
    TrackerConfig,
)
from telemetry_consensus.subspecs.feed import FeedDispatcher
from tests.telemetry_consensus.helpers import make_cache


@pytest.fixture
def cache() -> ConsensusCache:
    """Cache with empty views at heights 98, 99 and 100."""
    return make_cache(98, 99, 100)


@pytest.fixture
def engine(cache: ConsensusCache) -> BackfillEngine:
    """Backfill engine over the shared cache."""
    return BackfillEngine(cache)


@pytest.fixture
def unbounded_config() -> TrackerConfig:
    """Configuration without retention or staleness limits."""
    return TrackerConfig(max_heights=None, stale_window=None)


@pytest.fixture
def tracker(unbounded_config: TrackerConfig) -> FinalityTracker:
    """Tracker without retention or staleness limits."""
    return FinalityTracker(unbounded_config)


@pytest.fixture
def dispatcher(tracker: FinalityTracker) -> FeedDispatcher:
    """Dispatcher routing into the unbounded tracker."""
    return FeedDispatcher(tracker)
