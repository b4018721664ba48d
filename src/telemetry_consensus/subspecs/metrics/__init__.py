"""
Metrics module for observability.

Provides counters and gauges for tracking how the vote cache evolves.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    authority_set_resets,
    backfilled_cells,
    cached_heights,
    finalizations_recorded,
    generate_metrics,
    stale_events,
    votes_recorded,
)

__all__ = [
    "REGISTRY",
    "authority_set_resets",
    "backfilled_cells",
    "cached_heights",
    "finalizations_recorded",
    "generate_metrics",
    "stale_events",
    "votes_recorded",
]
