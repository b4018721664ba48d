"""
Metric registry using prometheus_client.

Provides pre-defined metrics for the finality tracker.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

# Create a dedicated registry for tracker metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Feed Events
# -----------------------------------------------------------------------------

votes_recorded = Counter(
    "afg_votes_recorded_total",
    "Explicit votes applied to the cache",
    ["kind"],
    registry=REGISTRY,
)

finalizations_recorded = Counter(
    "afg_finalizations_recorded_total",
    "Explicit finalizations applied to the cache",
    registry=REGISTRY,
)

stale_events = Counter(
    "afg_stale_events_total",
    "Events ignored for lagging too far behind the best block",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Cache
# -----------------------------------------------------------------------------

backfilled_cells = Counter(
    "afg_backfilled_cells_total",
    "Cells that received an implicit vote or finalization",
    ["kind"],
    registry=REGISTRY,
)

authority_set_resets = Counter(
    "afg_authority_set_resets_total",
    "Cache resets caused by authority set changes",
    registry=REGISTRY,
)

cached_heights = Gauge(
    "afg_cached_heights",
    "Block heights currently held in the vote cache",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
