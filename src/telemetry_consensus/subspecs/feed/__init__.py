"""
Telemetry feed decoding and dispatch.

The telemetry server pushes JSON frames of (action, payload) pairs to every
dashboard. This package turns those frames into typed events and routes the
consensus-related ones to a FinalityTracker.
"""

from __future__ import annotations

__all__ = [
    # Wire format
    "FeedAction",
    "decode_frame",
    "decode_message",
    # Events
    "AuthoritySetEvent",
    "BestBlockEvent",
    "ChainRemovedEvent",
    "FeedEvent",
    "FinalizedEvent",
    "IgnoredEvent",
    "PrecommitEvent",
    "PrevoteEvent",
    "SubscribedEvent",
    # Routing
    "FeedDispatcher",
]

from .actions import FeedAction
from .decoder import decode_frame, decode_message
from .dispatcher import FeedDispatcher
from .events import (
    AuthoritySetEvent,
    BestBlockEvent,
    ChainRemovedEvent,
    FeedEvent,
    FinalizedEvent,
    IgnoredEvent,
    PrecommitEvent,
    PrevoteEvent,
    SubscribedEvent,
)
