"""
Dispatcher routing decoded feed events to a finality tracker.

The dispatcher is the bridge between the transport and the tracker. It:

1. Decodes frames into events
2. Routes each event to the matching tracker handler, in arrival order
3. Resets the tracker when the subscribed chain goes away

It does not manage connections, and it does not buffer events: every call
returns only once the tracker has applied the whole frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from telemetry_consensus.subspecs.consensus import FinalityTracker

from .decoder import decode_frame
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

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FeedDispatcher:
    """Routes feed events for one subscribed chain to its tracker."""

    tracker: FinalityTracker
    """Tracker receiving consensus events."""

    subscribed: str | None = None
    """Label of the chain the feed is subscribed to."""

    def dispatch(self, event: FeedEvent) -> None:
        """
        Route a single event to its handler.

        Uses pattern matching for clean dispatch. Each event type
        maps to exactly one tracker call.
        """
        match event:
            case PrevoteEvent(reporter=reporter, height=height, block_hash=block_hash, voter=voter):
                self.tracker.prevote(reporter, height, block_hash, voter)

            case PrecommitEvent(
                reporter=reporter, height=height, block_hash=block_hash, voter=voter
            ):
                self.tracker.precommit(reporter, height, block_hash, voter)

            case FinalizedEvent(reporter=reporter, height=height, block_hash=block_hash):
                self.tracker.finalized(reporter, height, block_hash)

            case AuthoritySetEvent(set_id=set_id, authorities=authorities):
                self.tracker.authority_set(set_id, list(authorities))

            case BestBlockEvent(height=height):
                self.tracker.best_block(height)

            case SubscribedEvent(chain=chain):
                # Switching chains invalidates every vote seen so far.
                if self.subscribed is not None and chain != self.subscribed:
                    self.tracker.reset()
                self.subscribed = chain

            case ChainRemovedEvent(chain=chain):
                if chain == self.subscribed:
                    logger.info("Subscribed chain %s was removed", chain)
                    self.subscribed = None
                    self.tracker.reset()

            case IgnoredEvent(action=action):
                logger.debug("Skipping %s message", action.name)

    def dispatch_frame(self, data: str | bytes) -> int:
        """
        Decode a frame and dispatch every event in it.

        The whole frame is decoded before anything is applied, so a malformed
        frame leaves the tracker untouched.

        Returns:
            Number of events dispatched.

        Raises:
            FeedDecodeError: If the frame cannot be decoded.
        """
        events = decode_frame(data)
        for event in events:
            self.dispatch(event)
        return len(events)
