"""Tests for routing feed events to the tracker."""

from __future__ import annotations

import pytest

from telemetry_consensus.subspecs.consensus import FinalityTracker
from telemetry_consensus.subspecs.feed import (
    ChainRemovedEvent,
    FeedAction,
    FeedDispatcher,
    IgnoredEvent,
    SubscribedEvent,
)
from telemetry_consensus.types import FeedDecodeError
from tests.telemetry_consensus.helpers import (
    OTHER_VOTER,
    REPORTER,
    VOTER,
    authority_set_payload,
    finalized_payload,
    make_frame,
    vote_payload,
)


class TestDispatchFrame:
    """Tests for applying whole frames."""

    def test_routes_consensus_events(self, dispatcher: FeedDispatcher) -> None:
        """Every consensus message reaches the matching tracker handler."""
        frame = make_frame(
            (FeedAction.AFG_AUTHORITY_SET, authority_set_payload(1, [VOTER, OTHER_VOTER])),
            (FeedAction.BEST_BLOCK, [100, 0, None]),
            (FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(98)),
            (FeedAction.AFG_RECEIVED_PRECOMMIT, vote_payload("100")),
            (FeedAction.AFG_FINALIZED, finalized_payload(99)),
            (FeedAction.NODE_STATS, [1, [2, 3]]),
        )

        dispatched = dispatcher.dispatch_frame(frame)

        assert dispatched == 6
        snapshot = dispatcher.tracker.snapshot()
        assert snapshot.authority_set_id == 1
        assert snapshot.best == 100
        assert snapshot.heights == [100, 99, 98]
        assert snapshot.get(98, REPORTER, VOTER).prevoted
        assert snapshot.get(98, REPORTER, VOTER).implicit_precommitted
        assert snapshot.get(100, REPORTER, VOTER).precommitted
        assert snapshot.get(99, REPORTER, REPORTER).finalized

    def test_malformed_frame_applies_nothing(self, dispatcher: FeedDispatcher) -> None:
        """A bad message anywhere in the frame leaves the tracker untouched."""
        frame = make_frame(
            (FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(10)),
            (FeedAction.AFG_RECEIVED_PREVOTE, vote_payload("ten")),
        )

        with pytest.raises(FeedDecodeError):
            dispatcher.dispatch_frame(frame)

        assert dispatcher.tracker.cache.is_empty

    def test_frames_apply_in_order(self, dispatcher: FeedDispatcher) -> None:
        """State accumulates across frames."""
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(5))))
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(7))))

        assert dispatcher.tracker.snapshot().heights == [7, 5]


class TestChainBookkeeping:
    """Tests for subscription changes."""

    def test_first_subscription_keeps_state(self, dispatcher: FeedDispatcher) -> None:
        """Subscribing for the first time does not reset anything."""
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(5))))

        dispatcher.dispatch(SubscribedEvent("Polkadot"))

        assert dispatcher.subscribed == "Polkadot"
        assert 5 in dispatcher.tracker.cache

    def test_switching_chains_resets(self, dispatcher: FeedDispatcher) -> None:
        """Votes from the previous chain are dropped on a switch."""
        dispatcher.dispatch(SubscribedEvent("Polkadot"))
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(5))))

        dispatcher.dispatch(SubscribedEvent("Kusama"))

        assert dispatcher.subscribed == "Kusama"
        assert dispatcher.tracker.cache.is_empty

    def test_resubscribing_same_chain_keeps_state(self, dispatcher: FeedDispatcher) -> None:
        """A repeated subscription to the same chain is harmless."""
        dispatcher.dispatch(SubscribedEvent("Polkadot"))
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(5))))

        dispatcher.dispatch(SubscribedEvent("Polkadot"))

        assert 5 in dispatcher.tracker.cache

    def test_removing_subscribed_chain_resets(self, dispatcher: FeedDispatcher) -> None:
        """Removal of the subscribed chain forgets everything."""
        dispatcher.dispatch(SubscribedEvent("Polkadot"))
        dispatcher.dispatch_frame(
            make_frame((FeedAction.AFG_AUTHORITY_SET, authority_set_payload(1, [VOTER])))
        )

        dispatcher.dispatch(ChainRemovedEvent("Polkadot"))

        assert dispatcher.subscribed is None
        assert dispatcher.tracker.authority_set_id is None
        assert dispatcher.tracker.display_loading_screen

    def test_removing_other_chain_is_ignored(self, dispatcher: FeedDispatcher) -> None:
        """Other chains coming and going do not matter."""
        dispatcher.dispatch(SubscribedEvent("Polkadot"))
        dispatcher.dispatch_frame(make_frame((FeedAction.AFG_RECEIVED_PREVOTE, vote_payload(5))))

        dispatcher.dispatch(ChainRemovedEvent("Kusama"))

        assert dispatcher.subscribed == "Polkadot"
        assert 5 in dispatcher.tracker.cache

    def test_ignored_event_changes_nothing(self, tracker: FinalityTracker) -> None:
        """Ignored events are only logged."""
        dispatcher = FeedDispatcher(tracker)

        dispatcher.dispatch(IgnoredEvent(FeedAction.PONG, "ping"))

        assert tracker.cache.is_empty
        assert tracker.display_loading_screen
