"""Tests for per-height consensus views."""

from __future__ import annotations

from telemetry_consensus.subspecs.consensus import ConsensusView, VoteRecord
from tests.telemetry_consensus.helpers import OTHER_REPORTER, OTHER_VOTER, REPORTER, VOTER


class TestConsensusView:
    """Tests for ConsensusView lookups."""

    def test_empty_view(self) -> None:
        """A new view holds no cells."""
        view = ConsensusView()

        assert view.reporters == {}
        assert list(view.cells()) == []

    def test_get_missing_returns_empty_record(self) -> None:
        """Reading a missing cell yields an empty record without creating it."""
        view = ConsensusView()

        assert view.get(REPORTER, VOTER) == VoteRecord()
        assert (REPORTER, VOTER) not in view
        assert view.reporters == {}

    def test_get_or_create_creates_nested_entries(self) -> None:
        """get_or_create builds the reporter and voter entries."""
        view = ConsensusView()

        record = view.get_or_create(REPORTER, VOTER)

        assert (REPORTER, VOTER) in view
        assert view.reporters[REPORTER][VOTER] is record

    def test_get_or_create_returns_same_record(self) -> None:
        """Repeated calls return the same live record."""
        view = ConsensusView()

        first = view.get_or_create(REPORTER, VOTER)
        first.prevoted = True
        second = view.get_or_create(REPORTER, VOTER)

        assert second is first
        assert view.get(REPORTER, VOTER).prevoted

    def test_cells_are_independent(self) -> None:
        """Cells for different pairs never share state."""
        view = ConsensusView()

        view.get_or_create(REPORTER, VOTER).precommitted = True
        other = view.get_or_create(REPORTER, OTHER_VOTER)
        third = view.get_or_create(OTHER_REPORTER, VOTER)

        assert not other.precommitted
        assert not third.precommitted

    def test_cells_iterates_all_pairs(self) -> None:
        """cells() yields every stored triple."""
        view = ConsensusView()
        view.get_or_create(REPORTER, VOTER)
        view.get_or_create(REPORTER, OTHER_VOTER)
        view.get_or_create(OTHER_REPORTER, VOTER)

        pairs = {(reporter, voter) for reporter, voter, _ in view.cells()}

        assert pairs == {(REPORTER, VOTER), (REPORTER, OTHER_VOTER), (OTHER_REPORTER, VOTER)}
