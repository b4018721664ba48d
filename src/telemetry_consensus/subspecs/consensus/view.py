"""The votes every reporter has seen for a single block height."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from telemetry_consensus.types import Address

from .vote import VoteRecord


@dataclass(slots=True)
class ConsensusView:
    """
    Two-level map from reporter to voter to vote record.

    Reporters are the telemetry nodes relaying what they observed.
    Voters are the authorities whose votes were observed.

    Cells are created lazily. A missing (reporter, voter) pair means nothing
    has been observed yet and reads as an empty record.
    """

    reporters: dict[Address, dict[Address, VoteRecord]] = field(default_factory=dict)
    """Reporter address -> voter address -> record."""

    def get(self, reporter: Address, voter: Address) -> VoteRecord:
        """
        Read a cell without creating it.

        Returns:
            The stored record, or a fresh empty record if absent.
        """
        record = self.reporters.get(reporter, {}).get(voter)
        return record if record is not None else VoteRecord()

    def get_or_create(self, reporter: Address, voter: Address) -> VoteRecord:
        """Return the live cell for the pair, creating empty entries on the way."""
        voters = self.reporters.setdefault(reporter, {})
        record = voters.get(voter)
        if record is None:
            record = voters[voter] = VoteRecord()
        return record

    def __contains__(self, pair: tuple[Address, Address]) -> bool:
        """Check if a (reporter, voter) cell exists."""
        reporter, voter = pair
        return voter in self.reporters.get(reporter, {})

    def cells(self) -> Iterator[tuple[Address, Address, VoteRecord]]:
        """Iterate over every stored (reporter, voter, record) triple."""
        for reporter, voters in self.reporters.items():
            for voter, record in voters.items():
                yield reporter, voter, record
