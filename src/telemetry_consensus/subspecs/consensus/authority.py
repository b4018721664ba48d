"""Authority set tracking and the cache resets it triggers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from telemetry_consensus.types import Address, AuthoritySetId

from .cache import ConsensusCache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthoritySetTracker:
    """
    Holds the current authority set and discards votes from older sets.

    Votes only mean something relative to the set of authorities that cast
    them. When the set changes, the whole vote matrix is dropped and the
    visualization starts over. Nothing is carried across the boundary.
    """

    cache: ConsensusCache
    """Cache to reset on a set change."""

    authority_set_id: AuthoritySetId | None = None
    """Id of the current set, or None before the first set is known."""

    authorities: list[Address] = field(default_factory=list)
    """Ordered members of the current set."""

    display_loading_screen: bool = True
    """Whether the dashboard should still show its loading screen."""

    def on_authority_set(
        self,
        set_id: AuthoritySetId,
        authorities: list[Address],
    ) -> bool:
        """
        Apply an authority set announcement.

        The first set ever seen starts the loading screen, since no votes
        have arrived yet. A later change restarts the visualization directly.

        Returns:
            True if the set changed and the cache was reset.
        """
        if set_id == self.authority_set_id:
            return False

        first = self.authority_set_id is None
        logger.info(
            "Authority set changed from %s to %s (%d authorities), dropping %d cached heights",
            self.authority_set_id,
            set_id,
            len(authorities),
            len(self.cache),
        )

        self.cache.reset()
        self.authority_set_id = set_id
        self.authorities = list(authorities)
        self.display_loading_screen = first
        return True

    def forget(self) -> None:
        """Return to the unsubscribed state: no set, no votes, loading screen on."""
        self.cache.reset()
        self.authority_set_id = None
        self.authorities = []
        self.display_loading_screen = True
