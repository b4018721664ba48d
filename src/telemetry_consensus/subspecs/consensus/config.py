"""
Tracker configuration.

Operational limits for the vote cache, loadable from YAML files:

    MAX_HEIGHTS: 50
    STALE_WINDOW: 50
    PRECOMMIT_IMPLIES_PREVOTE: false
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import Field

from telemetry_consensus.types import StrictBaseModel

MAX_CACHED_HEIGHTS: Final[int] = 50
"""Number of block heights kept in the vote cache."""

STALE_BLOCK_WINDOW: Final[int] = 50
"""Events more than this many blocks behind the best block are ignored."""


class TrackerConfig(StrictBaseModel):
    """
    Limits and extrapolation rules for a finality tracker.

    YAML files spell the fields in UPPERCASE.
    Pydantic aliases map them to snake_case Python attributes.
    """

    max_heights: Annotated[int, Field(ge=1)] | None = Field(
        default=MAX_CACHED_HEIGHTS, alias="MAX_HEIGHTS"
    )
    """
    Upper bound on the number of cached heights.

    After every update the lowest heights beyond this bound are dropped.
    None keeps every height ever referenced.
    """

    stale_window: Annotated[int, Field(ge=0)] | None = Field(
        default=STALE_BLOCK_WINDOW, alias="STALE_WINDOW"
    )
    """
    How far behind the best block an event may lag before it is ignored.

    None disables the filter.
    """

    precommit_implies_prevote: bool = Field(default=False, alias="PRECOMMIT_IMPLIES_PREVOTE")
    """
    Whether backfilling a precommit also marks the implicit prevote.

    A precommit cannot be cast without a prevote on the same chain, so the
    dashboard may display both even if the prevote message was missed.
    """

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> TrackerConfig:
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, content: str) -> TrackerConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(content)
        return cls.model_validate(data or {})
