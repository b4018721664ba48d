"""Reusable type definitions for the finality tracker."""

from .base import CamelModel, StrictBaseModel
from .exceptions import (
    FeedDecodeError,
    FeedError,
    TrackerError,
    TrackerValueError,
    UnknownActionError,
)
from .primitives import Address, AuthoritySetId, BlockHash, BlockNumber

__all__ = [
    # Core types
    "Address",
    "AuthoritySetId",
    "BlockHash",
    "BlockNumber",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "TrackerError",
    "TrackerValueError",
    "FeedError",
    "FeedDecodeError",
    "UnknownActionError",
]
