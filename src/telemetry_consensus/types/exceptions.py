"""Exception hierarchy for the finality tracker."""

from __future__ import annotations

from typing import Any


class TrackerError(Exception):
    """
    Base exception for all tracker-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class TrackerValueError(TrackerError):
    """
    Raised when a primitive value is invalid for its tracker type.

    Attributes:
        type_name: The tracker type that rejected the value.
        value: The rejected value (may be truncated for display).
        detail: Description of what went wrong.
    """

    def __init__(self, type_name: str, value: Any, *, detail: str) -> None:
        self.type_name = type_name
        self.value = value
        self.detail = detail

        value_repr = repr(value)
        if len(value_repr) > 50:
            value_repr = value_repr[:47] + "..."

        super().__init__(f"Invalid {type_name} {value_repr}: {detail}")


class FeedError(TrackerError):
    """Base class for errors raised while reading the telemetry feed."""


class FeedDecodeError(FeedError):
    """
    Raised when a feed frame or one of its payloads cannot be decoded.

    Attributes:
        detail: Description of what went wrong.
        index: Position of the offending message within the frame (if known).
    """

    def __init__(self, detail: str, *, index: int | None = None) -> None:
        self.detail = detail
        self.index = index

        msg = f"Failed to decode feed frame: {detail}"
        if index is not None:
            msg = f"{msg} (at message {index})"

        super().__init__(msg)


class UnknownActionError(FeedDecodeError):
    """
    Raised when a frame carries an action code the feed does not define.

    Attributes:
        action: The unrecognized action code.
    """

    def __init__(self, action: Any, *, index: int | None = None) -> None:
        self.action = action
        super().__init__(f"unknown action {action!r}", index=index)
