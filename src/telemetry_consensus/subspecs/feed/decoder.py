"""
Feed frame decoder.

Wire Format
-----------
The telemetry server batches messages into frames. A frame is a JSON array
of alternating action codes and payloads::

    [0x01, [1052, 1617000000000, null], 0x11, ["5Gr...", "1050", "0xab..", "5Ft..."]]

Only payloads of actions the tracker consumes are validated; everything else
is passed through as an IgnoredEvent. Block numbers may be encoded either as
JSON numbers or as decimal strings.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from telemetry_consensus.types import (
    Address,
    AuthoritySetId,
    BlockHash,
    BlockNumber,
    FeedDecodeError,
    UnknownActionError,
)

from .actions import FeedAction
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

_VOTE_PAYLOAD = TypeAdapter(tuple[Address, BlockNumber, BlockHash, Address])
"""[reporter, height, hash, voter]"""

_FINALIZED_PAYLOAD = TypeAdapter(tuple[Address, BlockNumber, BlockHash])
"""[reporter, height, hash]"""

_AUTHORITY_SET_PAYLOAD = TypeAdapter(tuple[AuthoritySetId, list[Address]])
"""[set_id, authorities], followed by fields the tracker does not use."""

_BEST_BLOCK_PAYLOAD = TypeAdapter(BlockNumber)
"""Height, the first element of [height, timestamp, average_block_time]."""

_CHAIN_LABEL = TypeAdapter(str)
"""Chain label for subscription bookkeeping."""


def _validate(adapter: TypeAdapter[Any], payload: Any, action: FeedAction, index: int) -> Any:
    """Validate a payload, translating pydantic errors into feed errors."""
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "payload"
        raise FeedDecodeError(
            f"invalid {action.name} payload at {location}: {error['msg']}",
            index=index,
        ) from e


def _leading(payload: Any, count: int, action: FeedAction, index: int) -> list[Any]:
    """Return the first `count` elements of a list payload."""
    if not isinstance(payload, list) or len(payload) < count:
        raise FeedDecodeError(
            f"{action.name} payload must be a list of at least {count} elements",
            index=index,
        )
    return payload[:count]


def decode_message(action_code: Any, payload: Any, index: int = 0) -> FeedEvent:
    """
    Decode a single (action, payload) pair.

    Args:
        action_code: Raw action code from the frame.
        payload: Raw JSON payload.
        index: Position of the message within its frame, for error reports.

    Raises:
        UnknownActionError: If the action code is not defined.
        FeedDecodeError: If the payload does not have the expected shape.
    """
    if not isinstance(action_code, int) or isinstance(action_code, bool):
        raise UnknownActionError(action_code, index=index)
    try:
        action = FeedAction(action_code)
    except ValueError as e:
        raise UnknownActionError(action_code, index=index) from e

    match action:
        case FeedAction.AFG_RECEIVED_PREVOTE:
            reporter, height, block_hash, voter = _validate(_VOTE_PAYLOAD, payload, action, index)
            return PrevoteEvent(reporter, height, block_hash, voter)

        case FeedAction.AFG_RECEIVED_PRECOMMIT:
            reporter, height, block_hash, voter = _validate(_VOTE_PAYLOAD, payload, action, index)
            return PrecommitEvent(reporter, height, block_hash, voter)

        case FeedAction.AFG_FINALIZED:
            reporter, height, block_hash = _validate(_FINALIZED_PAYLOAD, payload, action, index)
            return FinalizedEvent(reporter, height, block_hash)

        case FeedAction.AFG_AUTHORITY_SET:
            set_id, authorities = _validate(
                _AUTHORITY_SET_PAYLOAD, _leading(payload, 2, action, index), action, index
            )
            return AuthoritySetEvent(set_id, tuple(authorities))

        case FeedAction.BEST_BLOCK:
            (height,) = _leading(payload, 1, action, index)
            return BestBlockEvent(_validate(_BEST_BLOCK_PAYLOAD, height, action, index))

        case FeedAction.SUBSCRIBED_TO:
            return SubscribedEvent(_validate(_CHAIN_LABEL, payload, action, index))

        case FeedAction.REMOVED_CHAIN:
            return ChainRemovedEvent(_validate(_CHAIN_LABEL, payload, action, index))

        case _:
            return IgnoredEvent(action, payload)


def decode_frame(data: str | bytes) -> list[FeedEvent]:
    """
    Decode a feed frame into events, preserving message order.

    Args:
        data: Raw JSON text of the frame.

    Returns:
        One event per (action, payload) pair.

    Raises:
        FeedDecodeError: If the frame is not valid UTF-8 JSON, not a non-empty
            array of even length, or contains an invalid message.
    """
    try:
        messages = json.loads(data)
    except json.JSONDecodeError as e:
        raise FeedDecodeError(f"invalid JSON: {e.msg}") from e
    except UnicodeDecodeError as e:
        raise FeedDecodeError(f"invalid UTF-8 at byte {e.start}: {e.reason}") from e

    if not isinstance(messages, list) or not messages or len(messages) % 2 != 0:
        raise FeedDecodeError("frame must be a non-empty array of action/payload pairs")

    events = [
        decode_message(messages[i], messages[i + 1], index=i // 2)
        for i in range(0, len(messages), 2)
    ]
    logger.debug("Decoded feed frame with %d messages", len(events))
    return events
