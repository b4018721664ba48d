"""Action codes of the telemetry feed wire format."""

from __future__ import annotations

from enum import IntEnum


class FeedAction(IntEnum):
    """
    Opcode preceding each payload in a feed frame.

    The feed multiplexes node list updates, chain bookkeeping and GRANDPA
    ("afg") events into one stream. Only a handful of them matter to the
    finality tracker, but all are listed so frames can be decoded in full.
    """

    FEED_VERSION = 0x00
    BEST_BLOCK = 0x01
    BEST_FINALIZED = 0x02
    ADDED_NODE = 0x03
    REMOVED_NODE = 0x04
    LOCATED_NODE = 0x05
    IMPORTED_BLOCK = 0x06
    FINALIZED_BLOCK = 0x07
    NODE_STATS = 0x08
    NODE_HARDWARE = 0x09
    TIME_SYNC = 0x0A
    ADDED_CHAIN = 0x0B
    REMOVED_CHAIN = 0x0C
    SUBSCRIBED_TO = 0x0D
    UNSUBSCRIBED_FROM = 0x0E
    PONG = 0x0F
    AFG_FINALIZED = 0x10
    AFG_RECEIVED_PREVOTE = 0x11
    AFG_RECEIVED_PRECOMMIT = 0x12
    AFG_AUTHORITY_SET = 0x13
    STALE_NODE = 0x14
    NODE_IO = 0x15
