"""
Finality tracker replay CLI.

Replay recorded telemetry feed frames through a finality tracker and print the
resulting vote matrix.

Usage::

    python -m telemetry_consensus frames.jsonl
    python -m telemetry_consensus frames.jsonl --config tracker.yaml --json

Options:
    FRAMES        File with one JSON feed frame per line (required)
    --config      Path to tracker YAML configuration
    --json        Print the final snapshot as camelCase JSON
    -v            Enable debug logging
    --no-color    Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from telemetry_consensus.subspecs.consensus import (
    ConsensusSnapshot,
    FinalityTracker,
    TrackerConfig,
)
from telemetry_consensus.subspecs.feed import FeedDispatcher
from telemetry_consensus.types import FeedError

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the CLI with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    # Logs go to stderr so that stdout carries only the report.
    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def replay(path: Path, dispatcher: FeedDispatcher) -> int:
    """
    Feed every frame of a recording through a dispatcher.

    Lines are handed to the decoder as raw bytes, so encoding errors surface as
    feed errors. Blank lines are skipped.

    Returns:
        Number of events dispatched.

    Raises:
        FeedDecodeError: If a frame cannot be decoded. Frames before it
            have already been applied.
        OSError: If the recording cannot be read.
    """
    dispatched = 0
    with path.open("rb") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                dispatched += dispatcher.dispatch_frame(line)
            except FeedError:
                logger.error("Frame on line %d of %s is malformed", line_number, path)
                raise
    return dispatched


def format_summary(snapshot: ConsensusSnapshot) -> str:
    """
    Render a snapshot as a plain-text table, one line per height.

    Each line counts the (reporter, voter) cells that carry a prevote, a
    precommit, or a finalization, explicit or implied.
    """
    lines = [
        f"authority set: {snapshot.authority_set_id} ({len(snapshot.authorities)} authorities)",
        f"{'height':>10} {'prevotes':>9} {'precommits':>11} {'finalized':>10}",
    ]
    for height, view in snapshot.items:
        details = [detail for voters in view.values() for detail in voters.values()]
        prevotes = sum(1 for d in details if d.prevoted or d.implicit_prevoted)
        precommits = sum(1 for d in details if d.precommitted or d.implicit_precommitted)
        finalized = sum(1 for d in details if d.finalized or d.implicit_finalized)
        lines.append(f"{height:>10} {prevotes:>9} {precommits:>11} {finalized:>10}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Replay telemetry feed frames through a finality tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "frames",
        type=Path,
        help="File with one JSON feed frame per line",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to tracker YAML configuration",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final snapshot as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        config = TrackerConfig.from_yaml_file(args.config) if args.config else TrackerConfig()
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.error("Failed to load configuration from %s: %s", args.config, e)
        return 1

    dispatcher = FeedDispatcher(FinalityTracker(config))

    try:
        dispatched = replay(args.frames, dispatcher)
    except FeedError as e:
        logger.error("Replay aborted: %s", e)
        return 1
    except OSError as e:
        logger.error("Failed to read frames from %s: %s", args.frames, e)
        return 1

    snapshot = dispatcher.tracker.snapshot()
    logger.info(
        "Replayed %d events into %d cached heights", dispatched, len(snapshot.items)
    )

    if args.json:
        print(snapshot.model_dump_json(by_alias=True, indent=2))
    else:
        print(format_summary(snapshot))
    return 0


if __name__ == "__main__":
    sys.exit(main())
