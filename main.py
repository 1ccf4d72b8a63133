"""CLI entrypoint: replay key presses against a shared crossword session."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from crossword_sync.core.exceptions import CrosswordError
from crossword_sync.engine.navigation import Click, Intent
from crossword_sync.engine.relay import LocalRelay
from crossword_sync.engine.replication import Replica
from crossword_sync.io.keys import intent_for_key
from crossword_sync.io.puzzle_source import PuzzleSourceConfig, load_puzzle
from crossword_sync.io.wire import action_to_jsonable, state_to_jsonable
from crossword_sync.utils.logger import configure_logging
from crossword_sync.utils.pretty import describe_cursor, pretty_print_board


def parse_step(token: str) -> Optional[Intent]:
    """Turn ``click:ROW,COL`` or a key name (``ArrowRight``, ``a``...) into an intent."""

    if token.startswith("click:"):
        row, _, col = token[len("click:"):].partition(",")
        return Click(row=int(row), col=int(col))
    return intent_for_key(token)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Replay navigation keys against a shared crossword puzzle",
    )
    parser.add_argument(
        "--puzzle",
        type=str,
        default=None,
        help="Puzzle JSON path or http(s) URL (defaults to $CROSSWORD_PUZZLE_URL)",
    )
    parser.add_argument(
        "--keys",
        nargs="*",
        default=[],
        metavar="STEP",
        help="Steps to replay: key names (ArrowRight, Backspace, w, ...) or click:ROW,COL",
    )
    parser.add_argument("--player-id", type=str, default=None, help="Player id (defaults to a UUID)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="HTTP timeout in seconds when fetching the puzzle",
    )
    parser.add_argument("--trace", action="store_true", help="Print the cursor after every step")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    steps: List[Intent] = []
    for token in args.keys:
        try:
            intent = parse_step(token)
        except ValueError:
            parser.error(f"invalid click step {token!r}; expected click:ROW,COL")
        if intent is None:
            parser.error(f"unknown key {token!r}")
        steps.append(intent)

    try:
        puzzle = load_puzzle(args.puzzle, PuzzleSourceConfig(timeout_seconds=args.timeout))
        relay = LocalRelay(puzzle)
    except CrosswordError as exc:
        parser.exit(2, f"error: {exc}\n")

    replica = Replica(player_id=args.player_id)
    relay.connect(replica)

    for token, intent in zip(args.keys, steps):
        replica.dispatch(intent)
        if args.trace:
            print(f"{token:>12} -> {describe_cursor(replica.own_cursor)}")

    if replica.layout is None:
        parser.exit(2, "error: relay did not deliver a puzzle snapshot\n")
    pretty_print_board(replica.layout, replica.state, replica.player_id)

    if args.output:
        payload = {
            "playerId": replica.player_id,
            "state": state_to_jsonable(replica.state),
            "actions": [action_to_jsonable(action) for action in relay.log],
        }
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
