#!/usr/bin/env python3
"""Replay a recorded event log through the science game core.

Reads a JSON Lines file (one event envelope per line), folds every event
through the dispatcher from a fresh game, and prints the final state and
settlement. Running it twice on the same inputs must print identical
output; --check-determinism does exactly that and compares the results.

Usage:
    # Replay with the default pool directory
    python scripts/replay_events.py events.jsonl --pool basic-science --seed 42

    # Stop at the first rejected event instead of skipping it
    python scripts/replay_events.py events.jsonl --pool basic-science --strict

    # Override game rules
    python scripts/replay_events.py events.jsonl --pool basic-science \\
        --min-players 3 --round-count 4 --payout-schedule 50,30,20

    # Show the pools available in a directory
    python scripts/replay_events.py --list-pools --questions-path questions/
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sciencegame.config import GameConfig, load_config_from_env
from sciencegame.engine import Dispatcher, GameStateMachine, TransitionError
from sciencegame.models import GameState
from sciencegame.storage import get_question_repository


def load_events(path: Path) -> list[dict]:
    """Load one JSON event envelope per non-blank line."""
    events = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                events.append(json.loads(line))
    return events


def build_config(args: argparse.Namespace) -> GameConfig:
    """Environment config with command-line overrides applied."""
    config = load_config_from_env()
    overrides = {}
    if args.min_players is not None:
        overrides["min_players"] = args.min_players
    if args.round_count is not None:
        overrides["round_count"] = args.round_count
    if args.eliminate_on_miss:
        overrides["eliminate_on_miss"] = True
    if args.payout_schedule:
        overrides["payout_schedule"] = tuple(int(w) for w in args.payout_schedule.split(","))
    if not overrides:
        return config
    return GameConfig(**{**config.model_dump(), **overrides})


def replay(dispatcher: Dispatcher, seed: str, events: list[dict], strict: bool) -> tuple[GameState, list[str]]:
    """Fold events through the dispatcher, collecting rejections."""
    state = dispatcher.machine.new_game(seed)
    rejections = []
    for index, event in enumerate(events):
        try:
            state = dispatcher.dispatch(state, event).state
        except TransitionError as e:
            if strict:
                raise
            rejections.append(f"event {index} ({event.get('type')}): {e.code}: {e}")
    return state, rejections


def main() -> int:
    parser = argparse.ArgumentParser(description="Replay a science game event log")
    parser.add_argument("events", type=Path, nargs="?", help="JSON Lines event log")
    parser.add_argument("--pool", help="Question pool ID")
    parser.add_argument("--list-pools", action="store_true", help="List available pools and exit")
    parser.add_argument("--questions-path", default=None, help="Question pools directory")
    parser.add_argument("--seed", default="", help="Seed distributed by the substrate")
    parser.add_argument("--min-players", type=int, default=None)
    parser.add_argument("--round-count", type=int, default=None)
    parser.add_argument("--eliminate-on-miss", action="store_true")
    parser.add_argument("--payout-schedule", default=None, help="Comma-separated payout weights")
    parser.add_argument("--strict", action="store_true", help="Stop at the first rejected event")
    parser.add_argument("--check-determinism", action="store_true", help="Replay twice and compare")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    repo = get_question_repository(args.questions_path)
    if args.list_pools:
        for pool in repo.list_pools():
            print(f"{pool['id']}\t{pool['name']}\t{pool['question_count']} questions")
        return 0
    if args.events is None or args.pool is None:
        parser.error("events and --pool are required unless --list-pools is given")

    try:
        bank = repo.load_bank(args.pool)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    dispatcher = Dispatcher(GameStateMachine(bank, build_config(args)))
    events = load_events(args.events)

    try:
        state, rejections = replay(dispatcher, args.seed, events, args.strict)
    except TransitionError as e:
        print(f"Rejected: {e.code}: {e}", file=sys.stderr)
        return 1

    if args.check_determinism:
        second, _ = replay(dispatcher, args.seed, events, args.strict)
        if second.to_json() != state.to_json():
            print("Determinism check FAILED: replays diverged", file=sys.stderr)
            return 2
        print("Determinism check: PASS", file=sys.stderr)

    for rejection in rejections:
        print(f"Rejected {rejection}", file=sys.stderr)

    print(state.to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
