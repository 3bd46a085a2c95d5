#!/usr/bin/env python3
"""
Headless GridSnake driver.

Plays one game with scripted key presses (one key per tick, before the
tick fires) and prints a JSON summary. Useful for reproducing games with
a fixed seed and for dumping replays.

Usage:
    python backend/cli/play_game.py --seed 7 --keys ArrowUp - - ArrowLeft

Examples:
    # Key codes work too; '-' means no key for that tick
    python backend/cli/play_game.py --keys 38 - 37 --print-board

    # Play against the wall clock instead of stepping ticks manually
    python backend/cli/play_game.py --realtime --max-ticks 40

    # Keep a replay file
    python backend/cli/play_game.py --seed 1 --save-replay
"""

import os
import sys
import json
import time
import argparse
import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Union

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from services.config import SessionConfig, load_config  # noqa: E402
from services.replay import save_replay  # noqa: E402
from services.scheduler import ManualTickScheduler, ScheduleTickScheduler  # noqa: E402
from services.session import GameSession  # noqa: E402

logger = logging.getLogger(__name__)

NO_KEY = "-"
DEFAULT_MAX_TICKS = 1000

Key = Union[int, str]


def parse_keys(tokens: Sequence[str]) -> List[Optional[Key]]:
    """Turn CLI tokens into key identifiers: digits become key codes, '-' becomes None."""
    keys: List[Optional[Key]] = []
    for token in tokens:
        if token == NO_KEY:
            keys.append(None)
        elif token.isdigit():
            keys.append(int(token))
        else:
            keys.append(token)
    return keys


class ScriptedKeys:
    """Presses keys[n] right before tick n fires; each tick gets at most one key."""

    def __init__(self, keys: Sequence[Optional[Key]]):
        self.keys = list(keys)
        self._pressed_for = set()

    def __call__(self, session: GameSession) -> None:
        tick = session.tick_count
        if tick in self._pressed_for or tick >= len(self.keys):
            return
        self._pressed_for.add(tick)

        key = self.keys[tick]
        if key is not None:
            session.handle_key(key)


def build_session(args: argparse.Namespace, config: SessionConfig) -> GameSession:
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    if args.realtime:
        scheduler = ScheduleTickScheduler(config.tick_seconds)
    else:
        scheduler = ManualTickScheduler()

    return GameSession(scheduler=scheduler, config=config)


def play(args: argparse.Namespace, config: SessionConfig) -> GameSession:
    """Run one game to completion (or max ticks) and return the finished session."""
    session = build_session(args, config)
    sleep = time.sleep if args.realtime else (lambda _seconds: None)

    session.run(
        max_ticks=args.max_ticks,
        sleep=sleep,
        before_tick=ScriptedKeys(parse_keys(args.keys)),
    )
    return session


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Play a headless game of GridSnake with scripted input',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--keys',
        nargs='*',
        default=[],
        help="Key pressed before each tick: ArrowUp/38, ArrowDown/40, ArrowLeft/37, "
             "ArrowRight/39, or '-' for none"
    )
    parser.add_argument(
        '--max-ticks',
        type=int,
        default=DEFAULT_MAX_TICKS,
        help=f'Stop after this many ticks (default: {DEFAULT_MAX_TICKS})'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed (overrides SNAKE_SEED)'
    )
    parser.add_argument(
        '--realtime',
        action='store_true',
        help='Tick on the wall clock every SNAKE_TICK_RATE_MS instead of stepping'
    )
    parser.add_argument(
        '--print-board',
        action='store_true',
        help='Print the final board'
    )
    parser.add_argument(
        '--save-replay',
        action='store_true',
        help='Write a replay JSON file to SNAKE_REPLAY_DIR'
    )

    args = parser.parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    session = play(args, config)

    if args.print_board:
        print(session.state.print_board())

    summary = {
        "game_id": session.game_id,
        "score": session.state.score,
        "length": len(session.state.snake),
        "ticks": session.tick_count,
        "game_over": session.state.is_game_over,
    }

    if args.save_replay:
        try:
            summary["replay_path"] = save_replay(session, config.replay_dir)
        except OSError as e:
            logger.error(f"Failed to save replay for game {session.game_id}: {e}")
            return 1

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
