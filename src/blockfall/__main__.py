"""Command line entry point.

Run with: `python -m blockfall`

Without options a short ASCII demo is printed: the engine is fed a number of
gravity steps and the resulting frame (board plus active piece) is shown.
Pass ``--pygame`` to play in a window instead.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .actions import MOVE_DOWN
from .driver import GameDriver
from .game_state import beginning_state
from .utils import format_grid, render_grid


LOGGER = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle game.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the piece sequence.")
    parser.add_argument(
        "--steps",
        type=int,
        default=60,
        help="Number of gravity steps to apply in the ASCII demo.",
    )
    parser.add_argument("--pygame", action="store_true", help="Open the pygame front-end.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def run_demo(seed: int, steps: int) -> str:
    """Apply ``steps`` gravity steps from a fresh game and return the frame."""

    driver = GameDriver(beginning_state(seed))
    driver.extend([MOVE_DOWN] * max(steps, 0))
    state = driver.drain()
    frame = format_grid(render_grid(state.board, state.active))
    LOGGER.debug("Demo finished after %d steps, game_end=%s", steps, state.game_end)
    return f"{frame}\nScore: {state.score}  Level: {state.level}  Next: {state.preview.kind.value}"


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    if args.pygame:
        from .run_pygame import main as run_pygame

        run_pygame(seed=args.seed)
        return
    print(run_demo(args.seed, args.steps))


if __name__ == "__main__":
    main()
