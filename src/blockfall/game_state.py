"""High level game state snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import Board
from .rng import DEFAULT_SEED, RandomState
from .scoring import FIRST_LEVEL
from .tetromino import Piece, kind_for_draw, spawn_piece


@dataclass(frozen=True)
class GameState:
    """Immutable state for a game session.

    Every action produces a new instance; nothing is updated in place.
    ``rng`` holds the last draw consumed (for the preview, or for the
    active piece after a first hold) and the seed the next draw grows from.
    """

    board: Board
    active: Piece
    preview: Piece
    rng: RandomState
    held: Optional[Piece] = None
    hold_used: bool = False
    game_end: bool = False
    score: int = 0
    high_score: int = 0
    level: int = FIRST_LEVEL


def beginning_state(seed: int = DEFAULT_SEED, high_score: int = 0) -> GameState:
    """Return a fresh game.

    The board is always newly allocated.  The active piece sits at its
    spawn layout and the preview piece is the following draw.
    """

    first = RandomState.from_seed(seed)
    second = first.next()
    return GameState(
        board=Board(),
        active=spawn_piece(kind_for_draw(first.value)),
        preview=spawn_piece(kind_for_draw(second.value)),
        rng=second,
        high_score=high_score,
    )


BEGINNING_STATE = beginning_state()


__all__ = ["BEGINNING_STATE", "GameState", "beginning_state"]
