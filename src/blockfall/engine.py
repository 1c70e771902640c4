"""State transitions.

:func:`reduce_state` is the single entry point: it takes the current
:class:`~blockfall.game_state.GameState` and one action and returns the next
state.  A rejected action returns the very same state object, so callers can
detect no-ops with ``is``.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .actions import Action, HoldBlock, MoveDown, MoveSideways, Reset, Rotate, Tick
from .collision import cannot_descend, cannot_rotate, cannot_slide, is_end_game
from .game_state import GameState, beginning_state
from .scoring import level_for_score, score_for_rows
from .tetromino import enter_piece, kind_for_draw, rotate_piece, shift_piece, spawn_piece


LOGGER = logging.getLogger(__name__)


def tick(state: GameState, level: int) -> GameState:
    """Apply gravity if the tick belongs to the current level's source."""

    if level != state.level:
        return state
    return move_down(state)


def move_sideways(state: GameState, dx: int) -> GameState:
    if state.game_end:
        return state
    shifted = shift_piece(state.active, dx, 0)
    if cannot_slide(state.board, shifted):
        return state
    return replace(state, active=shifted)


def rotate(state: GameState) -> GameState:
    if state.game_end:
        return state
    rotated = rotate_piece(state.active)
    if cannot_rotate(state.board, rotated):
        return state
    return replace(state, active=rotated)


def move_down(state: GameState) -> GameState:
    """Drop the active piece one row, locking it if it has landed.

    When the active piece already overlaps the board at the top boundary the
    game ends instead and the high score is updated.
    """

    if is_end_game(state.board, state.active):
        high_score = max(state.score, state.high_score)
        if state.game_end and high_score == state.high_score:
            return state
        LOGGER.info("Game over. Score: %d, high score: %d", state.score, high_score)
        return replace(state, game_end=True, high_score=high_score)
    if state.game_end:
        return state

    moved = shift_piece(state.active, 0, 1)
    if not cannot_descend(state.board, moved):
        return replace(state, active=moved)
    return _lock(state)


def _lock(state: GameState) -> GameState:
    """Burn the active piece into the board and bring in the next one."""

    merged = state.board.merge(state.active)
    board, cleared = merged.clear_full_rows()
    rng = state.rng.next()
    LOGGER.debug("Locked %s piece at rows %s", state.active.kind.value, sorted(set(state.active.rows())))

    score = state.score
    level = state.level
    if cleared:
        score += score_for_rows(cleared)
        level = level_for_score(score)
        LOGGER.debug("Cleared %d row(s). Score: %d", cleared, score)
        if level != state.level:
            LOGGER.info("Level %d reached at score %d", level, score)

    return replace(
        state,
        board=board,
        active=enter_piece(state.preview.kind),
        preview=spawn_piece(kind_for_draw(rng.value)),
        rng=rng,
        hold_used=False,
        score=score,
        level=level,
    )


def hold_block(state: GameState) -> GameState:
    """Swap the active piece with the held one, once per active piece.

    The held piece is stored in its spawn orientation.  With nothing held
    yet, a fresh piece is drawn from the sequence to become active.
    """

    if state.game_end or state.hold_used:
        return state
    stored = spawn_piece(state.active.kind)
    if state.held is None:
        rng = state.rng.next()
        return replace(
            state,
            active=enter_piece(kind_for_draw(rng.value)),
            held=stored,
            hold_used=True,
            rng=rng,
        )
    return replace(state, active=enter_piece(state.held.kind), held=stored, hold_used=True)


def reset(state: GameState) -> GameState:
    """Start a new game once the current one has ended.

    Only the high score carries over; the board is newly allocated.
    """

    if not state.game_end:
        return state
    LOGGER.info("Starting a new game. High score: %d", state.high_score)
    return beginning_state(high_score=state.high_score)


def reduce_state(state: GameState, action: Action) -> GameState:
    """Return the state after applying ``action`` to ``state``.

    Raises:
        TypeError: If ``action`` is not one of the known action types.
    """

    if isinstance(action, Tick):
        return tick(state, action.level)
    if isinstance(action, MoveSideways):
        return move_sideways(state, action.dx)
    if isinstance(action, MoveDown):
        return move_down(state)
    if isinstance(action, Rotate):
        return rotate(state)
    if isinstance(action, HoldBlock):
        return hold_block(state)
    if isinstance(action, Reset):
        return reset(state)
    raise TypeError(f"Unknown action: {action!r}")


__all__ = [
    "hold_block",
    "move_down",
    "move_sideways",
    "reduce_state",
    "reset",
    "rotate",
    "tick",
]
