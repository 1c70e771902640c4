from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np
import pytest

from blockfall.actions import HOLD, MOVE_DOWN, MOVE_LEFT, MOVE_RIGHT, RESET, ROTATE, Tick
from blockfall.board import Board, fill_cells
from blockfall.engine import reduce_state
from blockfall.game_state import BEGINNING_STATE, GameState, beginning_state
from blockfall.rng import RandomState
from blockfall.scoring import SCORE_PER_ROW
from blockfall.tetromino import (
    Cell,
    TetrominoType,
    enter_piece,
    rotate_piece,
    shape_blocks,
    spawn_piece,
)


def _apply(state: GameState, action, times: int = 1) -> GameState:
    for _ in range(times):
        state = reduce_state(state, action)
    return state


def _with(active_kind: TetrominoType, **changes) -> GameState:
    return replace(beginning_state(0), active=spawn_piece(active_kind), **changes)


def test_beginning_state_uses_fresh_board() -> None:
    first = beginning_state()
    second = beginning_state()
    assert first.board is not second.board
    assert not np.shares_memory(first.board.grid, second.board.grid)
    assert not np.shares_memory(first.board.grid, BEGINNING_STATE.board.grid)
    assert first.board.occupied_rows() == 0
    assert (first.score, first.level, first.high_score) == (0, 1, 0)
    assert first.held is None and not first.hold_used and not first.game_end


def test_beginning_state_is_seeded() -> None:
    state = beginning_state(0)
    assert state.active.kind == TetrominoType.I
    assert beginning_state(0) == state
    assert beginning_state(5).rng != state.rng


def test_i_piece_falls_to_floor_and_locks() -> None:
    state = _with(TetrominoType.I)
    preview_kind = state.preview.kind

    state = _apply(state, MOVE_DOWN, 19)
    assert state.active.cells == tuple(Cell(x, 19) for x in range(4, 8))
    assert state.board.occupied_rows() == 0

    state = reduce_state(state, MOVE_DOWN)
    assert state.board.rows()[19] == [0, 0, 0, 0, 1, 1, 1, 1, 0, 0]
    assert int(state.board.grid.sum()) == 4
    assert state.active == enter_piece(preview_kind)
    assert state.score == 0
    assert not state.hold_used


def test_landing_piece_clears_single_row() -> None:
    rows = [[0] * Board.width for _ in range(Board.height)]
    rows[19] = [1] * Board.width
    rows[19][6] = 0
    vertical_i = rotate_piece(spawn_piece(TetrominoType.I))  # column 6, rows -1..2
    state = replace(beginning_state(0), board=Board.from_rows(rows), active=vertical_i)

    state = _apply(state, MOVE_DOWN, 17)
    assert max(y for _, y in state.active.cells) == 19
    state = reduce_state(state, MOVE_DOWN)

    assert state.score == SCORE_PER_ROW
    assert state.level == 1
    grid = state.board.rows()
    assert grid[0] == [0] * Board.width
    assert [row[6] for row in grid[16:]] == [0, 1, 1, 1]
    assert int(state.board.grid.sum()) == 3


def test_landing_piece_clears_two_separate_rows() -> None:
    rows = [[0] * Board.width for _ in range(Board.height)]
    for row in (17, 19):
        rows[row] = [1] * Board.width
        rows[row][6] = 0
    rows[18][0] = 1
    vertical_i = rotate_piece(spawn_piece(TetrominoType.I))
    state = replace(beginning_state(0), board=Board.from_rows(rows), active=vertical_i, score=50)

    state = _apply(state, MOVE_DOWN, 18)

    assert state.score == 50 + 2 * SCORE_PER_ROW
    grid = state.board.rows()
    assert grid[0] == grid[1] == [0] * Board.width
    assert [row[6] for row in grid[17:]] == [0, 1, 1]
    assert grid[19][0] == 1
    assert int(state.board.grid.sum()) == 3


def test_clearing_rows_raises_level() -> None:
    rows = [[0] * Board.width for _ in range(Board.height)]
    rows[19] = [1] * 4 + [0] * 4 + [1] * 2
    state = replace(
        beginning_state(0),
        board=Board.from_rows(rows),
        active=spawn_piece(TetrominoType.I),
        score=250,
    )
    state = _apply(state, MOVE_DOWN, 20)
    assert state.score == 350
    assert state.level == 2


def test_spawn_overlap_ends_game() -> None:
    board = fill_cells(Board(), [(0, 5)])
    state = replace(
        beginning_state(0),
        board=board,
        active=enter_piece(TetrominoType.I),
        score=300,
        high_score=200,
    )
    ended = reduce_state(state, MOVE_DOWN)
    assert ended.game_end
    assert ended.high_score == 300
    assert ended.board is board
    assert ended.active == state.active


def test_game_over_keeps_higher_high_score() -> None:
    state = replace(
        beginning_state(0),
        board=fill_cells(Board(), [(0, 4)]),
        active=enter_piece(TetrominoType.O),
        score=100,
        high_score=900,
    )
    assert reduce_state(state, MOVE_DOWN).high_score == 900


def test_ended_game_ignores_moves() -> None:
    state = replace(
        beginning_state(0),
        board=fill_cells(Board(), [(0, 4)]),
        active=enter_piece(TetrominoType.O),
    )
    ended = reduce_state(state, MOVE_DOWN)
    for action in (MOVE_LEFT, MOVE_RIGHT, ROTATE, HOLD, MOVE_DOWN, Tick(1)):
        assert reduce_state(ended, action) is ended


def test_reset_is_noop_while_playing() -> None:
    state = beginning_state(0)
    assert reduce_state(state, RESET) is state


def test_reset_after_game_over_keeps_only_high_score() -> None:
    state = replace(
        beginning_state(0),
        board=fill_cells(Board(), [(0, 5), (10, 3)]),
        active=enter_piece(TetrominoType.I),
        rng=RandomState.from_seed(99),
        score=700,
        level=2,
    )
    ended = reduce_state(state, MOVE_DOWN)
    fresh = reduce_state(ended, RESET)
    assert not fresh.game_end
    assert fresh.high_score == 700
    assert (fresh.score, fresh.level) == (0, 1)
    assert fresh.board.occupied_rows() == 0
    assert not np.shares_memory(fresh.board.grid, ended.board.grid)
    assert fresh.held is None and not fresh.hold_used
    assert fresh == beginning_state(high_score=700)
    assert fresh.active == BEGINNING_STATE.active
    assert fresh.rng == BEGINNING_STATE.rng


def test_high_score_never_decreases_across_games() -> None:
    state = replace(
        beginning_state(0),
        board=fill_cells(Board(), [(0, 5)]),
        active=enter_piece(TetrominoType.I),
        score=500,
    )
    state = reduce_state(reduce_state(state, MOVE_DOWN), RESET)
    state = replace(
        state,
        board=fill_cells(Board(), [(0, 5)]),
        active=enter_piece(TetrominoType.I),
        score=100,
    )
    state = reduce_state(state, MOVE_DOWN)
    assert state.game_end
    assert state.high_score == 500


def test_sideways_stops_at_wall() -> None:
    state = _with(TetrominoType.J)
    moved = _apply(state, MOVE_LEFT, 3)
    assert min(x for x, _ in moved.active.cells) == 0
    assert reduce_state(moved, MOVE_LEFT) is moved

    right = _apply(state, MOVE_RIGHT, 4)
    assert max(x for x, _ in right.active.cells) == Board.width - 1
    assert reduce_state(right, MOVE_RIGHT) is right


def test_sideways_blocked_by_stack() -> None:
    state = _with(TetrominoType.J, board=fill_cells(Board(), [(1, 2)]))
    assert reduce_state(state, MOVE_LEFT) is state
    assert reduce_state(state, MOVE_RIGHT) is not state


def test_rotate_accepts_and_rejects() -> None:
    state = _with(TetrominoType.T)
    rotated = reduce_state(state, ROTATE)
    assert rotated.active.rotation == 2
    assert rotated.active.cells == shape_blocks(TetrominoType.T, 2)

    blocked = _with(TetrominoType.T, board=fill_cells(Board(), [(2, 4)]))
    assert reduce_state(blocked, ROTATE) is blocked

    # A vertical I would poke above the grid at spawn; no wall kick is tried.
    at_spawn = _with(TetrominoType.I)
    assert reduce_state(at_spawn, ROTATE) is at_spawn


def test_rotating_four_times_restores_active_piece() -> None:
    state = _apply(_with(TetrominoType.L), MOVE_DOWN, 5)
    assert _apply(state, ROTATE, 4).active == state.active


def test_tick_only_moves_for_matching_level() -> None:
    state = beginning_state(0)
    assert reduce_state(state, Tick(2)) is state
    assert reduce_state(state, Tick(1)) == reduce_state(state, MOVE_DOWN)


def test_first_hold_draws_fresh_piece() -> None:
    state = _apply(_with(TetrominoType.T), ROTATE)
    held = reduce_state(state, HOLD)

    assert held.held == spawn_piece(TetrominoType.T)
    assert held.hold_used
    assert held.preview == state.preview
    assert held.rng == state.rng.next()
    assert held.active.rotation == 1
    assert min(y for _, y in held.active.cells) == -1


def test_second_hold_before_lock_is_noop() -> None:
    held = reduce_state(_with(TetrominoType.T), HOLD)
    assert reduce_state(held, HOLD) is held


def test_lock_restores_hold_and_swaps_directly() -> None:
    state = reduce_state(_with(TetrominoType.O), HOLD)
    while state.hold_used:
        state = reduce_state(state, MOVE_DOWN)
    active_kind = state.active.kind
    rng = state.rng

    swapped = reduce_state(state, HOLD)
    assert swapped.active == enter_piece(TetrominoType.O)
    assert swapped.held == spawn_piece(active_kind)
    assert swapped.rng == rng


def test_unknown_action_raises() -> None:
    with pytest.raises(TypeError):
        reduce_state(beginning_state(0), "drop")  # type: ignore[arg-type]


def test_game_over_is_logged(caplog) -> None:
    state = replace(
        beginning_state(0),
        board=fill_cells(Board(), [(0, 5)]),
        active=enter_piece(TetrominoType.I),
        score=42,
    )
    with caplog.at_level(logging.INFO, logger="blockfall.engine"):
        reduce_state(state, MOVE_DOWN)
    assert "Game over" in caplog.text
    assert "42" in caplog.text
