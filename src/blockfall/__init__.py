"""Deterministic engine for a falling-block puzzle game."""

from .actions import Action, HoldBlock, MoveDown, MoveSideways, Reset, Rotate, Tick
from .board import Board
from .driver import GameDriver, TickScheduler
from .engine import reduce_state
from .game_state import BEGINNING_STATE, GameState, beginning_state
from .rng import RandomState, iter_draws, next_draw
from .tetromino import Cell, Piece, TetrominoType, rotate_piece, shape_blocks, spawn_piece
from .utils import format_grid, render_grid

__all__ = [
    "Action",
    "BEGINNING_STATE",
    "Board",
    "Cell",
    "GameDriver",
    "GameState",
    "HoldBlock",
    "MoveDown",
    "MoveSideways",
    "Piece",
    "RandomState",
    "Reset",
    "Rotate",
    "TetrominoType",
    "Tick",
    "TickScheduler",
    "beginning_state",
    "format_grid",
    "iter_draws",
    "next_draw",
    "reduce_state",
    "render_grid",
    "rotate_piece",
    "shape_blocks",
    "spawn_piece",
]
