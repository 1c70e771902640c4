"""Utility helpers for presenting engine state."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .tetromino import Piece


ACTIVE_CELL = 2


def render_grid(board: Board, active: Optional[Piece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without merging the piece into the board.  Cells covered by the active
    piece receive ``2``; cells of the piece above or outside the grid are
    skipped.
    """

    grid = board.rows()
    if active is not None:
        for x, y in active.cells:
            if 0 <= y < board.height and 0 <= x < board.width:
                grid[y][x] = ACTIVE_CELL
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as text: ``#`` locked, ``@`` active, ``.`` empty."""

    symbols = {0: ".", 1: "#", ACTIVE_CELL: "@"}
    return "\n".join("".join(symbols.get(cell, "#") for cell in row) for row in grid)
