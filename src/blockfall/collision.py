"""Collision predicates for candidate piece placements.

The four basic predicates are independent of each other.  The composite
rules at the bottom combine them the way each action needs.
"""

from __future__ import annotations

from .board import Board, HEIGHT, WIDTH
from .tetromino import Piece


def collides_board(board: Board, piece: Piece) -> bool:
    """Return ``True`` if any cell of ``piece`` lands on an occupied cell.

    Negative rows are clamped to ``0`` for the lookup so a piece entering
    from above the visible grid is checked against the top row.
    """

    return any(board.is_occupied(max(y, 0), x) for x, y in piece.cells)


def collides_left_right(piece: Piece) -> bool:
    """Return ``True`` if any cell's column is outside ``[0, WIDTH)``."""

    return any(not 0 <= x < WIDTH for x, _ in piece.cells)


def collides_bottom(piece: Piece) -> bool:
    """Return ``True`` if any cell is at or below the board's last row."""

    return any(y >= HEIGHT for _, y in piece.cells)


def collides_top(piece: Piece) -> bool:
    """Return ``True`` if any cell is above row 0."""

    return any(y < 0 for _, y in piece.cells)


def is_end_game(board: Board, piece: Piece) -> bool:
    """The spawn location is already occupied at the top boundary."""

    return collides_top(piece) and collides_board(board, piece)


def cannot_descend(board: Board, moved: Piece) -> bool:
    return collides_bottom(moved) or collides_board(board, moved)


def cannot_rotate(board: Board, rotated: Piece) -> bool:
    return (
        collides_board(board, rotated)
        or collides_bottom(rotated)
        or collides_left_right(rotated)
        or collides_top(rotated)
    )


def cannot_slide(board: Board, shifted: Piece) -> bool:
    return collides_board(board, shifted) or collides_left_right(shifted)


__all__ = [
    "cannot_descend",
    "cannot_rotate",
    "cannot_slide",
    "collides_board",
    "collides_bottom",
    "collides_left_right",
    "collides_top",
    "is_end_game",
]
