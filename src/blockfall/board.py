"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

EMPTY = 0
OCCUPIED = 1

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros.

    A fresh array is allocated on every call; boards never share storage.
    """

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def _freeze(grid: Grid) -> Grid:
    grid.flags.writeable = False
    return grid


class Board:
    """Immutable board of occupied (1) and empty (0) cells.

    The underlying array is read-only; :meth:`merge` and
    :meth:`clear_full_rows` return new boards.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, grid: Optional[Grid] = None) -> None:
        if grid is None:
            grid = create_empty_grid()
        else:
            values = np.asarray(grid)
            if values.shape != (self.height, self.width):
                raise ValueError(f"Board must be {self.height}x{self.width}, got shape {values.shape}")
            # Checked before the uint8 cast so out-of-range values cannot wrap to 0.
            if np.any((values < EMPTY) | (values > OCCUPIED)):
                raise ValueError("Board cells must be 0 or 1")
            grid = values.astype(np.uint8)
        self.grid: Grid = _freeze(grid)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from nested row lists (row 0 first)."""

        return cls(np.asarray(rows, dtype=np.int64))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(occupied={int(np.count_nonzero(self.grid))})"

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_occupied(self, row: int, col: int) -> bool:
        """Return ``True`` if ``(row, col)`` is on the board and filled."""

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] != EMPTY)
        return False

    def merge(self, piece: Piece) -> "Board":
        """Return a new board with ``piece`` burnt in.

        Cells outside the grid (a piece still partly above row 0) are
        dropped.
        """

        grid = self.grid.copy()
        for x, y in piece.cells:
            if 0 <= y < self.height and 0 <= x < self.width:
                grid[y, x] = OCCUPIED
        return Board(grid)

    def full_rows(self) -> List[int]:
        """Return the indices of fully occupied rows, top first."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != EMPTY, axis=1))]

    def clear_full_rows(self) -> Tuple["Board", int]:
        """Remove completed rows and return ``(board, cleared)``.

        Remaining rows keep their order and drop down; the same number of
        empty rows is prepended at the top.
        """

        full = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full))
        if not cleared:
            return self, 0
        remaining = self.grid[~full]
        new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
        return Board(np.vstack((new_rows, remaining))), cleared

    def occupied_rows(self) -> int:
        """Return how many rows contain at least one occupied cell."""

        return int(np.count_nonzero(np.any(self.grid != EMPTY, axis=1)))

    def rows(self) -> List[List[int]]:
        """Return the grid as nested Python lists."""

        return self.grid.tolist()


def fill_cells(board: Board, cells: Iterable[Tuple[int, int]]) -> Board:
    """Return a copy of ``board`` with each ``(row, col)`` in ``cells`` set."""

    grid = board.grid.copy()
    for row, col in cells:
        grid[row, col] = OCCUPIED
    return Board(grid)


__all__ = ["Board", "Grid", "HEIGHT", "WIDTH", "create_empty_grid", "fill_cells"]
