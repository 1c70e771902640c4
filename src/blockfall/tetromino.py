"""Tetromino catalog and rotation.

Every kind has four rotation layouts stored as absolute board coordinates
around a fixed origin column.  Rotation does not use any matrix maths: the
piece's offset from the stored layout of its current rotation is measured at
the first cell and re-applied to the stored layout of the next rotation.
Because the offset is carried over unchanged, rotating four times always
restores the original cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Tuple


class Cell(NamedTuple):
    """A board coordinate: column ``x`` and row ``y`` (row 0 is the top)."""

    x: int
    y: int


Layout = Tuple[Cell, ...]

ROTATIONS = 4
CELLS_PER_PIECE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"


# Index produced by the random sequence -> kind.  Values outside the table
# fall back to ``Z``.
DRAW_KINDS: Dict[int, TetrominoType] = {
    1: TetrominoType.I,
    2: TetrominoType.O,
    3: TetrominoType.T,
    4: TetrominoType.J,
    5: TetrominoType.L,
    6: TetrominoType.S,
}

DEFAULT_KIND = TetrominoType.Z

SHAPE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00ffff",
    TetrominoType.O: "#ffff00",
    TetrominoType.T: "#ff00ff",
    TetrominoType.J: "#0000ff",
    TetrominoType.L: "#ff8100",
    TetrominoType.S: "#00ff00",
    TetrominoType.Z: "#ff0000",
}


def _layout(*coords: Tuple[int, int]) -> Layout:
    return tuple(Cell(x, y) for x, y in coords)


# Absolute layouts for rotations 1..4.  The n-th cell of each layout is the
# n-th cell of the previous layout turned clockwise, so the first cell is a
# stable anchor across rotations.
ROTATION_TABLE: Dict[TetrominoType, Dict[int, Layout]] = {
    TetrominoType.I: {
        1: _layout((4, 0), (5, 0), (6, 0), (7, 0)),
        2: _layout((6, -1), (6, 0), (6, 1), (6, 2)),
        3: _layout((7, 1), (6, 1), (5, 1), (4, 1)),
        4: _layout((5, 2), (5, 1), (5, 0), (5, -1)),
    },
    TetrominoType.O: {
        1: _layout((4, 0), (5, 0), (4, 1), (5, 1)),
        2: _layout((4, 0), (5, 0), (4, 1), (5, 1)),
        3: _layout((4, 0), (5, 0), (4, 1), (5, 1)),
        4: _layout((4, 0), (5, 0), (4, 1), (5, 1)),
    },
    TetrominoType.T: {
        1: _layout((4, 0), (3, 1), (4, 1), (5, 1)),
        2: _layout((5, 1), (4, 0), (4, 1), (4, 2)),
        3: _layout((4, 2), (5, 1), (4, 1), (3, 1)),
        4: _layout((3, 1), (4, 2), (4, 1), (4, 0)),
    },
    TetrominoType.J: {
        1: _layout((3, 0), (3, 1), (4, 1), (5, 1)),
        2: _layout((5, 0), (4, 0), (4, 1), (4, 2)),
        3: _layout((5, 2), (5, 1), (4, 1), (3, 1)),
        4: _layout((3, 2), (4, 2), (4, 1), (4, 0)),
    },
    TetrominoType.L: {
        1: _layout((5, 0), (3, 1), (4, 1), (5, 1)),
        2: _layout((5, 2), (4, 0), (4, 1), (4, 2)),
        3: _layout((3, 2), (5, 1), (4, 1), (3, 1)),
        4: _layout((3, 0), (4, 2), (4, 1), (4, 0)),
    },
    TetrominoType.S: {
        1: _layout((4, 0), (5, 0), (3, 1), (4, 1)),
        2: _layout((5, 1), (5, 2), (4, 0), (4, 1)),
        3: _layout((4, 2), (3, 2), (5, 1), (4, 1)),
        4: _layout((3, 1), (3, 0), (4, 2), (4, 1)),
    },
    TetrominoType.Z: {
        1: _layout((3, 0), (4, 0), (4, 1), (5, 1)),
        2: _layout((5, 0), (5, 1), (4, 1), (4, 2)),
        3: _layout((5, 2), (4, 2), (4, 1), (3, 1)),
        4: _layout((3, 2), (3, 1), (4, 1), (4, 0)),
    },
}


@dataclass(frozen=True)
class Piece:
    """An immutable falling piece.

    ``cells`` holds the four occupied squares in board coordinates and
    ``rotation`` is the index (1-4) of the catalog layout the cells were
    derived from.
    """

    cells: Layout
    kind: TetrominoType
    rotation: int = 1
    color: str = ""

    def __post_init__(self) -> None:
        if len(self.cells) != CELLS_PER_PIECE:
            raise ValueError(f"A piece needs exactly {CELLS_PER_PIECE} cells, got {len(self.cells)}")
        if not 1 <= self.rotation <= ROTATIONS:
            raise ValueError(f"Rotation must be in 1..{ROTATIONS}, got {self.rotation}")
        if not self.color:
            object.__setattr__(self, "color", SHAPE_COLORS[self.kind])

    def rows(self) -> Tuple[int, ...]:
        return tuple(cell.y for cell in self.cells)


def kind_for_draw(value: int) -> TetrominoType:
    """Return the kind for a random draw, falling back to ``Z``."""

    return DRAW_KINDS.get(value, DEFAULT_KIND)


def shape_blocks(kind: TetrominoType, rotation: int) -> Layout:
    """Return the catalog layout for ``kind`` at ``rotation``.

    ``rotation`` is wrapped into 1..4 so any integer is accepted.
    """

    return ROTATION_TABLE[kind][(rotation - 1) % ROTATIONS + 1]


def next_rotation(rotation: int) -> int:
    """Return the rotation index after ``rotation`` (4 wraps to 1)."""

    return rotation % ROTATIONS + 1


def spawn_piece(kind: TetrominoType) -> Piece:
    """Return ``kind`` in its canonical spawn layout."""

    return Piece(cells=shape_blocks(kind, 1), kind=kind, rotation=1)


def shift_piece(piece: Piece, dx: int, dy: int) -> Piece:
    """Return a copy of ``piece`` moved ``dx`` columns and ``dy`` rows."""

    cells = tuple(Cell(x + dx, y + dy) for x, y in piece.cells)
    return Piece(cells=cells, kind=piece.kind, rotation=piece.rotation, color=piece.color)


def enter_piece(kind: TetrominoType) -> Piece:
    """Return ``kind`` as it enters play, one row above its spawn layout."""

    return shift_piece(spawn_piece(kind), 0, -1)


def rotate_piece(piece: Piece) -> Piece:
    """Return ``piece`` turned clockwise to its next rotation index.

    The result may overlap the board or leave it; callers decide whether the
    rotation is allowed.
    """

    anchor = piece.cells[0]
    stored = shape_blocks(piece.kind, piece.rotation)[0]
    dx = anchor.x - stored.x
    dy = anchor.y - stored.y
    rotation = next_rotation(piece.rotation)
    cells = tuple(Cell(x + dx, y + dy) for x, y in shape_blocks(piece.kind, rotation))
    return Piece(cells=cells, kind=piece.kind, rotation=rotation, color=piece.color)


__all__ = [
    "Cell",
    "Piece",
    "TetrominoType",
    "ROTATION_TABLE",
    "SHAPE_COLORS",
    "enter_piece",
    "kind_for_draw",
    "next_rotation",
    "rotate_piece",
    "shape_blocks",
    "shift_piece",
    "spawn_piece",
]
