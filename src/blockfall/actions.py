"""The closed set of actions the engine accepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Tick:
    """Gravity step emitted by the tick source for ``level``."""

    level: int


@dataclass(frozen=True)
class MoveSideways:
    """Shift the active piece ``dx`` columns (-1 left, +1 right)."""

    dx: int


@dataclass(frozen=True)
class MoveDown:
    pass


@dataclass(frozen=True)
class Rotate:
    pass


@dataclass(frozen=True)
class HoldBlock:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Action = Union[Tick, MoveSideways, MoveDown, Rotate, HoldBlock, Reset]

MOVE_LEFT = MoveSideways(-1)
MOVE_RIGHT = MoveSideways(1)
MOVE_DOWN = MoveDown()
ROTATE = Rotate()
HOLD = HoldBlock()
RESET = Reset()


__all__ = [
    "Action",
    "HOLD",
    "HoldBlock",
    "MOVE_DOWN",
    "MOVE_LEFT",
    "MOVE_RIGHT",
    "MoveDown",
    "MoveSideways",
    "RESET",
    "ROTATE",
    "Reset",
    "Rotate",
    "Tick",
]
