"""Simple pygame front-end for the engine.

A thin shell: it turns key presses into actions, lets a
:class:`~blockfall.driver.TickScheduler` produce gravity ticks and draws
whatever state the :class:`~blockfall.driver.GameDriver` hands back.  No game
rules live here.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame

from .actions import HOLD, MOVE_DOWN, MOVE_LEFT, MOVE_RIGHT, RESET, ROTATE, Action
from .board import Board
from .driver import GameDriver, TickScheduler
from .game_state import GameState, beginning_state
from .tetromino import Piece

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the preview and held pieces
PANEL_CELLS = 6
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (218, 180, 131)
GRID_LINE = (50, 50, 50)
LOCKED_COLOR = (0, 128, 0)

KEY_ACTIONS: Dict[int, Action] = {
    pygame.K_a: MOVE_LEFT,
    pygame.K_LEFT: MOVE_LEFT,
    pygame.K_d: MOVE_RIGHT,
    pygame.K_RIGHT: MOVE_RIGHT,
    pygame.K_s: MOVE_DOWN,
    pygame.K_DOWN: MOVE_DOWN,
    pygame.K_w: ROTATE,
    pygame.K_UP: ROTATE,
    pygame.K_c: HOLD,
    pygame.K_r: RESET,
}


def action_for_event(event: pygame.event.Event) -> Optional[Action]:
    """Return the action for an initial key press, or ``None``.

    Key repeat is never enabled, so a held key produces one ``KEYDOWN``.
    Unknown keys are dropped here and never reach the engine.
    """

    if event.type != pygame.KEYDOWN:
        return None
    return KEY_ACTIONS.get(event.key)


def _cell_rect(x: int, y: int, offset_x: int = 0, offset_y: int = 0) -> pygame.Rect:
    return pygame.Rect(offset_x + x * CELL_SIZE, offset_y + y * CELL_SIZE, CELL_SIZE, CELL_SIZE)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the locked cells."""

    for r in range(board.height):
        for c in range(board.width):
            rect = _cell_rect(c, r)
            color = LOCKED_COLOR if board.is_occupied(r, c) else BACKGROUND
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_piece(screen: pygame.Surface, piece: Piece, offset_x: int = 0, offset_y: int = 0) -> None:
    """Render ``piece`` in its own colour, skipping rows above the grid."""

    color = pygame.Color(piece.color)
    for x, y in piece.cells:
        if y < 0:
            continue
        rect = _cell_rect(x, y, offset_x, offset_y)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_state(screen: pygame.Surface, state: GameState) -> None:
    screen.fill((0, 0, 0))
    draw_board(screen, state.board)
    draw_piece(screen, state.active)
    panel_x = (Board.width - 2) * CELL_SIZE
    draw_piece(screen, state.preview, panel_x, CELL_SIZE)
    if state.held is not None:
        draw_piece(screen, state.held, panel_x, 5 * CELL_SIZE)
    status = "Game over (R to restart) - " if state.game_end else ""
    pygame.display.set_caption(
        f"blockfall - {status}Score: {state.score}  Level: {state.level}  High score: {state.high_score}"
    )
    pygame.display.flip()


class GameRunner:
    """Manage the pygame loop feeding a :class:`GameDriver`."""

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self.scheduler = TickScheduler()
        self.driver = GameDriver(beginning_state(seed), renderer=self._render)

    @property
    def running(self) -> bool:
        return self._running

    def _render(self, state: GameState) -> None:
        if self._screen is not None:
            draw_state(self._screen, state)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
            return
        action = action_for_event(event)
        if action is not None:
            self.driver.submit(action)

    def step(self, dt: float) -> GameState:
        """Queue the ticks due after ``dt`` ms and fold all pending actions."""

        self.driver.extend(self.scheduler.advance(dt))
        return self.driver.drain()

    async def _run_loop(self) -> None:
        pygame.init()
        width = (Board.width + PANEL_CELLS) * CELL_SIZE
        height = Board.height * CELL_SIZE
        self._screen = pygame.display.set_mode((width, height))
        self._clock = pygame.time.Clock()
        LOGGER.info("Game started with seed %d", self._seed)

        draw_state(self._screen, self.driver.state)
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)
            self.step(dt)
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped. High score: %d", self.driver.state.high_score)

    def start(self) -> None:
        asyncio.run(self._run_loop())


def main(seed: int = 0) -> None:
    GameRunner(seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
