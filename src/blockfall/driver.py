"""Composition of tick sources, input actions and the reducer.

Actions from every source end up in one ordered queue and are folded through
:func:`~blockfall.engine.reduce_state` one at a time.  The renderer sees the
state after every applied action.

Two flavours are provided:

* :class:`GameDriver` with :meth:`GameDriver.submit` / :meth:`GameDriver.drain`
  plus a :class:`TickScheduler` working in virtual time, for frame loops such
  as the pygame front-end.
* :func:`tick_source` coroutines feeding an :class:`asyncio.Queue` consumed by
  :meth:`GameDriver.run`.  Independent tick periods interleave by timer firing
  order, which may vary from run to run.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Tuple

from .actions import Action, Tick
from .engine import reduce_state
from .game_state import GameState, beginning_state
from .scoring import FIRST_LEVEL, MAX_LEVEL, tick_interval_ms


LOGGER = logging.getLogger(__name__)

Renderer = Callable[[GameState], None]


def default_tick_periods() -> Dict[int, float]:
    """Return ``{level: period_ms}`` for every level."""

    return {level: tick_interval_ms(level) for level in range(FIRST_LEVEL, MAX_LEVEL + 1)}


class TickScheduler:
    """Virtual-time tick emitters, one per level.

    Each level fires ``Tick(level)`` every ``period`` milliseconds regardless
    of the current game level; the engine ignores ticks from other levels.
    """

    def __init__(self, periods: Optional[Dict[int, float]] = None) -> None:
        self.periods: Dict[int, float] = dict(periods or default_tick_periods())
        for level, period in self.periods.items():
            if period <= 0:
                raise ValueError(f"Tick period for level {level} must be positive, got {period}")
        self.now = 0.0
        self._due: Dict[int, float] = dict(self.periods)

    def reset(self) -> None:
        self.now = 0.0
        self._due = dict(self.periods)

    def advance(self, elapsed_ms: float) -> List[Tick]:
        """Move the clock forward and return the ticks that fired.

        Ticks are ordered by fire time; ticks firing at the same instant are
        ordered by level.
        """

        self.now += max(elapsed_ms, 0.0)
        fired: List[Tuple[float, int]] = []
        for level, period in self.periods.items():
            due = self._due[level]
            while due <= self.now:
                fired.append((due, level))
                due += period
            self._due[level] = due
        fired.sort()
        return [Tick(level) for _, level in fired]


class GameDriver:
    """Owns the authoritative state and folds queued actions into it."""

    def __init__(
        self,
        state: Optional[GameState] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.state: GameState = state if state is not None else beginning_state()
        self.renderer = renderer
        self._queue: Deque[Action] = deque()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def submit(self, action: Action) -> None:
        """Queue ``action`` behind everything submitted before it."""

        self._queue.append(action)

    def extend(self, actions: Iterable[Action]) -> None:
        self._queue.extend(actions)

    def apply(self, action: Action) -> GameState:
        """Apply one action immediately and render the result."""

        previous = self.state
        self.state = reduce_state(previous, action)
        if self.state.game_end and not previous.game_end:
            LOGGER.info("Game ended after %r", action)
        if self.renderer is not None:
            self.renderer(self.state)
        return self.state

    def drain(self) -> GameState:
        """Apply every queued action in arrival order."""

        while self._queue:
            self.apply(self._queue.popleft())
        return self.state

    async def run(self, queue: "asyncio.Queue[Optional[Action]]") -> GameState:
        """Fold actions from ``queue`` until a ``None`` sentinel arrives."""

        while True:
            action = await queue.get()
            try:
                if action is None:
                    return self.state
                self.apply(action)
            finally:
                queue.task_done()


async def tick_source(
    queue: "asyncio.Queue[Optional[Action]]",
    level: int,
    period_ms: float,
    count: Optional[int] = None,
) -> None:
    """Put ``Tick(level)`` on ``queue`` every ``period_ms`` milliseconds.

    Runs until cancelled, or until ``count`` ticks were emitted.
    """

    emitted = 0
    while count is None or emitted < count:
        await asyncio.sleep(period_ms / 1000.0)
        await queue.put(Tick(level))
        emitted += 1


__all__ = [
    "GameDriver",
    "Renderer",
    "TickScheduler",
    "default_tick_periods",
    "tick_source",
]
