"""Score and level policy."""

from __future__ import annotations

from bisect import bisect_right
from typing import Tuple


SCORE_PER_ROW = 100

# Score at which levels 2, 3, 4 and 5 begin.  Level 5 is the final tier.
LEVEL_THRESHOLDS: Tuple[int, ...] = (300, 800, 1500, 2500)

FIRST_LEVEL = 1
MAX_LEVEL = FIRST_LEVEL + len(LEVEL_THRESHOLDS)

BASE_TICK_MS = 500
TICK_STEP_MS = 100


def score_for_rows(rows: int) -> int:
    """Return the points earned for clearing ``rows`` rows at once."""

    return max(rows, 0) * SCORE_PER_ROW


def level_for_score(score: int) -> int:
    """Return the level reached at ``score``.

    A step function of the score: it never decreases as the score grows and
    stops at :data:`MAX_LEVEL`.
    """

    return FIRST_LEVEL + bisect_right(LEVEL_THRESHOLDS, score)


def tick_interval_ms(level: int) -> float:
    """Return the gravity period in milliseconds for ``level``.

    Each level has its own tick source; higher levels tick faster.
    """

    level = min(max(level, FIRST_LEVEL), MAX_LEVEL)
    return float(BASE_TICK_MS - TICK_STEP_MS * (level - FIRST_LEVEL))


__all__ = [
    "FIRST_LEVEL",
    "LEVEL_THRESHOLDS",
    "MAX_LEVEL",
    "SCORE_PER_ROW",
    "level_for_score",
    "score_for_rows",
    "tick_interval_ms",
]
