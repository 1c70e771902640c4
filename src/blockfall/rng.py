"""Seeded piece sequence built on a linear-congruential generator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

# LCG using GCC's constants.
MODULUS = 2 ** 31
MULTIPLIER = 1103515245
INCREMENT = 12345

KINDS = 7
DEFAULT_SEED = 0


def hash_seed(seed: int) -> int:
    """Return the successor of ``seed``."""

    return (MULTIPLIER * seed + INCREMENT) % MODULUS


def scale(value: int) -> float:
    """Map a hash in ``[0, MODULUS)`` onto ``[0, 1]``."""

    return value / (MODULUS - 1)


def next_draw(seed: int) -> Tuple[int, int]:
    """Return ``(value, new_seed)`` where ``value`` lies in ``[1, 7]``.

    The single hash ``MODULUS - 1`` scales to exactly ``1.0``; it is clamped
    onto the last kind.
    """

    new_seed = hash_seed(seed)
    value = min(int(scale(new_seed) * KINDS) + 1, KINDS)
    return value, new_seed


@dataclass(frozen=True)
class RandomState:
    """Current draw of the sequence plus the seed its successor grows from."""

    seed: int
    value: int

    @classmethod
    def from_seed(cls, seed: int = DEFAULT_SEED) -> "RandomState":
        value, new_seed = next_draw(seed)
        return cls(seed=new_seed, value=value)

    def next(self) -> "RandomState":
        return RandomState.from_seed(self.seed)


def iter_draws(seed: int = DEFAULT_SEED) -> Iterator[int]:
    """Yield the infinite sequence of draws starting from ``seed``.

    Each call starts over, so two generators with the same seed produce the
    same values.
    """

    state = RandomState.from_seed(seed)
    while True:
        yield state.value
        state = state.next()


__all__ = ["RandomState", "hash_seed", "iter_draws", "next_draw", "scale"]
