"""
RandomSource - Seeded, reproducible draw stream for dataset generation.

Every count, choice and field value in the dataset comes from one stream of
floats in [0, 1). The stream is mulberry32: a 32-bit counter advanced by a
fixed odd constant and mixed with two multiply/xorshift rounds.

Usage:
    rng = RandomSource(42)
    rng.random()                  # float in [0, 1)
    rng.int_between(1, 6)         # closed range
    rng.choice(["a", "b", "c"])
    rng.shuffle(items)            # new list, input untouched

Draw order is part of the output contract: generators consume the stream in
a fixed order, so adding a draw anywhere but the end changes every value that
follows it.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from .errors import InvalidConfiguration

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply on unsigned bit patterns."""
    return (a * b) & _MASK32


def coerce_seed(seed: object) -> int:
    """
    Validate a seed and reduce it to an unsigned 32-bit integer.

    Raises:
        InvalidConfiguration: If seed is not a non-negative integer
    """
    if isinstance(seed, bool):
        raise InvalidConfiguration(f"Invalid seed {seed!r}")
    if isinstance(seed, str):
        text = seed.strip()
        if not text.isdigit():
            raise InvalidConfiguration(f"Invalid seed {seed!r}")
        seed = int(text)
    if not isinstance(seed, int) or seed < 0:
        raise InvalidConfiguration(f"Invalid seed {seed!r}")
    return seed & _MASK32


class RandomSource:
    """
    Deterministic pseudo-random source (not cryptographic).

    Attributes:
        seed: The unsigned 32-bit seed the stream was started from
        draws: Number of values consumed so far
    """

    __slots__ = ("seed", "draws", "_state")

    def __init__(self, seed: int) -> None:
        self.seed = coerce_seed(seed)
        self.draws = 0
        # Counter accumulates as a double and is only wrapped when mixed.
        self._state = float(self.seed)

    def random(self) -> float:
        """Return the next draw in [0, 1)."""
        self._state += _INCREMENT
        self.draws += 1
        t = int(self._state) & _MASK32
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / _TWO_32

    def chance(self, probability: float) -> bool:
        """Return True with the given probability (one draw)."""
        return self.random() < probability

    def int_between(self, low: int, high: int) -> int:
        """Return an integer in the closed range [low, high] (one draw)."""
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        return low + math.floor(self.random() * (high - low + 1))

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element uniformly (one draw)."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[math.floor(self.random() * len(seq))]

    def shuffle(self, seq: Sequence[T]) -> list[T]:
        """
        Return a shuffled copy of seq.

        Fisher-Yates from the last index down to 1, one draw per swap
        (len(seq) - 1 draws in total). Every permutation is reachable.
        """
        items = list(seq)
        for i in range(len(items) - 1, 0, -1):
            j = math.floor(self.random() * (i + 1))
            items[i], items[j] = items[j], items[i]
        return items

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed}, draws={self.draws})"
