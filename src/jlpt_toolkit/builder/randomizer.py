"""
Module: builder.randomizer

Purpose:
    String-seeded deterministic pseudo-random generator and Fisher–Yates
    shuffle. The same seed always yields the same permutation, across
    process restarts and platforms, so a persisted attempt can always be
    rebuilt for review.

Key Functions:
    - hash_seed(): 32-bit rolling hash of a seed string
    - shuffle(): Deterministic permutation of a sequence

Key Classes:
    - SeededRandom: Linear congruential generator bound to one seed

Dependencies:
    - math (std)

Used By:
    - builder.snapshot: Question and choice ordering

NOT cryptographically secure. Anyone who knows the seed can reconstruct
the layout; callers must keep the seed confidential to the attempt.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

# LCG parameters (period 233280)
_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


def _to_int32(value: int) -> int:
    """Wrap an integer to signed 32-bit."""
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def hash_seed(seed: str) -> int:
    """
    Hash a seed string to a non-negative integer.

    Rolling hash h = h * 31 + c in signed 32-bit arithmetic over the
    UTF-16 code units of the string. Python's built-in hash() is salted
    per process and cannot be used here.

    Args:
        seed: Seed string

    Returns:
        abs() of the 32-bit hash (0 <= result <= 2**31)
    """
    data = seed.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = _to_int32(_to_int32(h << 5) - h + code_unit)
    return abs(h)


class SeededRandom:
    """
    Deterministic generator for one shuffle.

    Create a fresh instance per operation; the state is never shared.

    Example:
        >>> rng = SeededRandom("attempt-42")
        >>> 0.0 <= rng.next() < 1.0
        True
    """

    __slots__ = ("_state",)

    def __init__(self, seed: str):
        self._state = hash_seed(seed)

    def next(self) -> float:
        """Advance the generator and return a value in [0, 1)."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """
        Fisher–Yates shuffle.

        Args:
            items: Sequence to permute (not modified)

        Returns:
            New list with the same elements in shuffled order
        """
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = math.floor(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result


def shuffle(items: Sequence[T], seed: str) -> list[T]:
    """
    Deterministically shuffle a sequence.

    Args:
        items: Sequence to permute (not modified)
        seed: Seed string

    Returns:
        Permutation of items; identical for identical (items, seed)
    """
    return SeededRandom(seed).shuffle(items)
