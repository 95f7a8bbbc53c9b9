"""Seedable RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random


class RNG:
    """Wrapper around random.Random shared by the deck, rolls and enemy intents."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def random(self) -> float:
        """Return the next random floating point number in the range [0.0, 1.0)."""
        return self._random.random()

    def roll(self, sides: int) -> int:
        """Roll a die with the given number of faces."""
        if sides < 1:
            raise ValueError("A die needs at least one face.")
        return self._random.randint(1, sides)
