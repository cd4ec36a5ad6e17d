"""
Seedable random value source.

Every generator in patterndrill draws its randomness through a `RandomSource`, which keeps
the whole engine reproducible from a single seed.
"""

import random
from collections.abc import Sequence
from math import floor
from typing import Protocol, TypeVar

T = TypeVar("T")


class UnitRandom(Protocol):
    """Anything with a `random()` method returning a float in [0, 1)."""

    def random(self) -> float: ...


class RandomSource:
    """Uniform draws over numeric ranges backed by a `random.Random` compatible generator."""

    def __init__(self, seed: int | None = None, generator: UnitRandom | None = None):
        """
        Initialize the random source.

        Args:
            seed: Seed for a private `random.Random` instance (ignored when `generator` is given)
            generator: Optional object exposing `random()`, used instead of a seeded `random.Random`
        """
        self.seed = seed
        self._generator = generator if generator is not None else random.Random(seed)

    def random(self) -> float:
        return self._generator.random()

    def uniform(self, a: float, b: float) -> float:
        """
        Draw a float between `a` and `b`.

        The value is `a + r * (b - a)` clamped into the closed interval, so a generator that
        always returns 0.0 yields `a` at every draw.
        """
        value = a + self.random() * (b - a)
        low, high = (a, b) if a <= b else (b, a)
        return min(max(value, low), high)

    def integer(self, a: int, b: int) -> int:
        """Draw an integer in [a, b)."""
        return min(floor(self.uniform(a, b)), b - 1)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.integer(0, len(items))]
