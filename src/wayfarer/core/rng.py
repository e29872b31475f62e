"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random


class RNG:
    """Wrapper around random.Random that provides deterministic helpers."""

    def __init__(self, seed: int) -> None:
        self._random = Random(seed)

    def randrange(self, start: int, stop: int | None = None) -> int:
        """Return a random integer from range(start, stop).

        An empty range collapses to its lower bound instead of raising, so
        small stat values never turn a bonus roll into an error.
        """
        if stop is None:
            start, stop = 0, start
        if stop <= start:
            return start
        return self._random.randrange(start, stop)
