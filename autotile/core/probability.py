"""
Terrain Autotile - Weighted Random Selection
"""

from __future__ import annotations

import random
from typing import Generic, Iterator, TypeVar

V = TypeVar("V")


class ProbabilitySet(Generic[V]):
    """
    A bag of values, each with a frequency, for weighted random choice.

    The chance of a value being drawn is its frequency divided by the
    total frequency of the set. Values with a frequency of zero or less
    are never stored.
    """

    def __init__(self):
        self._total: float = 0.0
        self._content: list[tuple[float, V]] = []

    def __iter__(self) -> Iterator[tuple[float, V]]:
        return iter(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def __repr__(self) -> str:
        return f"ProbabilitySet(total={self._total}, content={self._content!r})"

    def is_empty(self) -> bool:
        return not self._content

    def clear(self) -> None:
        self._total = 0.0
        self._content.clear()

    def add(self, frequency: float, value: V) -> None:
        """Add a value with the given frequency. Non-positive frequencies are ignored."""
        if frequency > 0.0:
            self._total += frequency
            self._content.append((frequency, value))

    def total_frequency(self) -> float:
        return self._total

    def average_frequency(self) -> float:
        if not self._content:
            return 0.0
        return self._total / len(self._content)

    def get_random(self, rng: random.Random | None = None) -> V | None:
        """
        Choose a value at random, weighted by frequency.

        Args:
            rng: Source of randomness with a ``random()`` method.
                 Uses the ``random`` module when omitted.

        Returns:
            The chosen value, or None if the set is empty.
        """
        if self._total <= 0.0:
            return None
        if rng is None:
            rng = random
        p = rng.random() * self._total
        for frequency, value in self._content:
            if p < frequency:
                return value
            p -= frequency
        # Rounding can leave p just past the last bucket
        return self._content[0][1]
