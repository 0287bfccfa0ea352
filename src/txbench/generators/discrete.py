# src/txbench/generators/discrete.py
"""Weighted choice among labelled values."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Generic, TypeVar

T = TypeVar("T")


class DiscreteGenerator(Generic[T]):
    """Chooses a value with probability proportional to its weight.

    Zero-weight values are never chosen. Iteration order of `weights`
    decides tie-breaking at bucket boundaries, nothing else.
    """

    def __init__(self, weights: Mapping[T, float], *, rng: random.Random | None = None) -> None:
        if any(weight < 0 for weight in weights.values()):
            raise ValueError(f"weights must be >= 0, got {dict(weights)}")
        self._choices = [(value, weight) for value, weight in weights.items() if weight > 0]
        self._total = sum(weight for _, weight in self._choices)
        if self._total <= 0:
            raise ValueError("at least one weight must be positive")
        self._rng = rng if rng is not None else random.Random()
        self._last: T = self._choices[0][0]

    def next_value(self) -> T:
        point = self._rng.random() * self._total
        for value, weight in self._choices:
            if point < weight:
                self._last = value
                return value
            point -= weight
        # Floating point leftovers land on the final choice
        self._last = self._choices[-1][0]
        return self._last

    def last_value(self) -> T:
        return self._last
