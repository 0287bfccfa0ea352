# src/txbench/generators/integer.py
"""Uniform and counter integer generators."""

from __future__ import annotations

import random
import threading


class UniformIntegerGenerator:
    """Draws integers uniformly from the inclusive range [lower, upper]."""

    def __init__(self, lower: int, upper: int, *, rng: random.Random | None = None) -> None:
        if lower > upper:
            raise ValueError(f"lower bound {lower} exceeds upper bound {upper}")
        self.lower = lower
        self.upper = upper
        self._rng = rng if rng is not None else random.Random()
        self._last = lower

    def next_int(self) -> int:
        self._last = self._rng.randint(self.lower, self.upper)
        return self._last

    def last_int(self) -> int:
        return self._last


class CounterGenerator:
    """Hands out consecutive integers starting at `start`.

    Thread Safety:
        next_int() is safe to call from any thread; every caller receives a
        distinct value.
    """

    def __init__(self, start: int = 0) -> None:
        self._lock = threading.Lock()
        self._next = start

    def next_int(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def last_int(self) -> int:
        """The most recently issued value (start - 1 before the first draw)."""
        with self._lock:
            return self._next - 1
