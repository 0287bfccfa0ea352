# src/txbench/generators/zipfian.py
"""Zipfian-distributed integer generators.

ZipfianGenerator implements the algorithm from Gray et al., "Quickly
Generating Billion-Record Synthetic Databases" (SIGMOD 1994). The smallest
item is the most popular; popularity falls off with rank according to the
zipfian constant (0.99 by default).

zeta(n, theta) costs O(n) to compute. It is computed once at construction
and extended incrementally when next_long() is asked for a larger item
count. A smaller item count reuses the larger cached zeta; draws are clamped
to the requested range.
"""

from __future__ import annotations

import random
import threading

from txbench.generators.base import fnv_hash64
from txbench.generators.integer import CounterGenerator

ZIPFIAN_CONSTANT = 0.99


def zeta(count: int, theta: float, *, start: int = 0, initial_sum: float = 0.0) -> float:
    """Sum of 1 / i**theta for i in (start, count], added to initial_sum."""
    total = initial_sum
    for i in range(start, count):
        total += 1.0 / (i + 1) ** theta
    return total


class ZipfianGenerator:
    """Draws integers from [lower, upper] with zipfian skew towards lower.

    Thread Safety:
        next_int() may be called from several threads; the only shared
        mutable state (the cached zeta for a larger item count) is guarded
        by a lock.
    """

    def __init__(
        self,
        lower: int,
        upper: int,
        *,
        zipfian_constant: float = ZIPFIAN_CONSTANT,
        zetan: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if lower > upper:
            raise ValueError(f"lower bound {lower} exceeds upper bound {upper}")
        if not 0 < zipfian_constant < 1:
            raise ValueError(f"zipfian_constant must be in (0, 1), got {zipfian_constant}")
        self.lower = lower
        self.upper = upper
        self._items = upper - lower + 1
        self._theta = zipfian_constant
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.Lock()

        self._zeta2theta = zeta(2, self._theta)
        self._alpha = 1.0 / (1.0 - self._theta)
        self._count_for_zeta = self._items
        self._zetan = zetan if zetan is not None else zeta(self._items, self._theta)
        self._eta = self._compute_eta(self._items, self._zetan)
        self._last = lower

    def _compute_eta(self, items: int, zetan: float) -> float:
        # With one or two items the first two branches of next_long always
        # decide, and the formula's denominator would be zero.
        if items <= 2:
            return 0.0
        return (1 - (2.0 / items) ** (1 - self._theta)) / (1 - self._zeta2theta / zetan)

    def _zeta_state(self, item_count: int) -> tuple[float, float]:
        with self._lock:
            # The cached zeta only grows; smaller counts reuse it.
            if item_count > self._count_for_zeta:
                self._zetan = zeta(
                    item_count,
                    self._theta,
                    start=self._count_for_zeta,
                    initial_sum=self._zetan,
                )
                self._count_for_zeta = item_count
                self._eta = self._compute_eta(item_count, self._zetan)
            return self._zetan, self._eta

    def next_long(self, item_count: int) -> int:
        """Draw from [lower, lower + item_count - 1]."""
        if item_count < 1:
            raise ValueError(f"item_count must be >= 1, got {item_count}")
        zetan, eta = self._zeta_state(item_count)
        u = self._rng.random()
        uz = u * zetan
        if uz < 1.0:
            value = self.lower
        elif uz < 1.0 + 0.5**self._theta:
            value = self.lower + 1
        else:
            value = self.lower + int(item_count * (eta * u - eta + 1) ** self._alpha)
        value = min(value, self.lower + item_count - 1)
        self._last = value
        return value

    def next_int(self) -> int:
        return self.next_long(self._items)

    def last_int(self) -> int:
        return self._last


class ScrambledZipfianGenerator:
    """Zipfian popularity with popular items scattered across the range.

    Draws from a zipfian distribution over a very large item space and maps
    the draw onto [lower, upper] through an FNV hash, so the hot items are
    not clustered at the low end of the keyspace.
    """

    # zeta(10_000_000_000, 0.99), precomputed: computing it takes minutes
    ZETAN = 26.46902820178302
    ITEM_COUNT = 10_000_000_000

    def __init__(self, lower: int, upper: int, *, rng: random.Random | None = None) -> None:
        if lower > upper:
            raise ValueError(f"lower bound {lower} exceeds upper bound {upper}")
        self.lower = lower
        self.upper = upper
        self._items = upper - lower + 1
        self._zipfian = ZipfianGenerator(0, self.ITEM_COUNT - 1, zetan=self.ZETAN, rng=rng)
        self._last = lower

    def next_int(self) -> int:
        value = self._zipfian.next_int()
        self._last = self.lower + fnv_hash64(value) % self._items
        return self._last

    def last_int(self) -> int:
        return self._last


class SkewedLatestGenerator:
    """Favors the most recently issued values of a counter.

    Used with the insert-sequence counter so reads concentrate on records
    that were inserted most recently.
    """

    def __init__(self, basis: CounterGenerator, *, rng: random.Random | None = None) -> None:
        self._basis = basis
        newest = max(basis.last_int(), 0)
        self._zipfian = ZipfianGenerator(0, newest, rng=rng)
        self._last = newest

    def next_int(self) -> int:
        newest = self._basis.last_int()
        if newest < 0:
            self._last = 0
            return 0
        self._last = newest - self._zipfian.next_long(newest + 1)
        return self._last

    def last_int(self) -> int:
        return self._last
