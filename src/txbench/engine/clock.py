# src/txbench/engine/clock.py
"""Clock abstraction for latency measurement and throughput pacing.

Every latency sample is the difference of two readings from a Clock.
Production code uses SystemClock (the default); tests inject MockClock to
produce exact durations and to pace without real sleeps.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Abstract monotonic clock.

    Implementations:
    - SystemClock: time.monotonic_ns() and time.sleep() (production)
    - MockClock: manually advanced time (testing)
    """

    def monotonic_ns(self) -> int:
        """Return monotonic time in nanoseconds. Never goes backwards."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block the calling thread for the given number of seconds."""
        ...


class SystemClock:
    """Production clock backed by the system's monotonic counter."""

    def monotonic_ns(self) -> int:
        return time.monotonic_ns()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class MockClock:
    """Controllable clock for deterministic testing.

    sleep() advances the clock instead of blocking, so pacing logic can be
    exercised without wall-clock delays.

    Example:
        clock = MockClock()
        start = clock.monotonic_ns()
        clock.advance_micros(250)
        assert elapsed_micros(start, clock.monotonic_ns()) == 250
    """

    def __init__(self, start_ns: int = 0) -> None:
        self._current_ns = start_ns
        self.sleeps: list[float] = []

    def monotonic_ns(self) -> int:
        return self._current_ns

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self.advance(seconds)

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current_ns += int(seconds * 1_000_000_000)

    def advance_micros(self, micros: int) -> None:
        """Advance mock time by a whole number of microseconds."""
        if micros < 0:
            raise ValueError(f"Cannot advance time by negative amount: {micros}")
        self._current_ns += micros * 1_000


def elapsed_micros(start_ns: int, end_ns: int) -> int:
    """Whole microseconds between two monotonic readings, clamped to >= 0."""
    return max(0, (end_ns - start_ns) // 1_000)


DEFAULT_CLOCK: Clock = SystemClock()
