# src/txbench/engine/__init__.py
"""Client harness: clock abstraction and the threaded benchmark runner.

Import the runner from txbench.engine.client; this package only re-exports
the clock, which backends depend on.
"""

from txbench.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock, elapsed_micros

__all__ = [
    "DEFAULT_CLOCK",
    "Clock",
    "MockClock",
    "SystemClock",
    "elapsed_micros",
]
