# src/txbench/measurements/measurements.py
"""Measurements: the shared sink for latency samples and return codes.

Design:
- Explicitly constructed and passed to every client thread (no global
  singleton). Created once per run, read once after all threads join.
- One OperationSeries per operation name, created lazily on first use.
- Series creation is guarded by a registry lock; updates are guarded by
  the series' own lock.

Thread Safety:
    measure() and report_return_code() may be called concurrently from any
    number of threads without external synchronization. snapshot() is
    consistent per operation name; cross-name consistency is only
    guaranteed once writers have stopped.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass

import structlog

from txbench.measurements.series import OperationSeries, OperationSummary

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MeasurementsSnapshot:
    """Point-in-time view of every operation series, keyed by name."""

    operations: dict[str, OperationSummary]

    def __getitem__(self, name: str) -> OperationSummary:
        return self.operations[name]

    def __contains__(self, name: object) -> bool:
        return name in self.operations

    def __iter__(self) -> Iterator[OperationSummary]:
        return iter(self.operations.values())

    def count(self, name: str) -> int:
        """Latency samples recorded for a name (0 if never seen)."""
        summary = self.operations.get(name)
        return summary.operations if summary is not None else 0

    def return_code_count(self, name: str, code: int) -> int:
        """Observations of one status code for a name (0 if never seen)."""
        summary = self.operations.get(name)
        if summary is None:
            return 0
        return summary.return_codes.get(code, 0)


class Measurements:
    """Aggregates named latency samples and status codes across threads.

    Example:
        >>> measurements = Measurements()
        >>> measurements.measure("READ", 120)
        >>> measurements.report_return_code("READ", 0)
        >>> measurements.snapshot().count("READ")
        1
    """

    def __init__(self, histogram_buckets: int = 1000) -> None:
        """Initialize an empty sink.

        Args:
            histogram_buckets: Number of 1 ms latency buckets per series.
                Slower samples are counted in an overflow bucket.
        """
        if histogram_buckets < 1:
            raise ValueError(f"histogram_buckets must be >= 1, got {histogram_buckets}")
        self._histogram_buckets = histogram_buckets
        self._series: dict[str, OperationSeries] = {}
        self._registry_lock = threading.Lock()

    def _get_series(self, name: str) -> OperationSeries:
        series = self._series.get(name)
        if series is not None:
            return series
        with self._registry_lock:
            # Another thread may have created it while we waited
            series = self._series.get(name)
            if series is None:
                series = OperationSeries(name, self._histogram_buckets)
                self._series[name] = series
                logger.debug("measurement_series_created", operation=name)
            return series

    def measure(self, operation_name: str, duration_micros: int) -> None:
        """Record one latency sample. Negative durations are clamped to 0."""
        self._get_series(operation_name).measure(duration_micros)

    def report_return_code(self, operation_name: str, code: int) -> None:
        """Record one status-code observation."""
        self._get_series(operation_name).report_return_code(code)

    def snapshot(self) -> MeasurementsSnapshot:
        """Return summaries for every operation name seen so far."""
        with self._registry_lock:
            series = list(self._series.values())
        return MeasurementsSnapshot(operations={s.name: s.summary() for s in sorted(series, key=lambda s: s.name)})
