# src/txbench/measurements/series.py
"""Per-operation latency and return-code aggregation.

One OperationSeries exists per operation name. Each series owns a lock, so
concurrent writers to different operation names never contend and writers
to the same name never lose an update.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class OperationSummary:
    """Immutable aggregate of one operation name's samples.

    Latencies are in microseconds except the percentiles, which come from
    the millisecond-bucket histogram and are reported in milliseconds.
    """

    name: str
    operations: int
    total_micros: int
    min_micros: int | None
    max_micros: int | None
    p95_millis: int | None
    p99_millis: int | None
    histogram: tuple[int, ...]
    overflow: int
    return_codes: dict[int, int] = field(default_factory=dict)

    @property
    def average_micros(self) -> float | None:
        if self.operations == 0:
            return None
        return self.total_micros / self.operations


class OperationSeries:
    """Lock-protected latency histogram plus return-code counter.

    Thread Safety:
        measure() and report_return_code() are safe to call from any number
        of threads. summary() takes the same lock and returns a copy.
    """

    def __init__(self, name: str, buckets: int) -> None:
        if buckets < 1:
            raise ValueError(f"buckets must be >= 1, got {buckets}")
        self.name = str(name)
        self._lock = threading.Lock()
        self._histogram = [0] * buckets
        self._overflow = 0
        self._operations = 0
        self._total_micros = 0
        self._min_micros: int | None = None
        self._max_micros: int | None = None
        self._return_codes: Counter[int] = Counter()

    def measure(self, micros: int) -> None:
        micros = max(0, micros)
        bucket = micros // 1000
        with self._lock:
            if bucket < len(self._histogram):
                self._histogram[bucket] += 1
            else:
                self._overflow += 1
            self._operations += 1
            self._total_micros += micros
            if self._min_micros is None or micros < self._min_micros:
                self._min_micros = micros
            if self._max_micros is None or micros > self._max_micros:
                self._max_micros = micros

    def report_return_code(self, code: int) -> None:
        with self._lock:
            self._return_codes[code] += 1

    def summary(self) -> OperationSummary:
        with self._lock:
            histogram = tuple(self._histogram)
            overflow = self._overflow
            operations = self._operations
            return OperationSummary(
                name=self.name,
                operations=operations,
                total_micros=self._total_micros,
                min_micros=self._min_micros,
                max_micros=self._max_micros,
                p95_millis=_percentile(histogram, overflow, operations, 0.95),
                p99_millis=_percentile(histogram, overflow, operations, 0.99),
                histogram=histogram,
                overflow=overflow,
                return_codes=dict(sorted(self._return_codes.items())),
            )


def _percentile(histogram: tuple[int, ...], overflow: int, operations: int, fraction: float) -> int | None:
    """Smallest millisecond bucket holding at least `fraction` of samples.

    Samples in the overflow bucket report as len(histogram).
    """
    if operations == 0:
        return None
    threshold = operations * fraction
    seen = 0
    for millis, count in enumerate(histogram):
        seen += count
        if seen >= threshold:
            return millis
    return len(histogram)
