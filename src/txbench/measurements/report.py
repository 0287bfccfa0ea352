# src/txbench/measurements/report.py
"""Run summary handed to measurement exporters."""

from __future__ import annotations

from dataclasses import dataclass

from txbench.measurements.measurements import MeasurementsSnapshot


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Outcome of one benchmark run.

    Attributes:
        operations: Units of work completed across all client threads
            (transactions for the transactional workload)
        elapsed_micros: Wall time from first thread start to last join
        snapshot: Aggregated measurements read after all threads joined
    """

    operations: int
    elapsed_micros: int
    snapshot: MeasurementsSnapshot

    @property
    def runtime_millis(self) -> float:
        return self.elapsed_micros / 1000

    @property
    def throughput(self) -> float:
        """Operations per second, 0.0 for an instantaneous run."""
        if self.elapsed_micros <= 0:
            return 0.0
        return self.operations * 1_000_000 / self.elapsed_micros
