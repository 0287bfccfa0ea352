# src/txbench/workloads/factory.py
"""Build the workload selected by ClientSettings.workload."""

from __future__ import annotations

import random

from txbench.core.config import BenchmarkSettings
from txbench.engine.clock import DEFAULT_CLOCK, Clock
from txbench.measurements.measurements import Measurements
from txbench.workloads.core import CoreWorkload
from txbench.workloads.protocols import WorkloadProtocol
from txbench.workloads.transactional import TransactionalWorkload


def create_workload(
    settings: BenchmarkSettings,
    measurements: Measurements,
    *,
    clock: Clock = DEFAULT_CLOCK,
    rng: random.Random | None = None,
) -> WorkloadProtocol:
    """Create and initialize the configured workload.

    Raises:
        WorkloadError: If the workload settings are unusable
    """
    workload: WorkloadProtocol
    if settings.client.workload == "transactional":
        workload = TransactionalWorkload(measurements, clock=clock, rng=rng)
    else:
        workload = CoreWorkload(rng=rng)
    workload.init(settings.workload)
    return workload
