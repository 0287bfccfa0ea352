# src/txbench/core/__init__.py
"""Core infrastructure: configuration, logging, plugin registry."""

from txbench.core.config import (
    BenchmarkSettings,
    ClientSettings,
    MeasurementsSettings,
    WorkloadSettings,
    load_settings,
)
from txbench.core.logging import configure_logging, get_logger

__all__ = [
    "BenchmarkSettings",
    "ClientSettings",
    "MeasurementsSettings",
    "WorkloadSettings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
