# src/txbench/measurements/factory.py
"""Factory functions for the measurement sink and its exporter.

Usage:
    measurements = create_measurements(settings.measurements)
    ...run...
    exporter = create_exporter(settings.measurements)
    try:
        exporter.export(summary)
    finally:
        exporter.close()
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from txbench.contracts.errors import MeasurementsExporterError
from txbench.core.config import MeasurementsSettings
from txbench.core.registry import discover_registry
from txbench.measurements.exporters import BuiltinExportersPlugin
from txbench.measurements.hookspecs import TxbenchExporterSpec
from txbench.measurements.measurements import Measurements
from txbench.measurements.protocols import MeasurementsExporterProtocol

logger = structlog.get_logger(__name__)


def create_measurements(settings: MeasurementsSettings) -> Measurements:
    """Create the per-run measurement sink."""
    return Measurements(histogram_buckets=settings.histogram_buckets)


def exporter_registry(exporter_plugins: Iterable[Any] = ()) -> dict[str, type[MeasurementsExporterProtocol]]:
    """Discover exporter classes from the builtin plugin and any extras."""
    return discover_registry(
        TxbenchExporterSpec,
        "txbench_get_exporters",
        [BuiltinExportersPlugin(), *exporter_plugins],
        MeasurementsExporterError,
    )


def create_exporter(
    settings: MeasurementsSettings,
    *,
    exporter_plugins: Iterable[Any] = (),
) -> MeasurementsExporterProtocol:
    """Instantiate and configure the exporter named in settings.

    Raises:
        MeasurementsExporterError: If the exporter name is unknown or its
            options are invalid.
    """
    registry = exporter_registry(exporter_plugins)
    try:
        exporter_class = registry[settings.exporter]
    except KeyError:
        raise MeasurementsExporterError(
            settings.exporter,
            f"Unknown exporter. Available exporters: {sorted(registry)}",
        ) from None

    exporter = exporter_class()
    exporter.configure(dict(settings.exporter_options))
    return exporter
