# src/txbench/measurements/__init__.py
"""Measurement sink and reporting.

Components:
- measurements: Measurements, the thread-safe sink shared by all clients
- series: OperationSeries / OperationSummary per operation name
- report: RunSummary handed to exporters
- protocols: MeasurementsExporterProtocol
- hookspecs: pluggy hooks for exporter discovery
- exporters: built-in text and JSON-lines exporters
- factory: create_measurements(), create_exporter()
"""

from txbench.measurements.factory import create_exporter, create_measurements
from txbench.measurements.measurements import Measurements, MeasurementsSnapshot
from txbench.measurements.protocols import MeasurementsExporterProtocol
from txbench.measurements.report import RunSummary
from txbench.measurements.series import OperationSeries, OperationSummary

__all__ = [
    "Measurements",
    "MeasurementsExporterProtocol",
    "MeasurementsSnapshot",
    "OperationSeries",
    "OperationSummary",
    "RunSummary",
    "create_exporter",
    "create_measurements",
]
