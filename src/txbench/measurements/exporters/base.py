# src/txbench/measurements/exporters/base.py
"""Shared output handling for the built-in exporters."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, TextIO

import structlog

from txbench.contracts.errors import MeasurementsExporterError
from txbench.measurements.report import RunSummary
from txbench.measurements.series import OperationSummary

logger = structlog.get_logger(__name__)


class StreamExporter:
    """Base for exporters that write lines to stdout, stderr or a file.

    Configuration options:
        output: "stdout" (default), "stderr", or a file path
        histogram: include per-millisecond histogram lines (default False)
    """

    _name = "stream"

    def __init__(self) -> None:
        self._stream: TextIO = sys.stdout
        self._owns_stream = False
        self._include_histogram = False

    @property
    def name(self) -> str:
        return self._name

    def configure(self, config: dict[str, Any]) -> None:
        output = config.get("output", "stdout")
        if not isinstance(output, str) or output == "":
            raise MeasurementsExporterError(self._name, f"'output' must be a non-empty string, got {output!r}")

        histogram = config.get("histogram", False)
        if not isinstance(histogram, bool):
            raise MeasurementsExporterError(self._name, f"'histogram' must be a boolean, got {type(histogram).__name__}")
        self._include_histogram = histogram

        if output == "stdout":
            self._stream = sys.stdout
        elif output == "stderr":
            self._stream = sys.stderr
        else:
            try:
                self._stream = Path(output).open("w", encoding="utf-8")
            except OSError as e:
                raise MeasurementsExporterError(self._name, f"Cannot open output file {output!r}: {e}") from e
            self._owns_stream = True

        logger.debug("exporter_configured", exporter=self._name, output=output, histogram=histogram)

    def export(self, summary: RunSummary) -> None:
        self._write("OVERALL", "RunTime(ms)", round(summary.runtime_millis, 3))
        self._write("OVERALL", "Throughput(ops/sec)", round(summary.throughput, 3))
        for operation in summary.snapshot:
            self._export_operation(operation)
        self._stream.flush()

    def _export_operation(self, operation: OperationSummary) -> None:
        name = operation.name
        self._write(name, "Operations", operation.operations)
        if operation.average_micros is not None:
            self._write(name, "AverageLatency(us)", round(operation.average_micros, 3))
            self._write(name, "MinLatency(us)", operation.min_micros)
            self._write(name, "MaxLatency(us)", operation.max_micros)
            self._write(name, "95thPercentileLatency(ms)", operation.p95_millis)
            self._write(name, "99thPercentileLatency(ms)", operation.p99_millis)
        for code, count in operation.return_codes.items():
            self._write(name, f"Return={code}", count)
        if self._include_histogram:
            for millis, count in enumerate(operation.histogram):
                self._write(name, str(millis), count)
            self._write(name, f">{len(operation.histogram)}", operation.overflow)

    def _write(self, metric: str, measurement: str, value: int | float | None) -> None:
        raise NotImplementedError

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False
            self._stream = sys.stdout
