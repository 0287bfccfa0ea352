# src/txbench/measurements/exporters/text.py
"""Plain-text exporter: one `[METRIC], Measurement, value` line per figure."""

from __future__ import annotations

from txbench.measurements.exporters.base import StreamExporter


class TextExporter(StreamExporter):
    """Write measurements as comma-separated text lines.

    Example output:
        [OVERALL], RunTime(ms), 1042.5
        [TRANSACTION], Operations, 1000
        [READ], Return=0, 5012
    """

    _name = "text"

    def _write(self, metric: str, measurement: str, value: int | float | None) -> None:
        print(f"[{metric}], {measurement}, {value}", file=self._stream)
