# src/txbench/measurements/exporters/json_lines.py
"""JSON-lines exporter: one object per figure, for machine processing."""

from __future__ import annotations

import json

from txbench.measurements.exporters.base import StreamExporter


class JsonExporter(StreamExporter):
    """Write measurements as JSON lines.

    Example output:
        {"metric": "READ", "measurement": "Operations", "value": 5012}
    """

    _name = "json"

    def _write(self, metric: str, measurement: str, value: int | float | None) -> None:
        line = json.dumps({"metric": metric, "measurement": measurement, "value": value})
        print(line, file=self._stream)
