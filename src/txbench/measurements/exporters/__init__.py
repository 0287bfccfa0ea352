# src/txbench/measurements/exporters/__init__.py
"""Built-in measurement exporters.

Available exporters:
- TextExporter ("text"): comma-separated lines
- JsonExporter ("json"): JSON lines

Plugin registration:
    The BuiltinExportersPlugin registers both via txbench_get_exporters.
"""

from txbench.measurements.exporters.json_lines import JsonExporter
from txbench.measurements.exporters.text import TextExporter
from txbench.measurements.hookspecs import hookimpl


class BuiltinExportersPlugin:
    """Plugin that registers built-in measurement exporters."""

    @hookimpl
    def txbench_get_exporters(self) -> list[type]:
        return [TextExporter, JsonExporter]


__all__ = [
    "BuiltinExportersPlugin",
    "JsonExporter",
    "TextExporter",
]
