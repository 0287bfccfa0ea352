# src/txbench/measurements/hookspecs.py
"""pluggy hook specifications for measurement exporters.

Usage (implementing an exporter plugin):
    from txbench.measurements.hookspecs import hookimpl

    class MyExporterPlugin:
        @hookimpl
        def txbench_get_exporters(self):
            return [MyExporter]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from txbench.measurements.protocols import MeasurementsExporterProtocol

PROJECT_NAME = "txbench"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TxbenchExporterSpec:
    """Hook specifications for measurement exporter plugins."""

    @hookspec
    def txbench_get_exporters(self) -> list[type["MeasurementsExporterProtocol"]]:  # type: ignore[empty-body]
        """Return measurement exporter classes (not instances)."""
