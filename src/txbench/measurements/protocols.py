# src/txbench/measurements/protocols.py
"""Protocol definitions for measurement exporters.

Exporters turn the final RunSummary into a report. They run once, after
every client thread has joined, so they need no thread safety.
"""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from txbench.measurements.report import RunSummary


@runtime_checkable
class MeasurementsExporterProtocol(Protocol):
    """Protocol for measurement exporters.

    Lifecycle:
        1. Discovery: txbench_get_exporters hook returns exporter classes
        2. Configuration: configure() called with exporter options
        3. Export: export() called once with the run summary
        4. Shutdown: close() called, must be idempotent

    Error handling:
        - configure() MUST raise MeasurementsExporterError on invalid options
        - export() may raise; a failed report is a failed run
    """

    @property
    def name(self) -> str:
        """Exporter name used in MeasurementsSettings.exporter."""
        ...

    def configure(self, config: dict[str, Any]) -> None:
        """Configure the exporter.

        Raises:
            MeasurementsExporterError: If options are invalid
        """
        ...

    def export(self, summary: "RunSummary") -> None:
        """Write the report for one run."""
        ...

    def close(self) -> None:
        """Release any resources (open files). Idempotent."""
        ...
