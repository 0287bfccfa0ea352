# src/txbench/contracts/errors.py
"""Exception hierarchy for txbench.

Only configuration and lifecycle failures are exceptions. Ordinary backend
failures during a run are status codes (see contracts.results) and never
raise.
"""


class TxbenchError(Exception):
    """Base class for all txbench errors."""


class WorkloadError(TxbenchError):
    """Raised when a workload cannot be initialized from its configuration.

    Fatal: raised from init() before any operation or transaction runs.
    """


class DBError(TxbenchError):
    """Raised by a backend when init() or cleanup() fails."""


class UnknownBackendError(DBError):
    """Raised when a backend name is not present in the registry.

    Attributes:
        backend_name: The name that was requested
        available: Names that are registered
    """

    def __init__(self, backend_name: str, available: list[str]) -> None:
        self.backend_name = backend_name
        self.available = available
        super().__init__(f"Unknown backend '{backend_name}'. Available backends: {available}")


class MeasurementsExporterError(TxbenchError):
    """Raised when a measurements exporter is misconfigured or unknown.

    Attributes:
        exporter_name: Name of the exporter that failed
        message: Human-readable error description
    """

    def __init__(self, exporter_name: str, message: str) -> None:
        self.exporter_name = exporter_name
        self.message = message
        super().__init__(f"Exporter '{exporter_name}' failed: {message}")
