# src/txbench/contracts/__init__.py
"""Shared contracts: enums, status codes and exceptions."""

from txbench.contracts.enums import (
    Operation,
    OperationName,
    RequestDistribution,
    TransactionLengthDistribution,
)
from txbench.contracts.errors import (
    DBError,
    MeasurementsExporterError,
    TxbenchError,
    UnknownBackendError,
    WorkloadError,
)
from txbench.contracts.results import ERROR, NOT_FOUND, OK, Record, is_ok

__all__ = [
    "ERROR",
    "NOT_FOUND",
    "OK",
    "DBError",
    "MeasurementsExporterError",
    "Operation",
    "OperationName",
    "Record",
    "RequestDistribution",
    "TransactionLengthDistribution",
    "TxbenchError",
    "UnknownBackendError",
    "WorkloadError",
    "is_ok",
]
