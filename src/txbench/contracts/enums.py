# src/txbench/contracts/enums.py
"""Operation names and selector values shared across subsystem boundaries.

Operation names are the fixed vocabulary used to tag every latency sample
and return-code observation. Exporters print them verbatim.
"""

from enum import StrEnum


class OperationName(StrEnum):
    """Measurement tag for a backend operation or a whole transaction."""

    READ = "READ"
    SCAN = "SCAN"
    SCANWRITE = "SCANWRITE"
    UPDATE = "UPDATE"
    COMPLEX = "COMPLEX"
    MULTIUPDATE = "MULTIUPDATE"
    MULTIREAD = "MULTIREAD"
    INSERT = "INSERT"
    DELETE = "DELETE"
    TRANSACTION = "TRANSACTION"


class Operation(StrEnum):
    """Operation types the core workload can choose between.

    Values match the proportion field prefixes in WorkloadSettings
    (read -> read_proportion, scan_write -> scan_write_proportion, ...).
    """

    READ = "read"
    UPDATE = "update"
    INSERT = "insert"
    SCAN = "scan"
    SCAN_WRITE = "scan_write"
    COMPLEX = "complex"
    MULTI_UPDATE = "multi_update"
    MULTI_READ = "multi_read"
    DELETE = "delete"


class TransactionLengthDistribution(StrEnum):
    """Distributions allowed for drawing transaction lengths."""

    UNIFORM = "uniform"
    ZIPFIAN = "zipfian"


class RequestDistribution(StrEnum):
    """Distributions allowed for choosing which record an operation touches."""

    UNIFORM = "uniform"
    ZIPFIAN = "zipfian"
    LATEST = "latest"
