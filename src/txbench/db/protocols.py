# src/txbench/db/protocols.py
"""Protocol definition for storage backends.

Any storage system under benchmark is driven only through DBProtocol. The
instrumentation wrapper implements the same protocol, so workloads cannot
tell a measured backend from a bare one.

Status codes:
    Every data operation and transaction bracket returns an int status
    code (contracts.results.OK on success). Ordinary failures are returned,
    never raised. Only init() and cleanup() may raise, with DBError.

Out-parameters:
    read/scan/read_multi/complex fill a caller-supplied container instead of
    returning rows, so the return value stays a status code.

Threading:
    One instance per client thread. Instances are never shared across
    threads, so implementations need no locking of their own state.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from txbench.contracts.results import Record


@runtime_checkable
class DBProtocol(Protocol):
    """Capability set every backend and the instrumentation wrapper provide."""

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        """Set backend-specific configuration before init()."""
        ...

    def get_properties(self) -> dict[str, Any]:
        """Return the backend-specific configuration."""
        ...

    def init(self) -> None:
        """Initialize per-instance state (connections, sessions).

        Raises:
            DBError: If the backend cannot be initialized
        """
        ...

    def cleanup(self) -> None:
        """Release per-instance state.

        Raises:
            DBError: If resources cannot be released cleanly
        """
        ...

    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int:
        """Read one record into `result` (all fields if `fields` is None)."""
        ...

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        result: list[Record],
    ) -> int:
        """Read up to `record_count` records in key order starting at `start_key`."""
        ...

    def scan_write(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        values: Record,
    ) -> int:
        """Scan a key range and write `values` into every record in it."""
        ...

    def update(self, table: str, key: str, values: Record) -> int:
        """Overwrite the given fields of one record."""
        ...

    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int:
        """Read several records and write several records in one call."""
        ...

    def update_multi(self, table: str, keys: list[str], values: Record) -> int:
        """Write `values` into every record in `keys`."""
        ...

    def read_multi(
        self,
        table: str,
        keys: list[str],
        fields: set[str] | None,
        result: dict[str, Record],
    ) -> int:
        """Read several records into `result`, keyed by record key."""
        ...

    def insert(self, table: str, key: str, values: Record) -> int:
        """Insert one record."""
        ...

    def delete(self, table: str, key: str) -> int:
        """Delete one record."""
        ...

    def start_transaction(self) -> int:
        """Open a client-side transaction."""
        ...

    def commit_transaction(self) -> int:
        """Commit the open client-side transaction."""
        ...
