# src/txbench/db/wrapper.py
"""Instrumentation wrapper around a "real" backend.

DBWrapper implements DBProtocol by composition: it holds the wrapped
backend and forwards every call to it unchanged. For the nine data
operations it also records one latency sample and one return-code
observation in the shared Measurements, tagged with the operation's fixed
name. Adding a backend never requires touching measurement code.

Behavior contract:
- Return codes are returned to the caller unchanged. Non-zero codes are
  never suppressed, transformed or retried.
- Configuration and lifecycle calls (set_properties, get_properties, init,
  cleanup) pass through unmeasured.
- Transaction brackets pass through unmeasured; the transactional workload
  measures the whole bracketed span as TRANSACTION.
- Exceptions raised by the wrapped backend propagate without a sample;
  backends report failures as status codes, so a raise is a bug.

Thread Safety:
    One wrapper per client thread, like the backend it wraps. Only the
    Measurements it reports to is shared.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from txbench.contracts.enums import OperationName
from txbench.contracts.results import Record
from txbench.db.protocols import DBProtocol
from txbench.engine.clock import DEFAULT_CLOCK, Clock, elapsed_micros
from txbench.measurements.measurements import Measurements


class DBWrapper:
    """Measures latency and counts return codes for a wrapped backend.

    Example:
        >>> db = DBWrapper(MemoryDB(), measurements)
        >>> db.init()
        >>> status = db.read("usertable", "user1", None, {})
        >>> measurements.snapshot().count("READ")
        1
    """

    def __init__(self, db: DBProtocol, measurements: Measurements, *, clock: Clock = DEFAULT_CLOCK) -> None:
        self._db = db
        self._measurements = measurements
        self._clock = clock

    @property
    def wrapped(self) -> DBProtocol:
        """The backend receiving the forwarded calls."""
        return self._db

    def _record(self, operation: OperationName, start_ns: int, status: int) -> int:
        end_ns = self._clock.monotonic_ns()
        self._measurements.measure(operation, elapsed_micros(start_ns, end_ns))
        self._measurements.report_return_code(operation, status)
        return status

    # -- configuration / lifecycle: pass-through ----------------------------

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._db.set_properties(properties)

    def get_properties(self) -> dict[str, Any]:
        return self._db.get_properties()

    def init(self) -> None:
        """Initialize the wrapped backend (one instance per client thread)."""
        self._db.init()

    def cleanup(self) -> None:
        """Clean up the wrapped backend (one instance per client thread)."""
        self._db.cleanup()

    # -- transaction brackets: pass-through ---------------------------------

    def start_transaction(self) -> int:
        return self._db.start_transaction()

    def commit_transaction(self) -> int:
        return self._db.commit_transaction()

    # -- data operations: measured ------------------------------------------

    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int:
        """Read a record, filling `result` with its field/value pairs.

        Returns:
            Zero on success, a non-zero error code on error
        """
        start_ns = self._clock.monotonic_ns()
        status = self._db.read(table, key, fields, result)
        return self._record(OperationName.READ, start_ns, status)

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        result: list[Record],
    ) -> int:
        """Range scan, appending one field/value dict per record to `result`.

        Returns:
            Zero on success, a non-zero error code on error
        """
        start_ns = self._clock.monotonic_ns()
        status = self._db.scan(table, start_key, record_count, fields, result)
        return self._record(OperationName.SCAN, start_ns, status)

    def scan_write(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        values: Record,
    ) -> int:
        start_ns = self._clock.monotonic_ns()
        status = self._db.scan_write(table, start_key, record_count, fields, values)
        return self._record(OperationName.SCANWRITE, start_ns, status)

    def update(self, table: str, key: str, values: Record) -> int:
        """Overwrite the fields in `values` on the record with this key.

        Returns:
            Zero on success, a non-zero error code on error
        """
        start_ns = self._clock.monotonic_ns()
        status = self._db.update(table, key, values)
        return self._record(OperationName.UPDATE, start_ns, status)

    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int:
        start_ns = self._clock.monotonic_ns()
        status = self._db.complex(table, read_keys, fields, read_result, write_keys, write_values)
        return self._record(OperationName.COMPLEX, start_ns, status)

    def update_multi(self, table: str, keys: list[str], values: Record) -> int:
        start_ns = self._clock.monotonic_ns()
        status = self._db.update_multi(table, keys, values)
        return self._record(OperationName.MULTIUPDATE, start_ns, status)

    def read_multi(
        self,
        table: str,
        keys: list[str],
        fields: set[str] | None,
        result: dict[str, Record],
    ) -> int:
        start_ns = self._clock.monotonic_ns()
        status = self._db.read_multi(table, keys, fields, result)
        return self._record(OperationName.MULTIREAD, start_ns, status)

    def insert(self, table: str, key: str, values: Record) -> int:
        """Insert a record with the given key and field/value pairs.

        Returns:
            Zero on success, a non-zero error code on error
        """
        start_ns = self._clock.monotonic_ns()
        status = self._db.insert(table, key, values)
        return self._record(OperationName.INSERT, start_ns, status)

    def delete(self, table: str, key: str) -> int:
        """Delete the record with the given key.

        Returns:
            Zero on success, a non-zero error code on error
        """
        start_ns = self._clock.monotonic_ns()
        status = self._db.delete(table, key)
        return self._record(OperationName.DELETE, start_ns, status)
