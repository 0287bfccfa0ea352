# tests/conftest.py
"""Shared test fixtures and test doubles.

Test Doubles:
- RecordingDB: DBProtocol implementation that logs every call and returns
  configurable status codes
- TickingClock: MockClock that advances a fixed step on every reading, so
  every measured span has a known, non-zero duration
- FixedBaseWorkload: WorkloadProtocol stub issuing exactly one READ per
  do_transaction() call

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator, Mapping
from typing import Any

import pytest
from hypothesis import Verbosity, settings

from txbench.contracts.results import OK, Record
from txbench.db.memory import reset_stores
from txbench.engine.clock import MockClock
from txbench.measurements.measurements import Measurements

settings.register_profile("ci", max_examples=100, deadline=None)
settings.register_profile("nightly", max_examples=1000, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose, deadline=None)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Test Doubles
# =============================================================================


class RecordingDB:
    """DBProtocol double that records calls and returns scripted codes.

    Every call is appended to `calls` as (method_name, args). Data
    operations return `status` unless `statuses` maps the method name to
    another code. Transaction brackets return `bracket_status`.
    """

    _name = "recording"

    def __init__(
        self,
        *,
        status: int = OK,
        statuses: Mapping[str, int] | None = None,
        bracket_status: int = OK,
        clock: MockClock | None = None,
        op_micros: int = 0,
    ) -> None:
        self.status = status
        self.statuses = dict(statuses or {})
        self.bracket_status = bracket_status
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.properties: dict[str, Any] = {}
        self.init_count = 0
        self.cleanup_count = 0
        self._clock = clock
        self._op_micros = op_micros
        self._lock = threading.Lock()

    def _log(self, method: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((method, args))

    def _data(self, method: str, *args: Any) -> int:
        self._log(method, *args)
        if self._clock is not None and self._op_micros:
            self._clock.advance_micros(self._op_micros)
        return self.statuses.get(method, self.status)

    @property
    def method_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._log("set_properties", dict(properties))
        self.properties = dict(properties)

    def get_properties(self) -> dict[str, Any]:
        self._log("get_properties")
        return self.properties

    def init(self) -> None:
        self._log("init")
        self.init_count += 1

    def cleanup(self) -> None:
        self._log("cleanup")
        self.cleanup_count += 1

    def start_transaction(self) -> int:
        self._log("start_transaction")
        return self.bracket_status

    def commit_transaction(self) -> int:
        self._log("commit_transaction")
        return self.bracket_status

    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int:
        return self._data("read", table, key, fields, result)

    def scan(self, table: str, start_key: str, record_count: int, fields: set[str] | None, result: list[Record]) -> int:
        return self._data("scan", table, start_key, record_count, fields, result)

    def scan_write(self, table: str, start_key: str, record_count: int, fields: set[str] | None, values: Record) -> int:
        return self._data("scan_write", table, start_key, record_count, fields, values)

    def update(self, table: str, key: str, values: Record) -> int:
        return self._data("update", table, key, values)

    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int:
        return self._data("complex", table, read_keys, fields, read_result, write_keys, write_values)

    def update_multi(self, table: str, keys: list[str], values: Record) -> int:
        return self._data("update_multi", table, keys, values)

    def read_multi(self, table: str, keys: list[str], fields: set[str] | None, result: dict[str, Record]) -> int:
        return self._data("read_multi", table, keys, fields, result)

    def insert(self, table: str, key: str, values: Record) -> int:
        return self._data("insert", table, key, values)

    def delete(self, table: str, key: str) -> int:
        return self._data("delete", table, key)


class TickingClock(MockClock):
    """MockClock that advances `step_micros` after every reading."""

    def __init__(self, step_micros: int = 10) -> None:
        super().__init__()
        self._step_micros = step_micros
        self._tick_lock = threading.Lock()

    def monotonic_ns(self) -> int:
        with self._tick_lock:
            now = super().monotonic_ns()
            self.advance_micros(self._step_micros)
            return now


class FixedBaseWorkload:
    """WorkloadProtocol stub: every do_transaction() issues one read."""

    def __init__(self) -> None:
        self.init_calls = 0
        self.cleanup_calls = 0
        self.transactions = 0
        self._lock = threading.Lock()

    def init(self, settings: Any) -> None:
        self.init_calls += 1

    def init_thread(self, thread_id: int, thread_count: int) -> tuple[int, int]:
        return (thread_id, thread_count)

    def do_insert(self, db: Any, thread_state: Any) -> bool:
        return db.insert("usertable", f"user{thread_state[0]}", {"field0": "x"}) == OK

    def do_transaction(self, db: Any, thread_state: Any) -> bool:
        with self._lock:
            self.transactions += 1
        db.read("usertable", "user1", None, {})
        return True

    def cleanup(self) -> None:
        self.cleanup_calls += 1


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_memory_stores() -> Iterator[None]:
    """MemoryDB stores are process-wide; isolate them per test."""
    reset_stores()
    yield
    reset_stores()


@pytest.fixture
def measurements() -> Measurements:
    return Measurements()


@pytest.fixture
def mock_clock() -> MockClock:
    return MockClock()


@pytest.fixture
def recording_db() -> RecordingDB:
    return RecordingDB()
