# src/txbench/db/basic.py
"""Backend that accepts every call without storing anything.

Useful for measuring the harness itself and for smoke-testing workload
configuration. Each call optionally sleeps for a random simulated delay
and logs its arguments at DEBUG level.
"""

from __future__ import annotations

import random
from typing import Any

import structlog

from txbench.contracts.errors import DBError
from txbench.contracts.results import OK, Record
from txbench.db.base import BaseDB
from txbench.engine.clock import DEFAULT_CLOCK, Clock

logger = structlog.get_logger(__name__)


class BasicDB(BaseDB):
    """No-op backend.

    Configuration options:
        basic.verbose: log every call (default False)
        basic.simulate_delay_ms: upper bound of a uniform random delay per call
            (default 0, no delay)
    """

    _name = "basic"

    def __init__(self, *, clock: Clock = DEFAULT_CLOCK, rng: random.Random | None = None) -> None:
        super().__init__()
        self._clock = clock
        self._rng = rng if rng is not None else random.Random()
        self._verbose = False
        self._delay_ms = 0

    def init(self) -> None:
        self._verbose = str(self._properties.get("basic.verbose", "false")).lower() == "true"
        raw_delay = self._properties.get("basic.simulate_delay_ms", 0)
        try:
            self._delay_ms = int(raw_delay)
        except (TypeError, ValueError) as e:
            raise DBError(f"basic.simulate_delay_ms must be an integer, got {raw_delay!r}") from e
        if self._delay_ms < 0:
            raise DBError(f"basic.simulate_delay_ms must be >= 0, got {self._delay_ms}")

    def _call(self, operation: str, **arguments: Any) -> int:
        if self._delay_ms > 0:
            self._clock.sleep(self._rng.randint(0, self._delay_ms) / 1000)
        if self._verbose:
            logger.debug("basic_db_call", operation=operation, **arguments)
        return OK

    def start_transaction(self) -> int:
        return self._call("start_transaction")

    def commit_transaction(self) -> int:
        return self._call("commit_transaction")

    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int:
        return self._call("read", table=table, key=key, fields=fields)

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        result: list[Record],
    ) -> int:
        return self._call("scan", table=table, start_key=start_key, record_count=record_count, fields=fields)

    def scan_write(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        values: Record,
    ) -> int:
        return self._call("scan_write", table=table, start_key=start_key, record_count=record_count, fields=fields)

    def update(self, table: str, key: str, values: Record) -> int:
        return self._call("update", table=table, key=key, values=values)

    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int:
        return self._call("complex", table=table, read_keys=read_keys, write_keys=write_keys)

    def update_multi(self, table: str, keys: list[str], values: Record) -> int:
        return self._call("update_multi", table=table, keys=keys)

    def read_multi(
        self,
        table: str,
        keys: list[str],
        fields: set[str] | None,
        result: dict[str, Record],
    ) -> int:
        return self._call("read_multi", table=table, keys=keys, fields=fields)

    def insert(self, table: str, key: str, values: Record) -> int:
        return self._call("insert", table=table, key=key, values=values)

    def delete(self, table: str, key: str) -> int:
        return self._call("delete", table=table, key=key)
