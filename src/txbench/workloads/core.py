# src/txbench/workloads/core.py
"""Core workload: one operation per unit of work.

Each do_transaction() call picks an operation type by the configured
proportions and issues it against the (instrumented) backend. Outcomes are
not inspected: a failed operation is visible only through the return-code
histogram the wrapper records.

Keys:
    Record keys are "user" + key number. Unless ordered_inserts is set, the
    key number is FNV-hashed first so inserts are spread across the key
    space instead of arriving in order.

Phases:
    Load phase (do_insert) inserts keys insert_start, insert_start+1, ...
    Run phase inserts continue from record_count, and reads choose among
    the first record_count keys (or the newest keys for "latest").
"""

from __future__ import annotations

import random
import string
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from txbench.contracts.enums import Operation, RequestDistribution
from txbench.contracts.errors import WorkloadError
from txbench.contracts.results import Record, is_ok
from txbench.core.config import WorkloadSettings
from txbench.db.protocols import DBProtocol
from txbench.generators import (
    CounterGenerator,
    DiscreteGenerator,
    IntegerGenerator,
    ScrambledZipfianGenerator,
    SkewedLatestGenerator,
    UniformIntegerGenerator,
    fnv_hash64,
)

logger = structlog.get_logger(__name__)

_VALUE_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True, slots=True)
class ThreadState:
    """Per-thread context created by init_thread()."""

    thread_id: int
    thread_count: int


class CoreWorkload:
    """Chooses and executes one operation per call.

    Thread Safety:
        One instance is shared by every client thread. Generators are
        created in init() and only read afterwards; the insert counters are
        thread-safe.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._settings: WorkloadSettings | None = None
        self._field_names: list[str] = []
        self._operations: DiscreteGenerator[Operation] | None = None
        self._key_chooser: IntegerGenerator | None = None
        self._field_chooser: UniformIntegerGenerator | None = None
        self._scan_length: UniformIntegerGenerator | None = None
        self._insert_sequence: CounterGenerator | None = None
        self._transaction_insert_sequence: CounterGenerator | None = None
        self._handlers: dict[Operation, Callable[[DBProtocol], int]] = {
            Operation.READ: self._do_read,
            Operation.UPDATE: self._do_update,
            Operation.INSERT: self._do_transaction_insert,
            Operation.SCAN: self._do_scan,
            Operation.SCAN_WRITE: self._do_scan_write,
            Operation.COMPLEX: self._do_complex,
            Operation.MULTI_UPDATE: self._do_update_multi,
            Operation.MULTI_READ: self._do_read_multi,
            Operation.DELETE: self._do_delete,
        }

    def init(self, settings: WorkloadSettings) -> None:
        if settings.record_count < 1:
            raise WorkloadError(f"record_count must be >= 1, got {settings.record_count}")
        try:
            self._operations = DiscreteGenerator(settings.proportions(), rng=self._rng)
        except ValueError as e:
            raise WorkloadError(f"Invalid operation proportions: {e}") from e

        self._settings = settings
        self._field_names = [f"field{i}" for i in range(settings.field_count)]
        self._field_chooser = UniformIntegerGenerator(0, settings.field_count - 1, rng=self._rng)
        self._scan_length = UniformIntegerGenerator(1, settings.max_scan_length, rng=self._rng)
        self._insert_sequence = CounterGenerator(settings.insert_start)
        self._transaction_insert_sequence = CounterGenerator(settings.record_count)
        self._key_chooser = self._build_key_chooser(settings)

        logger.debug(
            "core_workload_initialized",
            table=settings.table,
            record_count=settings.record_count,
            request_distribution=settings.request_distribution.value,
        )

    def _build_key_chooser(self, settings: WorkloadSettings) -> IntegerGenerator:
        last_key = settings.record_count - 1
        if settings.request_distribution == RequestDistribution.UNIFORM:
            return UniformIntegerGenerator(0, last_key, rng=self._rng)
        if settings.request_distribution == RequestDistribution.ZIPFIAN:
            return ScrambledZipfianGenerator(0, last_key, rng=self._rng)
        assert self._transaction_insert_sequence is not None
        return SkewedLatestGenerator(self._transaction_insert_sequence, rng=self._rng)

    @property
    def settings(self) -> WorkloadSettings:
        if self._settings is None:
            raise WorkloadError("Workload used before init()")
        return self._settings

    def init_thread(self, thread_id: int, thread_count: int) -> ThreadState:
        return ThreadState(thread_id=thread_id, thread_count=thread_count)

    def cleanup(self) -> None:
        """Nothing to release; generators are garbage collected."""

    # -- key and value construction -----------------------------------------

    def build_key_name(self, key_number: int) -> str:
        if not self.settings.ordered_inserts:
            key_number = fnv_hash64(key_number)
        return f"user{key_number}"

    def _random_value(self) -> str:
        return "".join(self._rng.choices(_VALUE_ALPHABET, k=self.settings.field_length))

    def build_values(self) -> Record:
        """A full record: every field with a fresh random value."""
        return {name: self._random_value() for name in self._field_names}

    def _build_update_values(self) -> Record:
        if self.settings.write_all_fields:
            return self.build_values()
        return {self._random_field(): self._random_value()}

    def _random_field(self) -> str:
        assert self._field_chooser is not None
        return self._field_names[self._field_chooser.next_int()]

    def _read_fields(self) -> set[str] | None:
        if self.settings.read_all_fields:
            return None
        return {self._random_field()}

    def _next_key(self) -> str:
        assert self._key_chooser is not None
        return self.build_key_name(self._key_chooser.next_int())

    def _distinct_keys(self) -> list[str]:
        """multi_key_count distinct keys, fewer only if the keyspace is smaller."""
        assert self._key_chooser is not None
        wanted = min(self.settings.multi_key_count, self.settings.record_count)
        keys: dict[str, None] = {}
        while len(keys) < wanted:
            keys[self.build_key_name(self._key_chooser.next_int())] = None
        return list(keys)

    # -- entry points -------------------------------------------------------

    def do_insert(self, db: DBProtocol, thread_state: ThreadState) -> bool:
        assert self._insert_sequence is not None
        key = self.build_key_name(self._insert_sequence.next_int())
        return is_ok(db.insert(self.settings.table, key, self.build_values()))

    def do_transaction(self, db: DBProtocol, thread_state: ThreadState) -> bool:
        if self._operations is None:
            raise WorkloadError("Workload used before init()")
        self._handlers[self._operations.next_value()](db)
        return True

    # -- operations ---------------------------------------------------------

    def _do_read(self, db: DBProtocol) -> int:
        return db.read(self.settings.table, self._next_key(), self._read_fields(), {})

    def _do_update(self, db: DBProtocol) -> int:
        return db.update(self.settings.table, self._next_key(), self._build_update_values())

    def _do_transaction_insert(self, db: DBProtocol) -> int:
        assert self._transaction_insert_sequence is not None
        key = self.build_key_name(self._transaction_insert_sequence.next_int())
        return db.insert(self.settings.table, key, self.build_values())

    def _do_scan(self, db: DBProtocol) -> int:
        assert self._scan_length is not None
        return db.scan(self.settings.table, self._next_key(), self._scan_length.next_int(), self._read_fields(), [])

    def _do_scan_write(self, db: DBProtocol) -> int:
        assert self._scan_length is not None
        return db.scan_write(
            self.settings.table,
            self._next_key(),
            self._scan_length.next_int(),
            self._read_fields(),
            self._build_update_values(),
        )

    def _do_complex(self, db: DBProtocol) -> int:
        return db.complex(
            self.settings.table,
            self._distinct_keys(),
            self._read_fields(),
            {},
            self._distinct_keys(),
            self._build_update_values(),
        )

    def _do_update_multi(self, db: DBProtocol) -> int:
        return db.update_multi(self.settings.table, self._distinct_keys(), self._build_update_values())

    def _do_read_multi(self, db: DBProtocol) -> int:
        return db.read_multi(self.settings.table, self._distinct_keys(), self._read_fields(), {})

    def _do_delete(self, db: DBProtocol) -> int:
        return db.delete(self.settings.table, self._next_key())
