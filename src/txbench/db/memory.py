# src/txbench/db/memory.py
"""In-memory reference backend.

All MemoryDB instances configured with the same `memory.store` property
share one MemoryStore, so client threads see each other's writes the way
they would with a real database. The store is guarded by a single lock;
MemoryDB instances themselves are per-thread and unsynchronized.

Transactions are brackets only: writes are applied immediately and there
is no isolation or rollback. Opening a transaction twice, or committing
without one, returns ERROR.
"""

from __future__ import annotations

import bisect
import threading

import structlog

from txbench.contracts.results import ERROR, NOT_FOUND, OK, Record
from txbench.db.base import BaseDB

logger = structlog.get_logger(__name__)


def _project(record: Record, fields: set[str] | None) -> Record:
    if fields is None:
        return dict(record)
    return {name: value for name, value in record.items() if name in fields}


class MemoryStore:
    """Thread-safe table -> key -> record storage."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables: dict[str, dict[str, Record]] = {}

    def get(self, table: str, key: str, fields: set[str] | None) -> Record | None:
        with self._lock:
            record = self._tables.get(table, {}).get(key)
            return None if record is None else _project(record, fields)

    def put(self, table: str, key: str, values: Record) -> None:
        with self._lock:
            self._tables.setdefault(table, {})[key] = dict(values)

    def merge(self, table: str, key: str, values: Record) -> bool:
        """Overwrite fields of an existing record. False if the key is absent."""
        with self._lock:
            record = self._tables.get(table, {}).get(key)
            if record is None:
                return False
            record.update(values)
            return True

    def remove(self, table: str, key: str) -> bool:
        with self._lock:
            return self._tables.get(table, {}).pop(key, None) is not None

    def range_keys(self, table: str, start_key: str, record_count: int) -> list[str]:
        """Up to record_count keys in sorted order, starting at start_key."""
        with self._lock:
            keys = sorted(self._tables.get(table, {}))
        start = bisect.bisect_left(keys, start_key)
        return keys[start : start + record_count]

    def size(self, table: str) -> int:
        with self._lock:
            return len(self._tables.get(table, {}))


_stores: dict[str, MemoryStore] = {}
_stores_lock = threading.Lock()


def get_store(name: str) -> MemoryStore:
    """Return the process-wide store with this name, creating it on first use."""
    with _stores_lock:
        store = _stores.get(name)
        if store is None:
            store = MemoryStore()
            _stores[name] = store
        return store


def reset_stores() -> None:
    """Drop every named store (for tests)."""
    with _stores_lock:
        _stores.clear()


class MemoryDB(BaseDB):
    """Backend that keeps records in a shared in-process MemoryStore.

    Configuration options:
        memory.store: name of the shared store (default "default")

    Status codes:
        OK on success, NOT_FOUND when a key (or every key of a multi-key
        read) is missing, ERROR on a misplaced transaction bracket.
    """

    _name = "memory"

    def __init__(self) -> None:
        super().__init__()
        self._store: MemoryStore | None = None
        self._in_transaction = False

    @property
    def store(self) -> MemoryStore:
        if self._store is None:
            raise RuntimeError("MemoryDB used before init()")
        return self._store

    def init(self) -> None:
        store_name = str(self._properties.get("memory.store", "default"))
        self._store = get_store(store_name)
        logger.debug("memory_db_initialized", store=store_name)

    def cleanup(self) -> None:
        self._store = None
        self._in_transaction = False

    def start_transaction(self) -> int:
        if self._in_transaction:
            return ERROR
        self._in_transaction = True
        return OK

    def commit_transaction(self) -> int:
        if not self._in_transaction:
            return ERROR
        self._in_transaction = False
        return OK

    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int:
        record = self.store.get(table, key, fields)
        if record is None:
            return NOT_FOUND
        result.update(record)
        return OK

    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        result: list[Record],
    ) -> int:
        for key in self.store.range_keys(table, start_key, record_count):
            record = self.store.get(table, key, fields)
            # Deleted between listing and reading
            if record is not None:
                result.append(record)
        return OK

    def scan_write(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        values: Record,
    ) -> int:
        for key in self.store.range_keys(table, start_key, record_count):
            self.store.merge(table, key, values)
        return OK

    def update(self, table: str, key: str, values: Record) -> int:
        return OK if self.store.merge(table, key, values) else NOT_FOUND

    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int:
        read_status = self.read_multi(table, read_keys, fields, read_result)
        write_status = self.update_multi(table, write_keys, write_values)
        return read_status if read_status != OK else write_status

    def update_multi(self, table: str, keys: list[str], values: Record) -> int:
        missing = [key for key in keys if not self.store.merge(table, key, values)]
        return NOT_FOUND if keys and len(missing) == len(keys) else OK

    def read_multi(
        self,
        table: str,
        keys: list[str],
        fields: set[str] | None,
        result: dict[str, Record],
    ) -> int:
        for key in keys:
            record = self.store.get(table, key, fields)
            if record is not None:
                result[key] = record
        return NOT_FOUND if keys and not result else OK

    def insert(self, table: str, key: str, values: Record) -> int:
        self.store.put(table, key, values)
        return OK

    def delete(self, table: str, key: str) -> int:
        return OK if self.store.remove(table, key) else NOT_FOUND
