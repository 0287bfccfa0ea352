# src/txbench/db/base.py
"""Base class for backend implementations.

BaseDB supplies the configuration and lifecycle plumbing plus transaction
brackets that accept everything, so a backend only implements the nine
data operations. Backends are discovered by name through the
txbench_get_backends hook and must set the `_name` class attribute.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from txbench.contracts.results import OK, Record


class BaseDB(ABC):
    """Base class for storage backends.

    Lifecycle (one instance per client thread):
        set_properties(props) -> init() -> [operations] -> cleanup()

    Example:
        class MyDB(BaseDB):
            _name = "mydb"

            def read(self, table, key, fields, result):
                ...
                return OK
    """

    _name: str

    def __init__(self) -> None:
        self._properties: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._name

    def set_properties(self, properties: Mapping[str, Any]) -> None:
        self._properties = dict(properties)

    def get_properties(self) -> dict[str, Any]:
        return self._properties

    def init(self) -> None:
        """Per-instance setup. No-op by default."""

    def cleanup(self) -> None:
        """Per-instance teardown. No-op by default."""

    def start_transaction(self) -> int:
        return OK

    def commit_transaction(self) -> int:
        return OK

    @abstractmethod
    def read(self, table: str, key: str, fields: set[str] | None, result: Record) -> int: ...

    @abstractmethod
    def scan(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        result: list[Record],
    ) -> int: ...

    @abstractmethod
    def scan_write(
        self,
        table: str,
        start_key: str,
        record_count: int,
        fields: set[str] | None,
        values: Record,
    ) -> int: ...

    @abstractmethod
    def update(self, table: str, key: str, values: Record) -> int: ...

    @abstractmethod
    def complex(
        self,
        table: str,
        read_keys: list[str],
        fields: set[str] | None,
        read_result: dict[str, Record],
        write_keys: list[str],
        write_values: Record,
    ) -> int: ...

    @abstractmethod
    def update_multi(self, table: str, keys: list[str], values: Record) -> int: ...

    @abstractmethod
    def read_multi(
        self,
        table: str,
        keys: list[str],
        fields: set[str] | None,
        result: dict[str, Record],
    ) -> int: ...

    @abstractmethod
    def insert(self, table: str, key: str, values: Record) -> int: ...

    @abstractmethod
    def delete(self, table: str, key: str) -> int: ...
