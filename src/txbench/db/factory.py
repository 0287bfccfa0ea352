# src/txbench/db/factory.py
"""Backend discovery and per-thread instantiation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from txbench.contracts.errors import DBError, UnknownBackendError
from txbench.core.registry import discover_registry
from txbench.db.basic import BasicDB
from txbench.db.hookspecs import TxbenchBackendSpec, hookimpl
from txbench.db.memory import MemoryDB
from txbench.db.protocols import DBProtocol

logger = structlog.get_logger(__name__)


class BuiltinBackendsPlugin:
    """Plugin that registers built-in backends."""

    @hookimpl
    def txbench_get_backends(self) -> list[type]:
        return [MemoryDB, BasicDB]


def _plugin_error(name: str, message: str) -> DBError:
    return DBError(f"Backend plugin '{name}' failed: {message}")


def backend_registry(backend_plugins: Iterable[Any] = ()) -> dict[str, type[DBProtocol]]:
    """Discover backend classes from the builtin plugin and any extras."""
    return discover_registry(
        TxbenchBackendSpec,
        "txbench_get_backends",
        [BuiltinBackendsPlugin(), *backend_plugins],
        _plugin_error,
    )


class BackendFactory:
    """Creates one configured, un-initialized backend per client thread.

    The registry is resolved once so every thread gets the same class.

    Raises:
        UnknownBackendError: At construction, if the name is not registered
    """

    def __init__(
        self,
        name: str,
        properties: Mapping[str, Any],
        *,
        backend_plugins: Iterable[Any] = (),
    ) -> None:
        registry = backend_registry(backend_plugins)
        try:
            self._backend_class = registry[name]
        except KeyError:
            raise UnknownBackendError(name, sorted(registry)) from None
        self._name = name
        self._properties = dict(properties)

    @property
    def name(self) -> str:
        return self._name

    def create(self) -> DBProtocol:
        backend = self._backend_class()
        backend.set_properties(self._properties)
        return backend
