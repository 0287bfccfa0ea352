# src/txbench/db/__init__.py
"""Storage backend contract, built-in backends and instrumentation.

Components:
- protocols: DBProtocol, the capability set every backend provides
- base: BaseDB with configuration/lifecycle plumbing
- wrapper: DBWrapper, the measuring decorator
- memory: MemoryDB reference backend
- basic: BasicDB no-op backend
- hookspecs / factory: pluggy discovery and per-thread instantiation
"""

from txbench.db.base import BaseDB
from txbench.db.basic import BasicDB
from txbench.db.factory import BackendFactory, BuiltinBackendsPlugin, backend_registry
from txbench.db.memory import MemoryDB, MemoryStore
from txbench.db.protocols import DBProtocol
from txbench.db.wrapper import DBWrapper

__all__ = [
    "BackendFactory",
    "BaseDB",
    "BasicDB",
    "BuiltinBackendsPlugin",
    "DBProtocol",
    "DBWrapper",
    "MemoryDB",
    "MemoryStore",
    "backend_registry",
]
