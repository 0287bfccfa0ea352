# src/txbench/workloads/protocols.py
"""Protocol definition for workloads.

A workload decides which operation each unit of work issues and with which
keys and values. One workload instance is shared by all client threads;
per-thread context lives in the opaque thread state returned by
init_thread() and handed back unchanged on every call.

Lifecycle:
    init(settings) -> init_thread() per thread -> do_insert()/do_transaction()
    repeatedly -> cleanup()
"""

from __future__ import annotations

from typing import Any, Protocol

from txbench.core.config import WorkloadSettings
from txbench.db.protocols import DBProtocol


class WorkloadProtocol(Protocol):
    """Entry points the client harness drives."""

    def init(self, settings: WorkloadSettings) -> None:
        """Prepare shared generators. Called once, before any thread starts.

        Raises:
            WorkloadError: If the configuration is unusable
        """
        ...

    def init_thread(self, thread_id: int, thread_count: int) -> Any:
        """Create the opaque per-thread state."""
        ...

    def do_insert(self, db: DBProtocol, thread_state: Any) -> bool:
        """Insert one record (load phase). True if the insert succeeded."""
        ...

    def do_transaction(self, db: DBProtocol, thread_state: Any) -> bool:
        """Execute one unit of work (run phase)."""
        ...

    def cleanup(self) -> None:
        """Release shared resources after all threads finished."""
        ...
