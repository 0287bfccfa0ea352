# src/txbench/db/hookspecs.py
"""pluggy hook specifications for storage backends.

Usage (implementing a backend plugin):
    from txbench.db.hookspecs import hookimpl

    class MyBackendPlugin:
        @hookimpl
        def txbench_get_backends(self):
            return [MyDB]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from txbench.db.base import BaseDB

PROJECT_NAME = "txbench"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TxbenchBackendSpec:
    """Hook specifications for backend plugins."""

    @hookspec
    def txbench_get_backends(self) -> list[type["BaseDB"]]:  # type: ignore[empty-body]
        """Return backend classes (not instances)."""
