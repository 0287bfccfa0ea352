# src/txbench/contracts/results.py
"""Status codes and record shapes returned by backends.

Backends report outcomes as integer status codes instead of raising.
Zero is success; every other value is a backend-specific failure class
that ends up in the return-code histogram.
"""

from typing import Final

# A database row's queried or mutated columns.
Record = dict[str, str]

OK: Final[int] = 0
ERROR: Final[int] = -1
NOT_FOUND: Final[int] = 1


def is_ok(status: int) -> bool:
    """Return True when a backend status code denotes success."""
    return status == OK
