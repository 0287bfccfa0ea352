# src/txbench/workloads/__init__.py
"""Workloads: what each unit of work does.

- core: CoreWorkload, one proportion-chosen operation per call
- transactional: TransactionalWorkload, n core operations per bracketed,
  measured transaction
"""

from txbench.workloads.core import CoreWorkload, ThreadState
from txbench.workloads.factory import create_workload
from txbench.workloads.protocols import WorkloadProtocol
from txbench.workloads.transactional import TransactionalWorkload

__all__ = [
    "CoreWorkload",
    "ThreadState",
    "TransactionalWorkload",
    "WorkloadProtocol",
    "create_workload",
]
