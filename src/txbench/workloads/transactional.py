# src/txbench/workloads/transactional.py
"""Transactional workload: several base operations per measured transaction.

Configuration (WorkloadSettings):
    max_transaction_length: maximum number of operations per transaction
        (default 10)
    transaction_length_distribution: distribution used to choose the number
        of operations for each transaction, between 1 and
        max_transaction_length - "uniform" (default) or "zipfian"

Each do_transaction() call:
    1. draws n from the transaction-length generator
    2. opens a transaction on the backend
    3. runs the base workload's do_transaction() n times, sequentially,
       with the same backend handle and thread state
    4. commits
    5. records one TRANSACTION latency sample for the whole span

Return codes of the bracket calls and of the inner operations are never
inspected and never cause the commit to be skipped. Failures show up only
in the per-operation return-code histograms. The transaction itself always
reports success; the only failure this layer raises is a configuration
error from init().
"""

from __future__ import annotations

import random
from typing import Any

import structlog

from txbench.contracts.enums import OperationName, TransactionLengthDistribution
from txbench.contracts.errors import WorkloadError
from txbench.core.config import WorkloadSettings
from txbench.db.protocols import DBProtocol
from txbench.engine.clock import DEFAULT_CLOCK, Clock, elapsed_micros
from txbench.generators import IntegerGenerator, UniformIntegerGenerator, ZipfianGenerator
from txbench.measurements.measurements import Measurements
from txbench.workloads.core import CoreWorkload
from txbench.workloads.protocols import WorkloadProtocol

logger = structlog.get_logger(__name__)


class TransactionalWorkload:
    """Groups base-workload operations into start/commit brackets.

    The base workload is composed, not inherited: anything implementing
    WorkloadProtocol can supply the inner operations.

    Example:
        >>> workload = TransactionalWorkload(measurements)
        >>> workload.init(WorkloadSettings(max_transaction_length=4))
        >>> state = workload.init_thread(0, 1)
        >>> workload.do_transaction(instrumented_db, state)
        True
    """

    def __init__(
        self,
        measurements: Measurements,
        *,
        base: WorkloadProtocol | None = None,
        clock: Clock = DEFAULT_CLOCK,
        rng: random.Random | None = None,
    ) -> None:
        self._measurements = measurements
        self._rng = rng if rng is not None else random.Random()
        self._base: WorkloadProtocol = base if base is not None else CoreWorkload(rng=self._rng)
        self._clock = clock
        self._max_transaction_length: int | None = None
        self._transaction_length: IntegerGenerator | None = None

    @property
    def base(self) -> WorkloadProtocol:
        return self._base

    @property
    def max_transaction_length(self) -> int:
        if self._max_transaction_length is None:
            raise WorkloadError("Workload used before init()")
        return self._max_transaction_length

    def init(self, settings: WorkloadSettings) -> None:
        """Resolve the transaction-length generator, then init the base workload.

        Raises:
            WorkloadError: If transaction_length_distribution is not
                "uniform" or "zipfian", or the base workload rejects the
                settings. Nothing is initialized in either case.
        """
        if self._transaction_length is not None:
            raise WorkloadError("TransactionalWorkload.init() called twice")

        max_length = settings.max_transaction_length
        if max_length < 1:
            raise WorkloadError(f"max_transaction_length must be >= 1, got {max_length}")

        try:
            distribution = TransactionLengthDistribution(settings.transaction_length_distribution)
        except ValueError:
            raise WorkloadError(
                f'Distribution "{settings.transaction_length_distribution}" not allowed for transaction length'
            ) from None

        generator: IntegerGenerator
        if distribution == TransactionLengthDistribution.UNIFORM:
            generator = UniformIntegerGenerator(1, max_length, rng=self._rng)
        else:
            generator = ZipfianGenerator(1, max_length, rng=self._rng)

        self._base.init(settings)

        self._max_transaction_length = max_length
        self._transaction_length = generator
        logger.info(
            "transactional_workload_initialized",
            max_transaction_length=max_length,
            transaction_length_distribution=distribution.value,
        )

    def init_thread(self, thread_id: int, thread_count: int) -> Any:
        return self._base.init_thread(thread_id, thread_count)

    def do_insert(self, db: DBProtocol, thread_state: Any) -> bool:
        """Load phase inserts are not grouped into transactions."""
        return self._base.do_insert(db, thread_state)

    def next_transaction_length(self) -> int:
        if self._transaction_length is None:
            raise WorkloadError("Workload used before init()")
        return self._transaction_length.next_int()

    def do_transaction(self, db: DBProtocol, thread_state: Any) -> bool:
        operations = self.next_transaction_length()

        start_ns = self._clock.monotonic_ns()
        db.start_transaction()
        for _ in range(operations):
            self._base.do_transaction(db, thread_state)
        db.commit_transaction()
        end_ns = self._clock.monotonic_ns()

        self._measurements.measure(OperationName.TRANSACTION, elapsed_micros(start_ns, end_ns))
        return True

    def cleanup(self) -> None:
        self._base.cleanup()
