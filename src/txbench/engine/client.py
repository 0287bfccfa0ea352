# src/txbench/engine/client.py
"""Threaded client harness.

run_benchmark() builds one shared workload and one shared Measurements,
then starts one ClientThread per configured client. Each thread owns its
own backend instance wrapped in its own DBWrapper; nothing but the
workload generators and the Measurements is shared.

Failure handling:
- Configuration errors (unknown backend, WorkloadError) are raised before
  any thread starts.
- A backend that fails init() or cleanup() with DBError, or any unexpected
  exception inside a thread, stops that thread. The error is re-raised
  from run_benchmark() after every thread has joined.
- Non-zero status codes are not errors; they are counted by DBWrapper.
"""

from __future__ import annotations

import random
import threading
from collections.abc import Iterable
from typing import Any

import structlog

from txbench.core.config import BenchmarkSettings
from txbench.db.factory import BackendFactory
from txbench.db.protocols import DBProtocol
from txbench.db.wrapper import DBWrapper
from txbench.engine.clock import DEFAULT_CLOCK, Clock, elapsed_micros
from txbench.measurements.factory import create_measurements
from txbench.measurements.measurements import Measurements
from txbench.measurements.report import RunSummary
from txbench.workloads.factory import create_workload
from txbench.workloads.protocols import WorkloadProtocol

logger = structlog.get_logger(__name__)


class ClientThread(threading.Thread):
    """Drives one backend instance through a share of the operation count.

    Args:
        thread_id: Index of this client, 0-based
        thread_count: Total number of clients in the run
        db: This thread's (instrumented) backend, not yet initialized
        workload: Shared, initialized workload
        operation_count: Units of work this thread performs
        do_transactions: Run phase (do_transaction) if True, load phase
            (do_insert) if False
        target_per_second: Pacing target for this thread, 0 = unthrottled
        clock: Time source for pacing
    """

    def __init__(
        self,
        thread_id: int,
        thread_count: int,
        db: DBProtocol,
        workload: WorkloadProtocol,
        operation_count: int,
        *,
        do_transactions: bool = True,
        target_per_second: float = 0.0,
        clock: Clock = DEFAULT_CLOCK,
    ) -> None:
        super().__init__(name=f"txbench-client-{thread_id}", daemon=False)
        self.thread_id = thread_id
        self.thread_count = thread_count
        self._db = db
        self._workload = workload
        self._operation_count = operation_count
        self._do_transactions = do_transactions
        self._target_per_second = target_per_second
        self._clock = clock
        self.operations_done = 0
        self.failed_inserts = 0
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            self._db.init()
        except Exception as e:
            logger.error("client_db_init_failed", thread_id=self.thread_id, error=str(e))
            self.error = e
            return

        try:
            self._run_operations()
        except Exception as e:
            logger.error("client_thread_crashed", thread_id=self.thread_id, error=str(e))
            self.error = e
        finally:
            try:
                self._db.cleanup()
            except Exception as e:
                logger.error("client_db_cleanup_failed", thread_id=self.thread_id, error=str(e))
                if self.error is None:
                    self.error = e

    def _run_operations(self) -> None:
        thread_state = self._workload.init_thread(self.thread_id, self.thread_count)
        logger.debug("client_thread_started", thread_id=self.thread_id, operations=self._operation_count)
        start_ns = self._clock.monotonic_ns()
        for _ in range(self._operation_count):
            if self._do_transactions:
                self._workload.do_transaction(self._db, thread_state)
            elif not self._workload.do_insert(self._db, thread_state):
                self.failed_inserts += 1
            self.operations_done += 1
            self._throttle(start_ns)
        logger.debug("client_thread_finished", thread_id=self.thread_id, operations=self.operations_done)

    def _throttle(self, start_ns: int) -> None:
        """Sleep until this thread is back on its target schedule."""
        if self._target_per_second <= 0:
            return
        scheduled_micros = self.operations_done * 1_000_000 / self._target_per_second
        elapsed = elapsed_micros(start_ns, self._clock.monotonic_ns())
        if elapsed < scheduled_micros:
            self._clock.sleep((scheduled_micros - elapsed) / 1_000_000)


def split_operations(total: int, threads: int) -> list[int]:
    """Divide total across threads; the first total % threads get one extra."""
    share, remainder = divmod(total, threads)
    return [share + (1 if i < remainder else 0) for i in range(threads)]


def run_benchmark(
    settings: BenchmarkSettings,
    *,
    measurements: Measurements | None = None,
    clock: Clock = DEFAULT_CLOCK,
    rng: random.Random | None = None,
    backend_plugins: Iterable[Any] = (),
) -> RunSummary:
    """Run one benchmark phase and return its summary.

    Args:
        settings: Validated run settings
        measurements: Sink to report into; a new one is created if omitted
        clock: Time source for latencies, run time and pacing
        rng: Random source for the workload generators
        backend_plugins: Extra pluggy plugins providing txbench_get_backends

    Returns:
        RunSummary read after every client thread joined

    Raises:
        UnknownBackendError: If settings.client.db is not registered
        WorkloadError: If the workload cannot be initialized
        DBError: If a client's backend failed init() or cleanup()
    """
    if measurements is None:
        measurements = create_measurements(settings.measurements)

    backends = BackendFactory(settings.client.db, settings.db_properties, backend_plugins=backend_plugins)
    workload = create_workload(settings, measurements, clock=clock, rng=rng)

    thread_count = settings.client.threads
    target_per_thread = settings.client.target / thread_count
    clients = [
        ClientThread(
            thread_id,
            thread_count,
            DBWrapper(backends.create(), measurements, clock=clock),
            workload,
            operation_count,
            do_transactions=settings.client.do_transactions,
            target_per_second=target_per_thread,
            clock=clock,
        )
        for thread_id, operation_count in enumerate(split_operations(settings.total_operations, thread_count))
    ]

    logger.info(
        "run_started",
        backend=backends.name,
        workload=settings.client.workload,
        threads=thread_count,
        operations=settings.total_operations,
        phase="run" if settings.client.do_transactions else "load",
    )

    start_ns = clock.monotonic_ns()
    for client in clients:
        client.start()
    for client in clients:
        client.join()
    end_ns = clock.monotonic_ns()

    workload.cleanup()

    errors = [client.error for client in clients if client.error is not None]
    if errors:
        raise errors[0]

    failed_inserts = sum(client.failed_inserts for client in clients)
    if failed_inserts:
        logger.warning("inserts_failed", failed_inserts=failed_inserts)

    summary = RunSummary(
        operations=sum(client.operations_done for client in clients),
        elapsed_micros=elapsed_micros(start_ns, end_ns),
        snapshot=measurements.snapshot(),
    )
    logger.info(
        "run_finished",
        operations=summary.operations,
        runtime_ms=round(summary.runtime_millis, 3),
        throughput=round(summary.throughput, 3),
    )
    return summary
