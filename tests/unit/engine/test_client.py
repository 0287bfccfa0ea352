# tests/unit/engine/test_client.py
"""Tests for ClientThread and run_benchmark.

Tests cover:
- Operation count split across threads
- T threads x K transactions x L inner operations measurement counts
- Backend lifecycle: init and cleanup once per thread, cleanup on failure
- Load phase inserts
- Throughput pacing through the injected clock
- Configuration errors raised before any thread starts
"""

import random

import pytest

from tests.conftest import FixedBaseWorkload, RecordingDB
from txbench.contracts.enums import OperationName
from txbench.contracts.errors import DBError, UnknownBackendError, WorkloadError
from txbench.core.config import BenchmarkSettings, ClientSettings, WorkloadSettings
from txbench.db.base import BaseDB
from txbench.db.hookspecs import hookimpl
from txbench.db.memory import get_store
from txbench.db.wrapper import DBWrapper
from txbench.engine.client import ClientThread, run_benchmark, split_operations
from txbench.engine.clock import MockClock
from txbench.measurements.measurements import Measurements
from txbench.workloads.transactional import TransactionalWorkload


class MultiReadBase(FixedBaseWorkload):
    """Base workload issuing a fixed number of reads per call."""

    def __init__(self, reads: int) -> None:
        super().__init__()
        self._reads = reads

    def do_transaction(self, db, thread_state) -> bool:
        for _ in range(self._reads):
            db.read("usertable", "user1", None, {})
        return True


class FailingInitDB(RecordingDB):
    _name = "failing-init"

    def init(self) -> None:
        super().init()
        raise DBError("connection refused")


class TrackingPlugin:
    """Registers backends whose instances are remembered for inspection."""

    def __init__(self) -> None:
        self.instances: list[RecordingDB] = []
        plugin = self

        class TrackedDB(RecordingDB):
            _name = "tracked"

            def __init__(self) -> None:
                super().__init__()
                plugin.instances.append(self)

        self.tracked_class = TrackedDB

    @hookimpl
    def txbench_get_backends(self) -> list[type]:
        return [self.tracked_class, FailingInitDB]


def _settings(**client) -> BenchmarkSettings:
    return BenchmarkSettings(
        workload=WorkloadSettings(record_count=100, read_proportion=1.0, update_proportion=0.0),
        client=ClientSettings(**client),
    )


# =============================================================================
# Operation split
# =============================================================================


class TestSplitOperations:
    @pytest.mark.parametrize(
        ("total", "threads", "expected"),
        [
            (10, 1, [10]),
            (10, 3, [4, 3, 3]),
            (2, 4, [1, 1, 0, 0]),
            (0, 2, [0, 0]),
        ],
    )
    def test_split(self, total: int, threads: int, expected: list[int]) -> None:
        assert split_operations(total, threads) == expected


# =============================================================================
# ClientThread
# =============================================================================


class TestClientThread:
    def test_runs_share_and_brackets_lifecycle(self) -> None:
        inner = RecordingDB()
        workload = FixedBaseWorkload()
        client = ClientThread(0, 1, inner, workload, 5)

        client.start()
        client.join()

        assert client.error is None
        assert client.operations_done == 5
        assert inner.method_names[0] == "init"
        assert inner.method_names[-1] == "cleanup"
        assert inner.method_names.count("read") == 5

    def test_load_phase_counts_failed_inserts(self) -> None:
        inner = RecordingDB(statuses={"insert": 3})
        client = ClientThread(0, 1, inner, FixedBaseWorkload(), 4, do_transactions=False)

        client.start()
        client.join()

        assert client.failed_inserts == 4
        assert inner.method_names.count("insert") == 4

    def test_init_failure_skips_work_and_cleanup(self) -> None:
        inner = FailingInitDB()
        client = ClientThread(0, 1, inner, FixedBaseWorkload(), 5)

        client.start()
        client.join()

        assert isinstance(client.error, DBError)
        assert client.operations_done == 0
        assert inner.cleanup_count == 0

    def test_crash_still_cleans_up(self) -> None:
        class CrashingWorkload(FixedBaseWorkload):
            def do_transaction(self, db, thread_state) -> bool:
                raise KeyError("boom")

        inner = RecordingDB()
        client = ClientThread(0, 1, inner, CrashingWorkload(), 5)

        client.start()
        client.join()

        assert isinstance(client.error, KeyError)
        assert inner.cleanup_count == 1

    def test_target_paces_through_clock(self) -> None:
        clock = MockClock()
        client = ClientThread(0, 1, RecordingDB(), FixedBaseWorkload(), 10, target_per_second=100.0, clock=clock)

        client.start()
        client.join()

        # Instant operations: each one waits out its 10 ms slot
        assert len(clock.sleeps) == 10
        assert all(seconds == pytest.approx(0.01) for seconds in clock.sleeps)
        assert clock.monotonic_ns() == pytest.approx(100_000_000, abs=10_000)

    def test_unthrottled_never_sleeps(self) -> None:
        clock = MockClock()
        client = ClientThread(0, 1, RecordingDB(), FixedBaseWorkload(), 10, clock=clock)

        client.start()
        client.join()

        assert clock.sleeps == []


# =============================================================================
# Concurrency: measurement counts across threads
# =============================================================================


class TestConcurrentTransactions:
    @pytest.mark.parametrize(("threads", "transactions", "inner_ops"), [(1, 10, 1), (4, 25, 3), (8, 50, 2)])
    def test_transaction_and_inner_sample_counts(self, threads: int, transactions: int, inner_ops: int) -> None:
        measurements = Measurements()
        workload = TransactionalWorkload(measurements, base=MultiReadBase(inner_ops), rng=random.Random(0))
        workload.init(WorkloadSettings(max_transaction_length=1))
        clients = [
            ClientThread(thread_id, threads, DBWrapper(RecordingDB(), measurements), workload, transactions)
            for thread_id in range(threads)
        ]

        for client in clients:
            client.start()
        for client in clients:
            client.join()

        snapshot = measurements.snapshot()
        assert all(client.error is None for client in clients)
        assert snapshot.count(OperationName.TRANSACTION) == threads * transactions
        assert snapshot.count(OperationName.READ) == threads * transactions * inner_ops
        assert snapshot.return_code_count(OperationName.READ, 0) == threads * transactions * inner_ops


# =============================================================================
# run_benchmark
# =============================================================================


class TestRunBenchmark:
    def test_transactional_run_against_memory(self) -> None:
        settings = _settings(threads=4, operation_count=40)

        summary = run_benchmark(settings, rng=random.Random(1))

        assert summary.operations == 40
        assert summary.snapshot.count(OperationName.TRANSACTION) == 40
        assert summary.snapshot.count(OperationName.READ) >= 40

    def test_load_phase_fills_store(self) -> None:
        settings = BenchmarkSettings(
            workload=WorkloadSettings(record_count=60),
            client=ClientSettings(threads=3, do_transactions=False),
            db_properties={"memory.store": "load-test"},
        )

        summary = run_benchmark(settings, rng=random.Random(1))

        assert summary.operations == 60
        assert summary.snapshot.count(OperationName.INSERT) == 60
        assert "TRANSACTION" not in summary.snapshot
        assert get_store("load-test").size("usertable") == 60

    def test_core_workload_has_no_transactions(self) -> None:
        settings = _settings(workload="core", operation_count=30)

        summary = run_benchmark(settings, rng=random.Random(1))

        assert summary.snapshot.count(OperationName.READ) == 30
        assert "TRANSACTION" not in summary.snapshot

    def test_uses_supplied_measurements(self) -> None:
        measurements = Measurements()

        summary = run_benchmark(_settings(operation_count=5), measurements=measurements, rng=random.Random(1))

        assert measurements.snapshot().count(OperationName.TRANSACTION) == 5
        assert summary.snapshot.count(OperationName.TRANSACTION) == 5

    def test_one_backend_per_thread(self) -> None:
        plugin = TrackingPlugin()
        settings = _settings(db="tracked", threads=3, operation_count=9)

        run_benchmark(settings, backend_plugins=[plugin], rng=random.Random(1))

        assert len(plugin.instances) == 3
        assert len({id(instance) for instance in plugin.instances}) == 3
        assert all(instance.init_count == 1 for instance in plugin.instances)
        assert all(instance.cleanup_count == 1 for instance in plugin.instances)

    def test_unknown_backend_raised_before_threads(self) -> None:
        with pytest.raises(UnknownBackendError):
            run_benchmark(_settings(db="nope"))

    def test_workload_error_raised_before_threads(self) -> None:
        plugin = TrackingPlugin()
        settings = BenchmarkSettings(
            workload=WorkloadSettings(transaction_length_distribution="gaussian"),
            client=ClientSettings(db="tracked"),
        )

        with pytest.raises(WorkloadError):
            run_benchmark(settings, backend_plugins=[plugin])

        assert plugin.instances == []

    def test_backend_init_failure_reraised(self) -> None:
        settings = _settings(db="failing-init", threads=2)

        with pytest.raises(DBError, match="connection refused"):
            run_benchmark(settings, backend_plugins=[TrackingPlugin()])

    def test_elapsed_from_clock(self) -> None:
        clock = MockClock()
        settings = _settings(operation_count=10, target=1000.0)

        summary = run_benchmark(settings, clock=clock, rng=random.Random(1))

        # Ten paced transactions at 1 ms each on an instant backend
        assert summary.elapsed_micros == 10_000
        assert summary.throughput == pytest.approx(1_000.0)


class TestBaseDBSubclass:
    """A minimal BaseDB subclass is enough to run a benchmark."""

    def test_minimal_backend(self) -> None:
        class NullDB(BaseDB):
            _name = "null"

            def read(self, table, key, fields, result):
                return 0

            def scan(self, table, start_key, record_count, fields, result):
                return 0

            def scan_write(self, table, start_key, record_count, fields, values):
                return 0

            def update(self, table, key, values):
                return 0

            def complex(self, table, read_keys, fields, read_result, write_keys, write_values):
                return 0

            def update_multi(self, table, keys, values):
                return 0

            def read_multi(self, table, keys, fields, result):
                return 0

            def insert(self, table, key, values):
                return 0

            def delete(self, table, key):
                return 0

        class NullPlugin:
            @hookimpl
            def txbench_get_backends(self) -> list[type]:
                return [NullDB]

        summary = run_benchmark(_settings(db="null", operation_count=3), backend_plugins=[NullPlugin()])

        assert summary.operations == 3
