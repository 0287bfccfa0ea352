# tests/unit/core/test_config.py
"""Tests for settings validation, flat-property mapping and Dynaconf loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from txbench.contracts.enums import Operation, RequestDistribution
from txbench.core.config import (
    BenchmarkSettings,
    ClientSettings,
    WorkloadSettings,
    load_settings,
)


class TestWorkloadSettings:
    def test_defaults(self) -> None:
        settings = WorkloadSettings()

        assert settings.max_transaction_length == 10
        assert settings.transaction_length_distribution == "uniform"
        assert settings.request_distribution == RequestDistribution.UNIFORM
        assert settings.table == "usertable"

    @pytest.mark.parametrize("value", [0, -3])
    def test_max_transaction_length_must_be_positive(self, value: int) -> None:
        with pytest.raises(ValidationError):
            WorkloadSettings(max_transaction_length=value)

    def test_negative_proportion_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WorkloadSettings(read_proportion=-0.1)

    def test_proportions_cover_every_operation(self) -> None:
        proportions = WorkloadSettings(scan_write_proportion=0.2).proportions()

        assert set(proportions) == set(Operation)
        assert proportions[Operation.SCAN_WRITE] == 0.2
        assert proportions[Operation.READ] == 0.95

    def test_frozen(self) -> None:
        settings = WorkloadSettings()

        with pytest.raises(ValidationError):
            settings.max_transaction_length = 3  # type: ignore[misc]


class TestBenchmarkSettings:
    def test_total_operations_run_phase(self) -> None:
        settings = BenchmarkSettings(client=ClientSettings(operation_count=77))

        assert settings.total_operations == 77

    def test_total_operations_load_phase(self) -> None:
        settings = BenchmarkSettings(
            workload=WorkloadSettings(record_count=100, insert_start=40),
            client=ClientSettings(do_transactions=False),
        )

        assert settings.total_operations == 60

    def test_load_insert_start_beyond_record_count_rejected(self) -> None:
        with pytest.raises(ValidationError, match="insert_start"):
            BenchmarkSettings(
                workload=WorkloadSettings(record_count=10, insert_start=11),
                client=ClientSettings(do_transactions=False),
            )


class TestFlatProperties:
    def test_from_properties_maps_aliases(self) -> None:
        settings = BenchmarkSettings.from_properties(
            {
                "maxtransactionlength": "4",
                "transactionlengthdistribution": "zipfian",
                "recordcount": "500",
                "threadcount": "3",
                "exporter": "json",
            }
        )

        assert settings.workload.max_transaction_length == 4
        assert settings.workload.transaction_length_distribution == "zipfian"
        assert settings.workload.record_count == 500
        assert settings.client.threads == 3
        assert settings.measurements.exporter == "json"

    def test_unknown_properties_go_to_backend(self) -> None:
        settings = BenchmarkSettings.from_properties({"memory.store": "s1", "MaxTransactionLength": "2"})

        assert settings.db_properties == {"memory.store": "s1"}
        assert settings.workload.max_transaction_length == 2

    def test_from_properties_validates(self) -> None:
        with pytest.raises(ValidationError):
            BenchmarkSettings.from_properties({"maxtransactionlength": "0"})

    def test_with_overrides_keeps_other_values(self) -> None:
        base = BenchmarkSettings(workload=WorkloadSettings(record_count=42))

        updated = base.with_overrides({"maxtransactionlength": "3", "dotransactions": "false", "basic.verbose": "true"})

        assert updated.workload.record_count == 42
        assert updated.workload.max_transaction_length == 3
        assert updated.client.do_transactions is False
        assert updated.db_properties == {"basic.verbose": "true"}
        assert base.workload.max_transaction_length == 10


class TestLoadSettings:
    def test_load_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(
            "workload:\n"
            "  record_count: 250\n"
            "  max_transaction_length: 6\n"
            "  transaction_length_distribution: zipfian\n"
            "client:\n"
            "  db: basic\n"
            "  threads: 2\n",
            encoding="utf-8",
        )

        settings = load_settings(config)

        assert settings.workload.record_count == 250
        assert settings.workload.max_transaction_length == 6
        assert settings.workload.transaction_length_distribution == "zipfian"
        assert settings.client.db == "basic"
        assert settings.client.threads == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text("workload:\n  max_transaction_length: 0\n", encoding="utf-8")

        with pytest.raises(ValidationError):
            load_settings(config)

    def test_backend_and_exporter_keys_keep_their_case(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(
            "workload:\n"
            "  Max_Transaction_Length: 5\n"
            "measurements:\n"
            "  exporter_options:\n"
            "    OutputPath: report.txt\n"
            "db_properties:\n"
            "  memory.store: bench\n"
            "  MixedCase: X\n",
            encoding="utf-8",
        )

        settings = load_settings(config)

        assert settings.workload.max_transaction_length == 5
        assert settings.db_properties == {"memory.store": "bench", "MixedCase": "X"}
        assert settings.measurements.exporter_options == {"OutputPath": "report.txt"}
