# src/txbench/core/config.py
"""
Configuration schema and loading for txbench runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction, so a workload's
transaction-length bounds cannot change once it is initialized.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from txbench.contracts.enums import Operation, RequestDistribution


class WorkloadSettings(BaseModel):
    """Workload configuration shared by the core and transactional workloads.

    Proportions are relative weights; they do not need to sum to 1.

    Example YAML:
        workload:
          record_count: 10000
          read_proportion: 0.5
          update_proportion: 0.5
          max_transaction_length: 4
          transaction_length_distribution: zipfian
    """

    model_config = {"frozen": True}

    table: str = Field(default="usertable", min_length=1, description="Table every operation targets")
    record_count: int = Field(default=1000, ge=0, description="Records loaded before the run phase")
    insert_start: int = Field(default=0, ge=0, description="First key number for inserts")
    field_count: int = Field(default=10, gt=0, description="Fields per record")
    field_length: int = Field(default=100, gt=0, description="Length of each generated field value")
    read_all_fields: bool = Field(default=True, description="Read every field, or one random field")
    write_all_fields: bool = Field(default=False, description="Update every field, or one random field")
    ordered_inserts: bool = Field(default=False, description="Use key numbers as-is instead of hashing them")

    read_proportion: float = Field(default=0.95, ge=0)
    update_proportion: float = Field(default=0.05, ge=0)
    insert_proportion: float = Field(default=0.0, ge=0)
    scan_proportion: float = Field(default=0.0, ge=0)
    scan_write_proportion: float = Field(default=0.0, ge=0)
    complex_proportion: float = Field(default=0.0, ge=0)
    multi_update_proportion: float = Field(default=0.0, ge=0)
    multi_read_proportion: float = Field(default=0.0, ge=0)
    delete_proportion: float = Field(default=0.0, ge=0)

    request_distribution: RequestDistribution = Field(
        default=RequestDistribution.UNIFORM,
        description="How records are chosen for read/update/scan/delete",
    )
    max_scan_length: int = Field(default=1000, gt=0, description="Upper bound of records per scan")
    multi_key_count: int = Field(default=5, gt=0, description="Keys touched by multi-key and complex operations")

    max_transaction_length: int = Field(
        default=10,
        gt=0,
        description="Maximum number of operations per transaction",
    )
    # Plain string: unsupported values are rejected by the
    # transactional workload's init() so they surface as WorkloadError.
    transaction_length_distribution: str = Field(
        default="uniform",
        description="Distribution of operations per transaction (uniform or zipfian)",
    )

    def proportions(self) -> dict[Operation, float]:
        """Return the configured weight of every operation type."""
        return {operation: getattr(self, f"{operation.value}_proportion") for operation in Operation}


class ClientSettings(BaseModel):
    """Client harness configuration: threads, operation count and pacing."""

    model_config = {"frozen": True}

    db: str = Field(default="memory", min_length=1, description="Registered backend name")
    workload: Literal["core", "transactional"] = Field(default="transactional")
    threads: int = Field(default=1, gt=0, description="Client threads, each with its own backend")
    operation_count: int = Field(default=1000, ge=0, description="Units of work across all threads")
    target: float = Field(default=0.0, ge=0, description="Target ops/sec across all threads (0 = unthrottled)")
    do_transactions: bool = Field(default=True, description="Run phase if True, load phase if False")


class MeasurementsSettings(BaseModel):
    """Measurement aggregation and export configuration."""

    model_config = {"frozen": True}

    exporter: str = Field(default="text", min_length=1, description="Registered exporter name")
    exporter_options: dict[str, Any] = Field(default_factory=dict)
    histogram_buckets: int = Field(
        default=1000,
        gt=0,
        description="Millisecond buckets per latency histogram; slower samples land in an overflow bucket",
    )


class BenchmarkSettings(BaseModel):
    """Top-level settings for one benchmark run."""

    model_config = {"frozen": True}

    workload: WorkloadSettings = Field(default_factory=WorkloadSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    measurements: MeasurementsSettings = Field(default_factory=MeasurementsSettings)
    db_properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form options handed to the backend's set_properties()",
    )

    @model_validator(mode="after")
    def validate_insert_range(self) -> "BenchmarkSettings":
        """Load-phase inserts must stay inside the keyspace reads draw from."""
        if not self.client.do_transactions and self.workload.insert_start > self.workload.record_count:
            raise ValueError("insert_start must not exceed record_count for the load phase")
        return self

    @property
    def total_operations(self) -> int:
        """Units of work for the whole run: record inserts when loading."""
        if self.client.do_transactions:
            return self.client.operation_count
        return self.workload.record_count - self.workload.insert_start

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "BenchmarkSettings":
        """Build settings from flat property names such as "recordcount".

        Unrecognized keys are passed to the backend via db_properties so
        driver-specific options keep working.

        Args:
            properties: Mapping such as {"maxtransactionlength": "4"}

        Returns:
            Validated BenchmarkSettings

        Raises:
            ValidationError: If a recognized property has an invalid value
        """
        sections: dict[str, dict[str, Any]] = {"workload": {}, "client": {}, "measurements": {}}
        db_properties: dict[str, Any] = {}
        for key, value in properties.items():
            try:
                section, field = PROPERTY_ALIASES[key.lower()]
            except KeyError:
                db_properties[key] = value
                continue
            sections[section][field] = value

        return cls(
            workload=WorkloadSettings(**sections["workload"]),
            client=ClientSettings(**sections["client"]),
            measurements=MeasurementsSettings(**sections["measurements"]),
            db_properties=db_properties,
        )

    def with_overrides(self, properties: Mapping[str, Any]) -> "BenchmarkSettings":
        """Return a copy with flat property overrides applied on top."""
        merged = self.model_dump()
        for key, value in properties.items():
            try:
                section, field = PROPERTY_ALIASES[key.lower()]
            except KeyError:
                merged["db_properties"][key] = value
                continue
            merged[section][field] = value
        return BenchmarkSettings(**merged)


# Flat property name -> (section, field)
PROPERTY_ALIASES: dict[str, tuple[str, str]] = {
    "table": ("workload", "table"),
    "recordcount": ("workload", "record_count"),
    "insertstart": ("workload", "insert_start"),
    "fieldcount": ("workload", "field_count"),
    "fieldlength": ("workload", "field_length"),
    "readallfields": ("workload", "read_all_fields"),
    "writeallfields": ("workload", "write_all_fields"),
    "orderedinserts": ("workload", "ordered_inserts"),
    "readproportion": ("workload", "read_proportion"),
    "updateproportion": ("workload", "update_proportion"),
    "insertproportion": ("workload", "insert_proportion"),
    "scanproportion": ("workload", "scan_proportion"),
    "scanwriteproportion": ("workload", "scan_write_proportion"),
    "complexproportion": ("workload", "complex_proportion"),
    "multiupdateproportion": ("workload", "multi_update_proportion"),
    "multireadproportion": ("workload", "multi_read_proportion"),
    "deleteproportion": ("workload", "delete_proportion"),
    "requestdistribution": ("workload", "request_distribution"),
    "maxscanlength": ("workload", "max_scan_length"),
    "multikeycount": ("workload", "multi_key_count"),
    "maxtransactionlength": ("workload", "max_transaction_length"),
    "transactionlengthdistribution": ("workload", "transaction_length_distribution"),
    "db": ("client", "db"),
    "workload": ("client", "workload"),
    "threadcount": ("client", "threads"),
    "operationcount": ("client", "operation_count"),
    "target": ("client", "target"),
    "dotransactions": ("client", "do_transactions"),
    "exporter": ("measurements", "exporter"),
    "histogram.buckets": ("measurements", "histogram_buckets"),
}


def load_settings(config_path: Path) -> BenchmarkSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (TXBENCH_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Environment variable format: TXBENCH_WORKLOAD__MAX_TRANSACTION_LENGTH=4

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated BenchmarkSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="TXBENCH",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    for section in _SCHEMA_SECTIONS:
        if isinstance(raw_config.get(section), Mapping):
            raw_config[section] = _lower_field_names(raw_config[section])

    return BenchmarkSettings(**raw_config)


_SCHEMA_SECTIONS = ("workload", "client", "measurements")


def _lower_field_names(section: Mapping[str, Any]) -> dict[str, Any]:
    """Lowercase a section's field names (Dynaconf uppercases env overrides).

    Values are left alone, so free-form mappings such as exporter_options
    keep their keys as written.
    """
    return {str(k).lower(): v for k, v in section.items()}
