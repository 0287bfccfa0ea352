# src/txbench/cli.py
"""txbench Command Line Interface.

Entry point for the txbench CLI tool.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from txbench import __version__
from txbench.contracts.errors import DBError, MeasurementsExporterError, WorkloadError
from txbench.core.config import BenchmarkSettings, load_settings

__all__ = [
    "app",
]

app = typer.Typer(
    name="txbench",
    help="txbench: transactional database load generator.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"txbench version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """txbench: transactional database load generator."""


def _parse_properties(properties: list[str]) -> dict[str, str]:
    """Parse repeated -p key=value options into a mapping."""
    parsed: dict[str, str] = {}
    for item in properties:
        key, sep, value = item.partition("=")
        if not sep or not key:
            typer.echo(f"Error: property must be key=value, got '{item}'", err=True)
            raise typer.Exit(1)
        parsed[key.strip()] = value.strip()
    return parsed


def _echo_validation_error(e: ValidationError) -> None:
    typer.echo("Configuration errors:", err=True)
    for error in e.errors():
        loc = ".".join(str(x) for x in error["loc"])
        typer.echo(f"  - {loc}: {error['msg']}", err=True)


def _load_run_settings(
    settings_file: Path | None,
    properties: dict[str, str],
) -> BenchmarkSettings:
    """Settings file (or defaults) with -p overrides applied on top."""
    try:
        base = load_settings(settings_file) if settings_file is not None else BenchmarkSettings()
        return base.with_overrides(properties)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings_file}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings_file}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        _echo_validation_error(e)
        raise typer.Exit(1) from None


@app.command()
def run(
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    properties: list[str] = typer.Option(
        [],
        "--property",
        "-p",
        help="Override a setting with a flat property, e.g. -p maxtransactionlength=4.",
    ),
    threads: int | None = typer.Option(
        None,
        "--threads",
        "-t",
        help="Number of client threads (overrides threadcount).",
    ),
    load: bool = typer.Option(
        False,
        "--load",
        help="Run the load phase (inserts) instead of the transaction phase.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
) -> None:
    """Run a benchmark phase and export its measurements."""
    from txbench.core.logging import configure_logging
    from txbench.engine.client import run_benchmark
    from txbench.measurements.factory import create_exporter

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "INFO")

    overrides = _parse_properties(properties)
    if threads is not None:
        overrides["threadcount"] = str(threads)
    if load:
        overrides["dotransactions"] = "false"
    config = _load_run_settings(settings.expanduser() if settings is not None else None, overrides)

    try:
        exporter = create_exporter(config.measurements)
    except MeasurementsExporterError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    try:
        try:
            summary = run_benchmark(config)
        except WorkloadError as e:
            typer.echo(f"Workload configuration error: {e}", err=True)
            raise typer.Exit(1) from None
        except DBError as e:
            typer.echo(f"Backend error: {e}", err=True)
            raise typer.Exit(1) from None
        exporter.export(summary)
    finally:
        exporter.close()


@app.command()
def backends() -> None:
    """List registered database backends."""
    from txbench.db.factory import backend_registry

    for name in sorted(backend_registry()):
        typer.echo(name)


if __name__ == "__main__":
    app()
