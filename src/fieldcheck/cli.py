"""fieldcheck Command Line Interface.

Entry point for the fieldcheck CLI tool.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from fieldcheck import __version__
from fieldcheck.contracts import FieldConfigError, ItemValidationError, StringFormat, UnsupportedModeError
from fieldcheck.core.config import ValidatorSettings, load_settings
from fieldcheck.core.logging import get_logger
from fieldcheck.engine import ValidatorEngine, bind_payloads
from fieldcheck.plugins import PluginManager

__all__ = [
    "app",
]

logger = get_logger(__name__)

app = typer.Typer(
    name="fieldcheck",
    help="fieldcheck: declarative record validation and phone rewriting.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fieldcheck version {__version__}")
        raise typer.Exit()


def _build_plugin_manager() -> PluginManager:
    manager = PluginManager()
    manager.load_entrypoints()
    return manager


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
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """fieldcheck: declarative record validation and phone rewriting."""
    from fieldcheck.core.logging import configure_logging

    log_level = "DEBUG" if verbose else "WARNING"
    configure_logging(json_output=json_logs, level=log_level)


def _load_validator_settings(settings_path: Path) -> ValidatorSettings:
    """Load settings, turning every failure into a message and exit code 1."""
    try:
        return load_settings(settings_path)
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings_path}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings_path}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _read_records(records_path: Path) -> list[dict[str, Any]]:
    """Read a JSON array or YAML list of records."""
    try:
        text = records_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        typer.echo(f"Error: Records file not found: {records_path}", err=True)
        raise typer.Exit(1) from None

    try:
        data = json.loads(text) if records_path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        typer.echo(f"Error: Could not parse {records_path}: {e}", err=True)
        raise typer.Exit(1) from None

    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(record, dict) for record in data):
        typer.echo(f"Error: {records_path} must contain a list of objects", err=True)
        raise typer.Exit(1)
    return data


@app.command()
def validate(
    settings: Path = typer.Argument(..., help="Path to settings YAML file."),
    records: Path = typer.Argument(..., help="Path to records file (JSON array or YAML list)."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results to this file instead of stdout.",
    ),
    continue_on_error: bool = typer.Option(
        False,
        "--continue-on-error",
        help="Emit an error entry for a failing item instead of aborting.",
    ),
) -> None:
    """Validate records against the fields declared in SETTINGS."""
    config = _load_validator_settings(settings.expanduser())
    rows = _read_records(records.expanduser())

    try:
        registry = _build_plugin_manager().build_registry()
        engine = ValidatorEngine(config.record_options(), registry=registry)
        results = engine.process_batch(
            ((row, bind_payloads(config.fields, row)) for row in rows),
            continue_on_error=continue_on_error,
        )
    except (FieldConfigError, UnsupportedModeError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1) from None
    except ItemValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    rendered = json.dumps(results, indent=2, ensure_ascii=False)
    if output is not None:
        output.write_text(rendered + "\n", encoding="utf-8")
        logger.info("results_written", path=str(output), count=len(results))
    else:
        typer.echo(rendered)


@app.command()
def types() -> None:
    """List registered validation types, plugin-provided ones included."""
    registry = _build_plugin_manager().build_registry()
    for validation_type in registry.list_types():
        typer.echo(validation_type)


@app.command()
def formats() -> None:
    """List the string formats available to string fields."""
    for string_format in StringFormat:
        typer.echo(string_format.value)


if __name__ == "__main__":
    app()
