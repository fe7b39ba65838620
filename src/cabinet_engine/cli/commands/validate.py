"""``cabinet-engine validate``: check a catalog file without deriving anything.

Exit codes follow ValidationResult.exit_code: 0 clean, 1 errors, 2 warnings
only. A catalog that cannot be loaded at all exits with 1.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from cabinet_engine.application.config import (
    ConfigError,
    ValidationResult,
    load_catalog,
    validate_catalog,
)


def display_load_error(error: ConfigError) -> None:
    """Print a load failure on stderr, one line per detail."""
    typer.echo("Errors:", err=True)
    match error.error_type:
        case "file_not_found":
            typer.echo(f"  File not found: {error.path}", err=True)
        case "json_parse":
            typer.echo("  Invalid JSON syntax", err=True)
            for detail in error.details:
                typer.echo(
                    f"    Line {detail.get('line', '?')}, Column {detail.get('column', '?')}: "
                    f"{detail.get('message', 'unknown error')}",
                    err=True,
                )
        case "validation" | "reference":
            for detail in error.details:
                typer.echo(f"  {detail.get('path', '?')}: {detail.get('message')}", err=True)
                value = detail.get("value")
                if value is not None and not isinstance(value, (dict, list)):
                    typer.echo(f"    Value: {value!r}", err=True)
        case _:
            typer.echo(f"  {error.message}", err=True)


def _result_to_dict(result: ValidationResult) -> dict[str, object]:
    return {
        "exit_code": result.exit_code,
        "errors": [
            {"path": e.path, "message": e.message, "value": e.value} for e in result.errors
        ],
        "warnings": [
            {"path": w.path, "message": w.message, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    }


def _print_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
    for error in result.errors:
        typer.echo(f"  {error.path}: {error.message}", err=True)
        if error.value is not None:
            typer.echo(f"    Value: {error.value!r}", err=True)

    if result.warnings:
        typer.echo("Warnings:")
    for warning in result.warnings:
        typer.echo(f"  {warning.path}: {warning.message}")
        if warning.suggestion:
            typer.echo(f"    Suggestion: {warning.suggestion}")

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Catalog is valid.")


def validate_command(
    catalog_file: Annotated[Path, typer.Argument(help="Path to the JSON catalog file")],
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text, json")
    ] = "text",
) -> None:
    """Check a catalog for schema, reference and formula problems."""
    if output_format not in ("text", "json"):
        typer.echo(f"Error: Unknown format '{output_format}'. Use text or json.", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_catalog(catalog_file)
    except ConfigError as e:
        if output_format == "json":
            typer.echo(json.dumps({"exit_code": 1, "load_error": e.message}, indent=2))
        else:
            display_load_error(e)
            typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_catalog(config)
    if output_format == "json":
        typer.echo(json.dumps(_result_to_dict(result), indent=2, default=str))
    else:
        typer.echo(f"Validating {catalog_file}...")
        _print_result(result)
    raise typer.Exit(code=result.exit_code)
