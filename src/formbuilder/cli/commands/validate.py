"""The ``validate`` command: check a form document before using it."""

from pathlib import Path
from typing import Annotated, Any, Iterable

import typer

from formbuilder.application.config import (
    ConfigError,
    ValidationResult,
    load_form,
    validate_form,
)


def _echo_lines(lines: Iterable[str], err: bool = False) -> None:
    for line in lines:
        typer.echo(line, err=err)


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]
    if error.error_type == "json_parse":
        lines = ["  Invalid JSON syntax"]
        lines += [
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: {d.get('message', '')}"
            for d in error.details
        ]
        return lines
    if error.error_type != "validation" or not error.details:
        return [f"  {error.message}"]

    lines = []
    for detail in error.details:
        lines.append(f"  {detail.get('path', '?')}: {detail.get('message', '')}")
        value: Any = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"    Value: {value!r}")
    return lines


def display_load_error(error: ConfigError) -> None:
    """Print why a form document could not be loaded, on stderr."""
    _echo_lines(["Errors:", *_load_error_lines(error)], err=True)


def _summary(result: ValidationResult) -> str:
    if result.errors:
        return (
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)"
        )
    if result.warnings:
        return f"Validation passed with {len(result.warnings)} warning(s)"
    return "Validation passed. Form document is valid."


def _print_result(result: ValidationResult) -> None:
    if result.errors:
        lines = ["Errors:"]
        for error in result.errors:
            lines.append(f"  {error.path}: {error.message}")
            if error.value is not None:
                lines.append(f"    Value: {error.value!r}")
        _echo_lines([*lines, ""], err=True)

    if result.warnings:
        lines = ["Warnings:"]
        for warning in result.warnings:
            lines.append(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                lines.append(f"    Suggestion: {warning.suggestion}")
        _echo_lines([*lines, ""])

    typer.echo(_summary(result), err=not result.is_valid)


def validate_command(
    form_file: Annotated[Path, typer.Argument(help="JSON form document to check")],
) -> None:
    """Check a form document for problems.

    Schema problems (unknown keys or kinds, option values with commas),
    builder rejections (missing names or labels, duplicate names, too
    few options) and advisories (constraints the kind ignores, broken
    patterns, unknown match fields) are reported.

    Exit codes: 0 clean, 1 errors, 2 warnings only.

    Example:
        formbuilder validate signup.json
    """
    typer.echo(f"Validating {form_file}...")
    typer.echo()

    try:
        document = load_form(form_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_form(document)
    _print_result(result)
    raise typer.Exit(code=result.exit_code)
