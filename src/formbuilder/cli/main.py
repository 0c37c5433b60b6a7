"""Typer CLI for building, checking and filling forms."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from formbuilder.application import FormSession
from formbuilder.application.config import (
    ConfigError,
    FormDocument,
    document_to_session,
    load_form,
)
from formbuilder.cli.commands import (
    TerminalRenderer,
    display_load_error,
    templates_app,
    validate_command,
)
from formbuilder.domain import MaskKind, Viewport, apply_mask
from formbuilder.infrastructure import (
    LayoutDiagramFormatter,
    SubmissionFormatter,
    SubmissionJsonExporter,
    render_session,
)

app = typer.Typer(
    name="formbuilder",
    help="Build, validate and fill dynamic forms from JSON form documents.",
)

app.command(name="validate")(validate_command)
app.add_typer(templates_app, name="templates")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Build, validate and fill dynamic forms from JSON form documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_session(form_file: Path) -> tuple[FormDocument, FormSession]:
    try:
        document = load_form(form_file)
        return document, document_to_session(document)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _read_values(values_file: Path) -> dict[str, str]:
    try:
        data = json.loads(values_file.read_text(encoding="utf-8"))
    except OSError as e:
        typer.echo(f"Error: Could not read values file: {e}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in values file: {e.msg}", err=True)
        raise typer.Exit(code=1)
    if not isinstance(data, dict):
        typer.echo("Error: Values file must contain a JSON object", err=True)
        raise typer.Exit(code=1)
    return {str(k): _as_raw_input(v) for k, v in data.items()}


def _as_raw_input(value: object) -> str:
    """Lists of strings are selections; other non-strings are JSON encoded."""
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return ",".join(value)
    return json.dumps(value)


def _finish_submit(document: FormDocument, session: FormSession, output_format: str) -> None:
    if not session.submit():
        snapshot = session.snapshot()
        typer.echo("Submission rejected:", err=True)
        for f in snapshot.fields:
            error = snapshot.error_of(f.name)
            if error:
                typer.echo(f"  {f.label or f.name}: {error}", err=True)
        raise typer.Exit(code=1)

    data = session.submitted_data()
    if output_format == "json":
        typer.echo(SubmissionJsonExporter().export(session.fields, data, title=document.title))
    else:
        typer.echo(SubmissionFormatter().format(session.fields, data))


@app.command()
def submit(
    form_file: Annotated[Path, typer.Argument(help="Path to the JSON form document")],
    values_file: Annotated[
        Path | None,
        typer.Option("--values", help="JSON object of raw input by field name"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
) -> None:
    """Fill a form from a values file and submit it.

    Values are applied as typed input, so masks run on them. Exits with
    code 1 when any field fails validation.

    Example:
        formbuilder submit signup.json --values answers.json
    """
    if output_format not in ("text", "json"):
        typer.echo(f"Error: Unknown format: {output_format}", err=True)
        raise typer.Exit(code=1)

    document, session = _load_session(form_file)
    if values_file is not None:
        names = {f.name for f in session.fields if not f.is_structural}
        for name, raw in _read_values(values_file).items():
            if name not in names:
                typer.echo(f"Error: Unknown field in values file: {name}", err=True)
                raise typer.Exit(code=1)
            session.change_value(name, raw)

    _finish_submit(document, session, output_format)


@app.command()
def fill(
    form_file: Annotated[Path, typer.Argument(help="Path to the JSON form document")],
    viewport: Annotated[
        Viewport,
        typer.Option("--viewport", help="Viewport class used to order the prompts"),
    ] = Viewport.LARGE,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
) -> None:
    """Fill a form interactively and submit it.

    Example:
        formbuilder fill contact.json
    """
    document, session = _load_session(form_file)
    if document.title:
        typer.secho(document.title, bold=True)
    render_session(session, TerminalRenderer(), viewport)
    typer.echo()
    _finish_submit(document, session, output_format)


@app.command()
def layout(
    form_file: Annotated[Path, typer.Argument(help="Path to the JSON form document")],
    viewport: Annotated[
        Viewport,
        typer.Option("--viewport", help="Viewport class: small, medium, large"),
    ] = Viewport.LARGE,
    width: Annotated[
        int | None,
        typer.Option("--width", "-w", help="Viewport width in pixels (overrides --viewport)"),
    ] = None,
) -> None:
    """Show an ASCII diagram of a form's layout.

    Example:
        formbuilder layout contact.json --width 800
    """
    if width is not None:
        viewport = Viewport.from_width(width)
    document, session = _load_session(form_file)
    rows = session.layout(viewport)
    typer.echo(LayoutDiagramFormatter().format(rows, title=f"{document.title} ({viewport.value})"))


@app.command()
def mask(
    mask_kind: Annotated[MaskKind, typer.Argument(help="Mask to apply")],
    raw: Annotated[str, typer.Argument(help="Raw input")],
    pattern: Annotated[
        str | None,
        typer.Option("--pattern", help="Regex for the custom mask"),
    ] = None,
    multiline: Annotated[
        bool,
        typer.Option("--multiline", help="Keep line breaks (textarea input)"),
    ] = False,
) -> None:
    """Apply a mask to raw input and print the result.

    Example:
        formbuilder mask phone 5551234567
    """
    typer.echo(apply_mask(mask_kind, raw, custom_pattern=pattern, multiline=multiline))


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Reload on code changes")] = False,
) -> None:
    """Run the REST API with uvicorn.

    Example:
        formbuilder serve --port 8080
    """
    import uvicorn

    uvicorn.run("formbuilder.web:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
