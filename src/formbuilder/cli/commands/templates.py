"""Commands for the bundled form templates."""

from pathlib import Path
from typing import Annotated

import typer

from formbuilder.application.templates import TemplateManager

templates_app = typer.Typer(
    name="templates",
    help="List, print and copy the bundled form templates.",
)


def _require_template(manager: TemplateManager, name: str) -> None:
    if manager.template_exists(name):
        return
    typer.echo(f"Error: Template not found: {name}", err=True)
    typer.echo(f"Choose one of: {', '.join(manager.names())}", err=True)
    raise typer.Exit(code=1)


@templates_app.command(name="list")
def list_command() -> None:
    """List the bundled templates with their titles.

    Example:
        formbuilder templates list
    """
    infos = TemplateManager().templates()
    typer.echo("Available templates:")
    typer.echo()
    width = max((len(info.name) for info in infos), default=0)
    for info in infos:
        typer.secho(f"  {info.name.ljust(width)}  {info.title}", bold=True)
        if info.description:
            typer.echo(f"  {' ' * width}  {info.description}")
    typer.echo()
    typer.echo("Run 'formbuilder templates init <name>' to start a form document from one.")


@templates_app.command(name="show")
def show_command(
    name: Annotated[str, typer.Argument(help="Template to print")],
) -> None:
    """Print the form document of a template.

    Example:
        formbuilder templates show signup
    """
    manager = TemplateManager()
    _require_template(manager, name)
    typer.echo(manager.get_template(name))


@templates_app.command(name="init")
def init_command(
    name: Annotated[str, typer.Argument(help="Template to copy")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Where to write the document (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace an existing file"),
    ] = False,
) -> None:
    """Start a form document from a template.

    Examples:
        formbuilder templates init contact
        formbuilder templates init signup -o register.json
    """
    manager = TemplateManager()
    _require_template(manager, name)
    target = output or Path(f"{name}.json")

    try:
        written = manager.init_template(name, target, force=force)
    except FileExistsError:
        typer.echo(f"Error: File already exists: {target} (pass --force to replace it)", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: Cannot write {target}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Created: {written}")
