"""Interactive `fill` command: prompt for every field of a form.

The command renders the form through ``render_session`` with a terminal
renderer. Each answer goes through the session, so it is masked and
validated exactly as in any other host; invalid answers are reported
and asked again.
"""

from typing import Any, Callable

import typer

from formbuilder.application import FieldState
from formbuilder.infrastructure import ControlSpec

MAX_ATTEMPTS = 3


class TerminalRenderer:
    """Renders controls as terminal prompts."""

    def __init__(self, max_attempts: int = MAX_ATTEMPTS) -> None:
        self._max_attempts = max_attempts

    def render(self, control: ControlSpec, on_change: Callable[[str], Any]) -> FieldState | None:
        if control.control == "header":
            typer.echo()
            typer.secho(control.label, bold=True)
            return None
        if control.control == "spacer":
            typer.echo()
            return None

        prompt = control.label
        if control.options:
            choices = ", ".join(f"{o.value}={o.label}" for o in control.options)
            prompt = f"{control.label} [{choices}]"
            if control.attributes.get("multiple"):
                prompt += " (comma separated)"
        elif control.placeholder:
            prompt = f"{control.label} ({control.placeholder})"

        state: FieldState | None = None
        for _ in range(self._max_attempts):
            raw = typer.prompt(prompt, default=control.value, show_default=bool(control.value))
            state = on_change(raw)
            if state.error is None:
                return state
            typer.echo(f"  {state.error}", err=True)
        return state
