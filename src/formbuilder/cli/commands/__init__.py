"""CLI command implementations for the formbuilder application.

This package contains subcommands for the formbuilder CLI, including:
- validate: Validate a form document
- templates: Manage bundled form templates
- fill: Terminal renderer for interactive filling
"""

from formbuilder.cli.commands.fill import TerminalRenderer
from formbuilder.cli.commands.templates import templates_app
from formbuilder.cli.commands.validate import display_load_error, validate_command

__all__ = ["TerminalRenderer", "display_load_error", "templates_app", "validate_command"]
