"""Bundled form templates: ready-made documents for common forms."""

from formbuilder.application.templates.manager import (
    TemplateInfo,
    TemplateManager,
    TemplateNotFoundError,
)

__all__ = [
    "TemplateInfo",
    "TemplateManager",
    "TemplateNotFoundError",
]
