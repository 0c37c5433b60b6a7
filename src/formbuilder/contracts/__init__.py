"""Protocols for collaborators of the form engine."""

from .protocols import FieldRenderer, FormatterProtocol, SubmissionFormatterProtocol

__all__ = [
    "FieldRenderer",
    "FormatterProtocol",
    "SubmissionFormatterProtocol",
]
