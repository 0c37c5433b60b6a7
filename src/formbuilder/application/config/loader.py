"""Form document loader.

Loads JSON form documents from disk or from already-parsed data and turns
file system, JSON syntax and schema failures into a single ``ConfigError``
carrying a category and per-path details.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from formbuilder.application.config.schema import FormDocument


class ConfigError(Exception):
    """Raised when a form document cannot be loaded.

    Attributes:
        message: Human-readable summary
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation
        path: The form document file, when loaded from disk
        details: line/column/message for JSON errors; path/message/value
            (and error_type) for schema or builder errors
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = list(details or ())

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("fields", 0, "constraints", "min_length"))
        'fields[0].constraints.min_length'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _schema_error(error: PydanticValidationError, path: Path | None) -> ConfigError:
    details = [
        {
            "path": _format_json_path(e["loc"]),
            "message": e["msg"],
            "value": e.get("input"),
            "error_type": e["type"],
        }
        for e in error.errors()
    ]
    summary = ["Form document validation failed:"]
    for d in details:
        shown = d["value"]
        suffix = "" if shown is None or isinstance(shown, (dict, list)) else f" (got: {shown!r})"
        summary.append(f"  - {d['path']}: {d['message']}{suffix}")
    return ConfigError("\n".join(summary), error_type="validation", path=path, details=details)


def _validate(data: Any, path: Path | None = None) -> FormDocument:
    try:
        return FormDocument.model_validate(data)
    except PydanticValidationError as e:
        raise _schema_error(e, path)


def load_form(path: Path) -> FormDocument:
    """Load and validate a form document from a JSON file.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the form document schema.
    """
    if not path.exists():
        raise ConfigError(f"Form file not found: {path}", "file_not_found", path)

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(f"Permission denied reading form file: {path}", "permission_denied", path)
    except OSError as e:
        raise ConfigError(f"Cannot read form file {path}: {e}", "file_read_error", path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    return _validate(data, path)


def load_form_from_dict(data: dict[str, Any]) -> FormDocument:
    """Validate an already-parsed form document (API payloads, templates).

    Raises:
        ConfigError: If the data does not match the form document schema.
    """
    return _validate(data)
