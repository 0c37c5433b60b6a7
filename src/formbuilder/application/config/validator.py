"""Validation structures and advisory checks for form documents.

Blocking errors are problems that prevent the form from being built
(missing names, duplicate names, too few options, values for unknown
fields). Warnings point at settings that are accepted but will not do
what their author probably intended.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable

from formbuilder.application.config.adapter import document_to_session
from formbuilder.application.config.loader import ConfigError
from formbuilder.application.config.schema import FieldConfig, FormDocument
from formbuilder.domain.value_objects import FieldKind, parse_datetime


@dataclass
class ValidationError:
    """A blocking problem in a form document.

    Attributes:
        path: JSON path to the offending entry (e.g. "fields[2].options")
        message: Human-readable description of the error
        value: The value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking concern about a form document.

    Attributes:
        path: JSON path to the concerning entry
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def _is_text(kind: FieldKind) -> bool:
    return kind.is_text_like


def _is_textarea(kind: FieldKind) -> bool:
    return kind is FieldKind.TEXTAREA


def _is_bounded(kind: FieldKind) -> bool:
    return kind.is_numeric or kind in (
        FieldKind.CHECKBOX_GROUP,
        FieldKind.SELECT,
        FieldKind.FILE,
    )


def _is_numeric(kind: FieldKind) -> bool:
    return kind.is_numeric


def _is_date(kind: FieldKind) -> bool:
    return kind.is_date


def _is_file(kind: FieldKind) -> bool:
    return kind is FieldKind.FILE


# Constraint name -> predicate for the kinds that read it
CONSTRAINT_KINDS: dict[str, Callable[[FieldKind], bool]] = {
    "exact_length": _is_text,
    "min_length": _is_text,
    "max_length": _is_text,
    "min_words": _is_textarea,
    "max_words": _is_textarea,
    "alpha_only": _is_text,
    "no_whitespace": _is_text,
    "uppercase_only": _is_text,
    "lowercase_only": _is_text,
    "alphanumeric_only": _is_text,
    "starts_with": _is_text,
    "ends_with": _is_text,
    "contains": _is_text,
    "min_value": _is_bounded,
    "max_value": _is_bounded,
    "step": _is_numeric,
    "no_negative": _is_numeric,
    "positive_only": _is_numeric,
    "integer_only": _is_numeric,
    "decimal_places": _is_numeric,
    "min_date": _is_date,
    "max_date": _is_date,
    "accept": _is_file,
    "max_file_size_mb": _is_file,
}


def check_field_advisories(document: FormDocument) -> ValidationResult:
    """Check fields for settings that are accepted but have no effect.

    Advisories checked:
    - constraints the field's kind never reads
    - constraints on headers and spacers
    - options on kinds without choices
    - regular expressions that do not compile
    - date bounds that are not ISO dates
    - must-equal rules naming a field the form does not have
    """
    result = ValidationResult()
    value_names = {f.name for f in document.fields if f.kind.is_value_bearing}

    for i, fc in enumerate(document.fields):
        path = f"fields[{i}]"
        written = fc.constraints.model_dump(exclude_defaults=True)

        if fc.kind.is_structural:
            if written:
                result.add_warning(
                    path=f"{path}.constraints",
                    message=f"Constraints are ignored on {fc.kind.value} blocks",
                )
            continue

        _check_constraint_kinds(fc, written, path, result)

        if fc.options is not None and not fc.kind.is_selection:
            result.add_warning(
                path=f"{path}.options",
                message=f"Options are ignored for {fc.kind.value} fields",
            )

        pattern = fc.constraints.pattern
        if pattern:
            try:
                re.compile(pattern)
            except re.error as e:
                result.add_warning(
                    path=f"{path}.constraints.pattern",
                    message=f"Pattern does not compile ({e}); every non-empty value will fail",
                    suggestion="Fix the regular expression or remove the pattern",
                )

        for attr in ("min_date", "max_date"):
            bound = getattr(fc.constraints, attr)
            if bound and parse_datetime(bound) is None:
                result.add_warning(
                    path=f"{path}.constraints.{attr}",
                    message=f"'{bound}' is not an ISO date and will be ignored",
                    suggestion="Use YYYY-MM-DD or YYYY-MM-DDTHH:MM",
                )

        match = fc.constraints.match_field
        if match and match not in value_names:
            result.add_warning(
                path=f"{path}.constraints.match_field",
                message=f'Match field "{match}" not found in form',
                suggestion="Every value of this field will be rejected until the field exists",
            )

    return result


def _check_constraint_kinds(
    fc: FieldConfig, written: dict[str, Any], path: str, result: ValidationResult
) -> None:
    for name in written:
        reads = CONSTRAINT_KINDS.get(name)
        if reads is not None and not reads(fc.kind):
            result.add_warning(
                path=f"{path}.constraints.{name}",
                message=f"'{name}' has no effect on {fc.kind.value} fields",
            )


def validate_form(document: FormDocument) -> ValidationResult:
    """Run every check on a form document.

    The document is built into a session to surface blocking errors the
    same way the builder reports them, then advisory checks are run.

    Args:
        document: A FormDocument returned by ``load_form``.

    Returns:
        ValidationResult with errors and warnings.
    """
    result = ValidationResult()
    try:
        document_to_session(document)
    except ConfigError as e:
        for detail in e.details:
            result.add_error(
                path=detail.get("path", ""),
                message=detail.get("message", e.message),
                value=detail.get("value"),
            )
    return result.merge(check_field_advisories(document))
