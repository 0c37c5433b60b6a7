"""Constraint validation for field values.

``validate`` is the single entry point used both for live validation as the
user types and for the full pass at submit time. It is a pure function of
its four arguments: it never mutates the field, the form values or the
field list, and returns either None (valid) or one human-readable message.

Rules are evaluated in a fixed order and the first failure wins:

1. bound repair (``Constraints.normalized``)
2. required-ness, by kind
3. radio group sanity (at least two options)
4. text-like rules
5. numeric and currency rules
6. date bounds
7. selection counts
8. file rules
9. cross-field equality
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Iterable, Mapping
from urllib.parse import urlsplit

from formbuilder.domain.value_objects import (
    Constraints,
    FieldKind,
    MaskKind,
    parse_datetime,
    parse_files,
)

if TYPE_CHECKING:
    from formbuilder.domain.entities import FieldSchema

STEP_EPSILON = 1e-9

_NUMERIC_TOKEN = re.compile(r"^[+-]?\$?(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d+)?$")
_NOT_NUMBER_CHAR = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_ALPHA_TEXT = re.compile(r"^[A-Za-z \n\r]*$")
_ALNUM_TEXT = re.compile(r"^[A-Za-z0-9 \n\r]*$")
_WHITESPACE = re.compile(r"\s")
_URL_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def format_number(value: float) -> str:
    """Render a number for messages without a trailing ``.0``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_number(value: str) -> float | None:
    """Parse the leading number of a value after stripping formatting.

    Everything except digits, dots and minus signs is removed first, so
    ``"$1,234.50"`` parses as 1234.5. Returns None when no number is left.
    """
    cleaned = _NOT_NUMBER_CHAR.sub("", value)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None
    return float(match.group(0))


def _decimal_key(value: str) -> Decimal | None:
    """Exact decimal of the leading number, for allow/deny comparisons."""
    match = _LEADING_NUMBER.match(_NOT_NUMBER_CHAR.sub("", value))
    if match is None:
        return None
    try:
        return Decimal(match.group(0)).normalize()
    except InvalidOperation:
        return None


def normalize_token(value: str) -> Decimal | str:
    """Comparison key for allow/deny lists and cross-field equality.

    Numeric-looking tokens (optional sign and ``$``, thousands commas,
    digits and at most one dot) compare as decimals, so ``"1.50"``,
    ``"1.5"`` and ``"$1.5"`` are equal. Any other token compares as the
    whitespace-stripped string.
    """
    token = value.strip()
    if token and _NUMERIC_TOKEN.match(token) and any(c.isdigit() for c in token):
        try:
            return Decimal(token.replace("$", "").replace(",", "")).normalize()
        except InvalidOperation:
            return token
    return token


def _split_selection(value: str) -> list[str]:
    return [v for v in value.split(",") if v] if value else []


def _check_required(value: str, field: "FieldSchema") -> str | None:
    kind = field.kind
    if kind is FieldKind.SELECT:
        if field.multiple:
            if not _split_selection(value):
                return "Please select at least one option"
        elif not value.strip():
            return "Please select an option"
    elif kind is FieldKind.RADIO_GROUP:
        if not value.strip():
            return "Please select an option"
    elif kind is FieldKind.CHECKBOX_GROUP:
        if not _split_selection(value):
            return "At least one option must be selected"
    elif kind is FieldKind.FILE:
        if not parse_files(value):
            return "Please upload a file"
    elif not value.strip():
        return "This field is required"
    return None


def _url_target(value: str) -> tuple[str | None, str | None]:
    """Host plus path of a URL, or an error message."""
    if not _URL_SCHEME.match(value):
        return None, "URL must start with http:// or https://"
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError:
        return None, "Invalid URL format"
    if not host:
        return None, "Invalid URL format"
    return host + (parts.path or "/"), None


def _check_text(value: str, field: "FieldSchema", c: Constraints) -> str | None:
    length = len(value)
    if c.exact_length and length != c.exact_length:
        return f"Must be exactly {c.exact_length} characters"
    if c.min_length and length < c.min_length:
        return f"Must be at least {c.min_length} characters"
    if c.max_length and length > c.max_length:
        return f"Must be at most {c.max_length} characters"

    if c.min_words or c.max_words:
        words = value.split()
        if c.min_words and len(words) < c.min_words:
            return f"Must be at least {c.min_words} words"
        if c.max_words and len(words) > c.max_words:
            return f"Must be at most {c.max_words} words"

    if c.alpha_only and not _ALPHA_TEXT.match(value):
        return "Letters only (A-Z, spaces, and line breaks)"
    alphanumeric = c.alphanumeric_only or field.mask_kind is MaskKind.ALPHANUMERIC
    if alphanumeric and not _ALNUM_TEXT.match(value):
        return "Letters and numbers only (spaces and line breaks allowed)"
    if c.no_whitespace and _WHITESPACE.search(value):
        return "No whitespace allowed"
    if c.uppercase_only and value != value.upper():
        return "Must be uppercase only"
    if c.lowercase_only and value != value.lower():
        return "Must be lowercase only"

    target = value
    if field.kind is FieldKind.URL:
        url_target, error = _url_target(value)
        if error:
            return error
        target = url_target or ""
    elif field.kind is FieldKind.EMAIL:
        target = value.split("@", 1)[0]

    if c.starts_with and not target.startswith(c.starts_with):
        return f'Must start with "{c.starts_with}"'
    if c.ends_with and not target.endswith(c.ends_with):
        return f'Must end with "{c.ends_with}"'
    if c.contains and c.contains not in target:
        return f'Must contain "{c.contains}"'

    if c.allowed_values:
        allowed = {normalize_token(v) for v in c.allowed_values}
        if normalize_token(value) not in allowed:
            return f"Must be one of: {', '.join(c.allowed_values)}"
    if c.disallowed_values:
        disallowed = {normalize_token(v) for v in c.disallowed_values}
        if normalize_token(value) in disallowed:
            return f'Value "{value}" is not allowed'

    if c.pattern:
        try:
            if not re.search(c.pattern, value):
                return "Invalid format"
        except re.error:
            return "Invalid format"
    return None


def _check_numeric(value: str, c: Constraints) -> str | None:
    number = parse_number(value)
    if number is None:
        return "Must be a valid number"

    if c.min_value is not None and number < c.min_value:
        return f"Minimum is {format_number(c.min_value)}"
    if c.max_value is not None and number > c.max_value:
        return f"Maximum is {format_number(c.max_value)}"
    if c.no_negative and number < 0:
        return "No negative numbers allowed"
    if c.positive_only and number <= 0:
        return "Must be a positive number"
    if c.integer_only and not float(number).is_integer():
        return "Must be an integer"

    if c.decimal_places is not None:
        # Counted on what was typed, not on the parsed float
        decimals = len(value.split(".")[1]) if "." in value else 0
        if decimals > c.decimal_places:
            return f"Maximum {c.decimal_places} decimal places allowed"

    if c.step is not None:
        offset = c.min_value if c.min_value is not None else 0.0
        remainder = math.fmod(number - offset, c.step)
        if abs(remainder) > STEP_EPSILON and abs(abs(remainder) - c.step) > STEP_EPSILON:
            return f"Must align with step of {format_number(c.step)}"

    key = _decimal_key(value)
    if c.allowed_values:
        if key not in {normalize_token(v) for v in c.allowed_values}:
            return f"Allowed values: {', '.join(c.allowed_values)}"
    if c.disallowed_values:
        if key in {normalize_token(v) for v in c.disallowed_values}:
            return f"Value {format_number(number)} is not allowed"
    return None


def _check_date(value: str, c: Constraints) -> str | None:
    moment = parse_datetime(value)
    if moment is None:
        return "Must be a valid date"
    earliest = parse_datetime(c.min_date)
    if earliest is not None and moment < earliest:
        return f"Must be on or after {c.min_date}"
    latest = parse_datetime(c.max_date)
    if latest is not None and moment > latest:
        return f"Must be on or before {c.max_date}"
    return None


def _check_selection_count(value: str, c: Constraints) -> str | None:
    count = len(_split_selection(value))
    if c.min_value is not None and count < c.min_value:
        return f"Select at least {format_number(c.min_value)} options"
    if c.max_value is not None and count > c.max_value:
        return f"Select no more than {format_number(c.max_value)} options"
    return None


def _check_files(value: str, field: "FieldSchema", c: Constraints) -> str | None:
    files = parse_files(value)

    if c.accept and files:
        allowed = {
            ext.strip().lower().lstrip(".") for ext in c.accept.split(",") if ext.strip()
        }
        for uploaded in files:
            if uploaded.extension not in allowed:
                return f"File must be one of: {c.accept}"

    if field.multiple and c.max_value is not None and len(files) > c.max_value:
        return f"You can upload a maximum of {format_number(c.max_value)} files"

    if c.max_file_size_mb is not None:
        for uploaded in files:
            if uploaded.size_mb > c.max_file_size_mb:
                return f"Each file must be at most {format_number(c.max_file_size_mb)} MB"
    return None


def _check_match(
    value: str,
    c: Constraints,
    form_values: Mapping[str, str],
    all_fields: Iterable["FieldSchema"],
) -> str | None:
    target = next(
        (f for f in all_fields if not f.is_structural and f.name == c.match_field),
        None,
    )
    if target is None:
        return f'Match field "{c.match_field}" not found in form'
    other = form_values.get(target.name, "")
    if normalize_token(value) != normalize_token(other):
        return f"Must match {target.label or target.name}"
    return None


def _first_failure(
    value: str,
    field: "FieldSchema",
    form_values: Mapping[str, str],
    all_fields: Iterable["FieldSchema"],
) -> str | None:
    c = field.constraints.normalized()
    kind = field.kind

    if c.required:
        error = _check_required(value, field)
        if error:
            return error

    if kind is FieldKind.RADIO_GROUP and len(field.options) < 2:
        return "Radio groups must have at least two options"

    if kind.is_text_like and value:
        error = _check_text(value, field, c)
        if error:
            return error

    numeric = kind.is_numeric or field.mask_kind in (MaskKind.DECIMAL, MaskKind.CURRENCY)
    if numeric and value:
        error = _check_numeric(value, c)
        if error:
            return error

    if kind.is_date and value:
        error = _check_date(value, c)
        if error:
            return error

    if field.is_multi_select:
        error = _check_selection_count(value, c)
        if error:
            return error

    if kind is FieldKind.FILE and value:
        error = _check_files(value, field, c)
        if error:
            return error

    if c.match_field:
        return _check_match(value, c, form_values, all_fields)

    return None


def validate(
    value: str,
    field: "FieldSchema",
    form_values: Mapping[str, str],
    all_fields: Iterable["FieldSchema"],
) -> str | None:
    """Validate one field value.

    Args:
        value: Current string value of the field.
        field: The field's schema.
        form_values: Every field's current value by name, used by
            cross-field rules.
        all_fields: Every field of the schema, used to resolve the label
            and existence of a cross-field reference.

    Returns:
        None when valid, otherwise an error message. A field's custom
        error message replaces whichever message the failing rule produced.
        Structural fields are always valid.
    """
    if field.is_structural:
        return None
    error = _first_failure(value, field, form_values, all_fields)
    if error is None:
        return None
    return field.constraints.custom_error_message or error
