"""Validation constraint bag attached to a field schema."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any

# (min attribute, max attribute) for every bound pair kept consistent
BOUND_PAIRS: tuple[tuple[str, str], ...] = (
    ("min_length", "max_length"),
    ("min_words", "max_words"),
    ("min_value", "max_value"),
    ("min_date", "max_date"),
)

# Bounds that count something and therefore can never be negative
NON_NEGATIVE_BOUNDS: frozenset[str] = frozenset(
    {
        "exact_length",
        "min_length",
        "max_length",
        "min_words",
        "max_words",
        "decimal_places",
    }
)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO date or date-time string into a naive datetime.

    Dates parse to midnight. Timezone information is dropped so that date
    and date-time values stay comparable. Returns None when the string is
    empty or not ISO formatted.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def _exceeds(low: Any, high: Any, attr: str) -> bool:
    if low is None or high is None:
        return False
    if attr == "min_date":
        low_dt, high_dt = parse_datetime(low), parse_datetime(high)
        if low_dt is None or high_dt is None:
            return False
        return low_dt > high_dt
    return low > high


@dataclass(frozen=True)
class Constraints:
    """Type-dependent validation rules for one field.

    Unset rules are None (or False for flags). ``min_value`` and
    ``max_value`` are read according to the field kind: numeric bounds
    for number and currency fields, selection-count bounds for checkbox
    groups and multi-selects, and a file-count ceiling (max only) for
    multi-file inputs.

    Attributes:
        required: Whether an empty value is an error.
        exact_length: Exact character count for text-like values.
        min_length: Minimum character count.
        max_length: Maximum character count.
        min_words: Minimum word count (textarea).
        max_words: Maximum word count (textarea).
        alpha_only: Letters, spaces and line breaks only.
        no_whitespace: Reject any whitespace.
        uppercase_only: Reject lowercase letters.
        lowercase_only: Reject uppercase letters.
        alphanumeric_only: Letters, digits, spaces and line breaks only.
        starts_with: Required prefix.
        ends_with: Required suffix.
        contains: Required substring.
        allowed_values: Allow-list of values.
        disallowed_values: Deny-list of values.
        pattern: Regular expression the value must match.
        min_value: Lower numeric or count bound.
        max_value: Upper numeric or count bound.
        step: Numeric step the value must align to, offset by min_value.
        no_negative: Reject values below zero.
        positive_only: Reject values at or below zero.
        integer_only: Reject fractional values.
        decimal_places: Maximum number of fractional digits typed.
        min_date: Earliest accepted ISO date or date-time.
        max_date: Latest accepted ISO date or date-time.
        accept: Comma separated list of accepted file extensions.
        max_file_size_mb: Per-file size ceiling in megabytes.
        match_field: Name of another field whose value must be equal.
        custom_error_message: Message replacing any failure message.
    """

    required: bool = False
    exact_length: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    min_words: int | None = None
    max_words: int | None = None
    alpha_only: bool = False
    no_whitespace: bool = False
    uppercase_only: bool = False
    lowercase_only: bool = False
    alphanumeric_only: bool = False
    starts_with: str | None = None
    ends_with: str | None = None
    contains: str | None = None
    allowed_values: tuple[str, ...] | None = None
    disallowed_values: tuple[str, ...] | None = None
    pattern: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    no_negative: bool = False
    positive_only: bool = False
    integer_only: bool = False
    decimal_places: int | None = None
    min_date: str | None = None
    max_date: str | None = None
    accept: str | None = None
    max_file_size_mb: float | None = None
    match_field: str | None = None
    custom_error_message: str | None = None

    def with_bound(self, name: str, value: Any) -> "Constraints":
        """Return a copy with one bound set, keeping its pair consistent.

        When the new value crosses its partner bound (a minimum above the
        maximum or the reverse), the partner snaps to the new value so the
        most recently edited bound wins. Negative count bounds clamp to 0
        and a non-positive step is discarded.

        Args:
            name: Attribute name of the bound (e.g. "min_length").
            value: New value, or None to clear the bound.

        Returns:
            New Constraints instance.

        Raises:
            AttributeError: If name is not a constraint attribute.
        """
        if name not in _FIELD_NAMES:
            raise AttributeError(f"Unknown constraint '{name}'")

        if value is not None and name in NON_NEGATIVE_BOUNDS and value < 0:
            value = 0
        if name == "step" and value is not None and value <= 0:
            value = None

        changes: dict[str, Any] = {name: value}
        for low_attr, high_attr in BOUND_PAIRS:
            if name == low_attr:
                partner = getattr(self, high_attr)
                if _exceeds(value, partner, low_attr):
                    changes[high_attr] = value
            elif name == high_attr:
                partner = getattr(self, low_attr)
                if _exceeds(partner, value, low_attr):
                    changes[low_attr] = value
        return replace(self, **changes)

    def normalized(self) -> "Constraints":
        """Return a self-consistent copy used at validation time.

        Negative count bounds are clamped to 0, every bound pair with
        min above max gets max forced to min, and a non-positive step is
        treated as unset. The repair never reports an error and is
        idempotent.
        """
        changes: dict[str, Any] = {}
        for attr in NON_NEGATIVE_BOUNDS:
            current = getattr(self, attr)
            if current is not None and current < 0:
                changes[attr] = 0

        repaired = replace(self, **changes) if changes else self
        pair_changes: dict[str, Any] = {}
        for low_attr, high_attr in BOUND_PAIRS:
            low = getattr(repaired, low_attr)
            high = getattr(repaired, high_attr)
            if _exceeds(low, high, low_attr):
                pair_changes[high_attr] = low
        if repaired.step is not None and repaired.step <= 0:
            pair_changes["step"] = None

        return replace(repaired, **pair_changes) if pair_changes else repaired


_FIELD_NAMES: frozenset[str] = frozenset(f.name for f in fields(Constraints))
