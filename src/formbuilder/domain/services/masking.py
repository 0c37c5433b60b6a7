"""Live input masks.

Masks turn raw keystroke-level input into the display form of a value.
Every function here is pure: the same mask and input always give the same
output, and applying a mask to already-masked input changes nothing
(except for the free-form ``custom`` mask, which never rewrites input).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

from formbuilder.domain.value_objects import FieldKind, MaskKind

_NON_DIGIT = re.compile(r"\D")
_NOT_DIGIT_OR_DOT = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_NOT_ALPHA = re.compile(r"[^A-Za-z]")
_NOT_ALNUM = re.compile(r"[^A-Za-z0-9]")
_NOT_ALNUM_MULTILINE = re.compile(r"[^A-Za-z0-9 \n\r]")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class MaskPreset:
    """Builder defaults seeded into a field when a mask is chosen.

    Attributes:
        pattern: Regular expression enforced at validation time.
        placeholder: Example value shown in an empty control.
        max_length: Hard character limit of the masked value.
    """

    pattern: str | None = None
    placeholder: str = ""
    max_length: int | None = None


_PRESETS: dict[MaskKind, MaskPreset] = {
    MaskKind.ALPHA: MaskPreset(pattern=r"^[A-Za-z]+$", placeholder="Letters only"),
    MaskKind.CREDIT_CARD: MaskPreset(
        pattern=r"^\d{4}\s\d{4}\s\d{4}\s\d{4}$",
        placeholder="1234 5678 9012 3456",
        max_length=19,
    ),
    MaskKind.SSN: MaskPreset(
        pattern=r"^\d{3}-\d{2}-\d{4}$", placeholder="123-45-6789", max_length=11
    ),
    MaskKind.ZIP: MaskPreset(pattern=r"^\d{5}$", placeholder="12345", max_length=5),
    MaskKind.US_POSTAL: MaskPreset(
        pattern=r"^\d{5}-\d{4}$", placeholder="12345-6789", max_length=10
    ),
    MaskKind.PHONE: MaskPreset(
        pattern=r"^\(\d{3}\) \d{3}-\d{4}$",
        placeholder="(123) 456-7890",
        max_length=14,
    ),
    MaskKind.EMAIL: MaskPreset(
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", placeholder="name@example.com"
    ),
    MaskKind.URL: MaskPreset(pattern=r"^https?://.+", placeholder="https://example.com"),
    MaskKind.TIME: MaskPreset(pattern=r"^\d{2}:\d{2}$", placeholder="HH:MM", max_length=5),
    MaskKind.SLUG: MaskPreset(
        pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$", placeholder="my-page-slug"
    ),
    MaskKind.CURRENCY: MaskPreset(placeholder="$0.00"),
    MaskKind.DECIMAL: MaskPreset(placeholder="0.00"),
    MaskKind.ALPHANUMERIC: MaskPreset(),
}

# Presets adopted automatically whenever a field's kind is set to one of these
_IMPLIED_MASKS: dict[FieldKind, MaskKind] = {
    FieldKind.TEL: MaskKind.PHONE,
    FieldKind.EMAIL: MaskKind.EMAIL,
    FieldKind.URL: MaskKind.URL,
}


def mask_preset(mask_kind: MaskKind | None, custom_pattern: str | None = None) -> MaskPreset:
    """Get the builder preset for a mask.

    Args:
        mask_kind: The chosen mask, or None to clear masking.
        custom_pattern: Regex to pair with the ``custom`` mask.

    Returns:
        The preset; an empty preset when no mask is chosen.
    """
    if mask_kind is None:
        return MaskPreset()
    if mask_kind is MaskKind.CUSTOM:
        return MaskPreset(pattern=custom_pattern or None)
    return _PRESETS[mask_kind]


def implied_mask(kind: FieldKind | None) -> MaskKind | None:
    """Mask a field of the given kind adopts when its kind is set."""
    if kind is None:
        return None
    return _IMPLIED_MASKS.get(kind)


def _group(digits: str, sizes: tuple[int, ...], render) -> str:
    parts: list[str] = []
    start = 0
    for size in sizes:
        if start >= len(digits):
            break
        parts.append(digits[start : start + size])
        start += size
    return render(parts)


def _format_ssn(raw: str) -> str:
    digits = _NON_DIGIT.sub("", raw)[:9]
    return _group(digits, (3, 2, 4), "-".join)


def _format_us_postal(raw: str) -> str:
    digits = _NON_DIGIT.sub("", raw)[:9]
    return _group(digits, (5, 4), "-".join)


def _render_phone(parts: list[str]) -> str:
    if len(parts) <= 1:
        return "".join(parts)
    head = f"({parts[0]}) {parts[1]}"
    return f"{head}-{parts[2]}" if len(parts) == 3 else head


def _format_phone(raw: str) -> str:
    digits = _NON_DIGIT.sub("", raw)[:10]
    return _group(digits, (3, 3, 4), _render_phone)


def _format_credit_card(raw: str) -> str:
    digits = _NON_DIGIT.sub("", raw)[:16]
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def _format_time(raw: str) -> str:
    digits = _NON_DIGIT.sub("", raw)[:4]
    return _group(digits, (2, 2), ":".join)


def _format_currency(raw: str) -> str:
    cleaned = _NOT_DIGIT_OR_DOT.sub("", raw)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return ""
    text = match.group(0)
    # Precision grows with the input so long amounts never overflow or round
    amount = Decimal(text).quantize(
        _CENTS, rounding=ROUND_HALF_UP, context=Context(prec=len(text) + 2)
    )
    return f"${amount:,.2f}"


def _format_slug(raw: str) -> str:
    return _SLUG_SEPARATORS.sub("-", raw.lower()).strip("-")


def apply_mask(
    mask_kind: MaskKind | None,
    raw: str,
    custom_pattern: str | None = None,
    multiline: bool = False,
) -> str:
    """Shape raw input according to a mask.

    Args:
        mask_kind: Mask to apply; None passes input through.
        raw: What the user typed, keystroke by keystroke.
        custom_pattern: Regex paired with the ``custom`` mask. It is only
            enforced at validation time, never here.
        multiline: Keep spaces and line breaks for the alphanumeric mask
            (used by textareas).

    Returns:
        The display string.

    Examples:
        >>> apply_mask(MaskKind.CREDIT_CARD, "4111111111111111extra")
        '4111 1111 1111 1111'
        >>> apply_mask(MaskKind.PHONE, "5551234567")
        '(555) 123-4567'
        >>> apply_mask(MaskKind.CURRENCY, "1234.5")
        '$1,234.50'
    """
    if mask_kind is None:
        return raw

    if mask_kind is MaskKind.CREDIT_CARD:
        return _format_credit_card(raw)
    if mask_kind is MaskKind.SSN:
        return _format_ssn(raw)
    if mask_kind is MaskKind.ZIP:
        return _NON_DIGIT.sub("", raw)[:5]
    if mask_kind is MaskKind.US_POSTAL:
        return _format_us_postal(raw)
    if mask_kind is MaskKind.PHONE:
        return _format_phone(raw)
    if mask_kind is MaskKind.CURRENCY:
        return _format_currency(raw)
    if mask_kind is MaskKind.DECIMAL:
        return _NOT_DIGIT_OR_DOT.sub("", raw)
    if mask_kind is MaskKind.TIME:
        return _format_time(raw)
    if mask_kind is MaskKind.ALPHANUMERIC:
        pattern = _NOT_ALNUM_MULTILINE if multiline else _NOT_ALNUM
        return pattern.sub("", raw)
    if mask_kind is MaskKind.SLUG:
        return _format_slug(raw)
    if mask_kind is MaskKind.ALPHA:
        return _NOT_ALPHA.sub("", raw)

    # custom, email and url shape validation only
    return raw
