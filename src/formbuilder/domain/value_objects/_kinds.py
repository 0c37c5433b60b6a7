"""Field kinds and the small enums that describe how a field is presented."""

from __future__ import annotations

from enum import Enum


class LayoutWidth(str, Enum):
    """Horizontal footprint of a field in the two-lane layout."""

    FULL = "full"
    HALF = "half"


class FieldKind(str, Enum):
    """Closed set of field kinds a form schema may contain.

    ``HEADER`` and ``SPACER`` are structural: they take part in layout but
    never hold a value, are never validated and never appear in submitted
    data. Every other kind is value-bearing.
    """

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    URL = "url"
    TEL = "tel"
    NUMBER = "number"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    FILE = "file"
    CHECKBOX_GROUP = "checkbox-group"
    RADIO_GROUP = "radio-group"
    SELECT = "select"
    TEXTAREA = "textarea"
    HEADER = "header"
    SPACER = "spacer"

    @property
    def is_structural(self) -> bool:
        return self in _STRUCTURAL

    @property
    def is_value_bearing(self) -> bool:
        return self not in _STRUCTURAL

    @property
    def is_selection(self) -> bool:
        return self in _SELECTION

    @property
    def is_text_like(self) -> bool:
        return self in _TEXT_LIKE

    @property
    def is_numeric(self) -> bool:
        return self in (FieldKind.NUMBER, FieldKind.CURRENCY)

    @property
    def is_date(self) -> bool:
        return self in (FieldKind.DATE, FieldKind.DATETIME)

    @property
    def supports_masking(self) -> bool:
        """Whether live input masks may be attached to this kind."""
        return self in _MASKABLE

    @property
    def default_layout(self) -> LayoutWidth:
        if self in (FieldKind.FILE, FieldKind.HEADER, FieldKind.SPACER):
            return LayoutWidth.FULL
        return LayoutWidth.HALF

    @property
    def min_options(self) -> int:
        """Minimum number of options a finalized field of this kind needs."""
        if self is FieldKind.RADIO_GROUP:
            return 2
        if self in (FieldKind.CHECKBOX_GROUP, FieldKind.SELECT):
            return 1
        return 0

    @property
    def single_default(self) -> bool:
        """Radio groups and selects allow at most one pre-selected option."""
        return self in (FieldKind.RADIO_GROUP, FieldKind.SELECT)


_STRUCTURAL = frozenset({FieldKind.HEADER, FieldKind.SPACER})
_SELECTION = frozenset(
    {FieldKind.CHECKBOX_GROUP, FieldKind.RADIO_GROUP, FieldKind.SELECT}
)
_TEXT_LIKE = frozenset(
    {
        FieldKind.TEXT,
        FieldKind.EMAIL,
        FieldKind.PASSWORD,
        FieldKind.URL,
        FieldKind.TEL,
        FieldKind.TEXTAREA,
    }
)
_MASKABLE = frozenset(
    {
        FieldKind.TEXT,
        FieldKind.EMAIL,
        FieldKind.URL,
        FieldKind.TEL,
        FieldKind.TEXTAREA,
        FieldKind.CURRENCY,
    }
)


class MaskKind(str, Enum):
    """Live input masks.

    ``EMAIL`` and ``URL`` are the presets implied by the email and url
    field kinds; like ``CUSTOM`` they shape validation only and never
    rewrite what the user typed.
    """

    CREDIT_CARD = "credit-card"
    SSN = "ssn"
    ZIP = "zip"
    US_POSTAL = "us-postal"
    PHONE = "phone"
    CURRENCY = "currency"
    DECIMAL = "decimal"
    TIME = "time"
    ALPHANUMERIC = "alphanumeric"
    SLUG = "slug"
    ALPHA = "alpha"
    EMAIL = "email"
    URL = "url"
    CUSTOM = "custom"


class Orientation(str, Enum):
    """Arrangement of checkbox and radio choices."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class HeaderLevel(str, Enum):
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"


class SpacerSize(str, Enum):
    SM = "sm"
    MD = "md"
    LG = "lg"


class Viewport(str, Enum):
    """Viewport classes used by layout segmentation."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def from_width(cls, width_px: int) -> "Viewport":
        """Classify a viewport by its pixel width.

        Args:
            width_px: Width of the rendering surface in CSS pixels.

        Returns:
            SMALL below 640px, MEDIUM below 1024px, LARGE otherwise.
        """
        if width_px < 640:
            return cls.SMALL
        if width_px < 1024:
            return cls.MEDIUM
        return cls.LARGE


class Direction(str, Enum):
    """Direction for reordering a field within the schema."""

    UP = "up"
    DOWN = "down"
