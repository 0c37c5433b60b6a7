"""Value objects for the form domain.

This module provides the immutable data types used throughout the form
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Kinds and presentation enums
from ._kinds import (
    Direction,
    FieldKind,
    HeaderLevel,
    LayoutWidth,
    MaskKind,
    Orientation,
    SpacerSize,
    Viewport,
)

# Options of selection fields
from ._options import FieldOption

# Validation rules
from ._constraints import (
    BOUND_PAIRS,
    NON_NEGATIVE_BOUNDS,
    Constraints,
    parse_datetime,
)

# File metadata
from ._files import UploadedFile, parse_files, serialize_files

# Layout rows
from ._layout import ColumnsRow, FullRow, LayoutItem, LayoutRow

__all__ = [
    # Kinds
    "Direction",
    "FieldKind",
    "HeaderLevel",
    "LayoutWidth",
    "MaskKind",
    "Orientation",
    "SpacerSize",
    "Viewport",
    # Options
    "FieldOption",
    # Constraints
    "BOUND_PAIRS",
    "NON_NEGATIVE_BOUNDS",
    "Constraints",
    "parse_datetime",
    # Files
    "UploadedFile",
    "parse_files",
    "serialize_files",
    # Layout
    "ColumnsRow",
    "FullRow",
    "LayoutItem",
    "LayoutRow",
]
