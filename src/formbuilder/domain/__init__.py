"""Domain layer - field model, masking, validation and layout."""

from .entities import FieldDraft, FieldSchema
from .schema_builder import (
    DuplicateName,
    InsufficientOptions,
    MissingLabel,
    MissingName,
    MissingType,
    SchemaError,
    compute_default_value,
    create_draft,
    finalize,
)
from .services import apply_mask, mask_preset, segment, validate
from .value_objects import (
    ColumnsRow,
    Constraints,
    Direction,
    FieldKind,
    FieldOption,
    FullRow,
    HeaderLevel,
    LayoutItem,
    LayoutRow,
    LayoutWidth,
    MaskKind,
    Orientation,
    SpacerSize,
    UploadedFile,
    Viewport,
    parse_files,
    serialize_files,
)

__all__ = [
    "ColumnsRow",
    "Constraints",
    "Direction",
    "DuplicateName",
    "FieldDraft",
    "FieldKind",
    "FieldOption",
    "FieldSchema",
    "FullRow",
    "HeaderLevel",
    "InsufficientOptions",
    "LayoutItem",
    "LayoutRow",
    "LayoutWidth",
    "MaskKind",
    "MissingLabel",
    "MissingName",
    "MissingType",
    "Orientation",
    "SchemaError",
    "SpacerSize",
    "UploadedFile",
    "Viewport",
    "apply_mask",
    "compute_default_value",
    "create_draft",
    "finalize",
    "mask_preset",
    "parse_files",
    "segment",
    "serialize_files",
    "validate",
]
