"""Pydantic schemas for the REST API."""

from formbuilder.web.schemas.converters import (
    control_to_schema,
    field_to_schema,
    layout_to_schema,
    snapshot_to_schema,
)
from formbuilder.web.schemas.requests import (
    CreateSessionRequest,
    FormValidateRequest,
    MaskRequest,
    MoveFieldRequest,
    StructuralBlockRequest,
    ValueChangeRequest,
)
from formbuilder.web.schemas.responses import (
    ActionResultSchema,
    ControlSchema,
    ErrorResponseSchema,
    FieldSchemaOut,
    FieldStateSchema,
    LayoutItemSchema,
    LayoutRowSchema,
    LayoutSchema,
    MaskListSchema,
    MaskPresetSchema,
    MaskResponseSchema,
    OptionSchema,
    OptionStateSchema,
    SnapshotSchema,
    SubmitResultSchema,
    TemplateContentSchema,
    TemplateListItemSchema,
    TemplateListSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "CreateSessionRequest",
    "FormValidateRequest",
    "MaskRequest",
    "MoveFieldRequest",
    "StructuralBlockRequest",
    "ValueChangeRequest",
    # Responses
    "ActionResultSchema",
    "ControlSchema",
    "ErrorResponseSchema",
    "FieldSchemaOut",
    "FieldStateSchema",
    "LayoutItemSchema",
    "LayoutRowSchema",
    "LayoutSchema",
    "MaskListSchema",
    "MaskPresetSchema",
    "MaskResponseSchema",
    "OptionSchema",
    "OptionStateSchema",
    "SnapshotSchema",
    "SubmitResultSchema",
    "TemplateContentSchema",
    "TemplateListItemSchema",
    "TemplateListSchema",
    "ValidationResultSchema",
    # Converters
    "control_to_schema",
    "field_to_schema",
    "layout_to_schema",
    "snapshot_to_schema",
]
