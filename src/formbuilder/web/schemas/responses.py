"""Pydantic response schemas for the REST API."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class OptionSchema(BaseModel):
    """One choice of a selection field."""

    label: str
    value: str
    default_selected: bool = False


class FieldSchemaOut(BaseModel):
    """A finalized field."""

    id: int = Field(..., description="Field id, unique within the session")
    kind: str = Field(..., description="Field kind")
    name: str = Field(..., description="Value key")
    label: str = Field(..., description="Display label")
    layout_width: str = Field(..., description="full or half")
    mask_kind: str | None = Field(default=None, description="Live input mask")
    placeholder: str = ""
    constraints: dict[str, Any] = Field(
        default_factory=dict, description="Constraints that are set"
    )
    options: list[OptionSchema] = Field(default_factory=list)
    orientation: str = "vertical"
    multiple: bool = False
    rows: int | None = None
    header_level: str | None = None
    spacer_size: str | None = None
    hide_on_small: bool = False


class SnapshotSchema(BaseModel):
    """Full state of a form session."""

    session_id: str = Field(..., description="Session identifier")
    fields: list[FieldSchemaOut] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)
    errors: dict[str, str | None] = Field(default_factory=dict)
    editing_field_id: int | None = Field(default=None, description="Field being edited")


class ActionResultSchema(BaseModel):
    """Result of an intent that may be a no-op (move, delete)."""

    changed: bool = Field(..., description="Whether the schema changed")
    snapshot: SnapshotSchema


class FieldStateSchema(BaseModel):
    """Value and error of one field after a change."""

    name: str
    value: str
    error: str | None = None
    dependent_errors: dict[str, str | None] = Field(
        default_factory=dict, description="Errors of fields that must equal this one"
    )


class SubmitResultSchema(BaseModel):
    """Outcome of a submit."""

    accepted: bool = Field(..., description="True when every field passed")
    errors: dict[str, str] = Field(default_factory=dict, description="Failing fields")
    data: dict[str, str] | None = Field(default=None, description="Submitted data when accepted")


class OptionStateSchema(BaseModel):
    label: str
    value: str
    selected: bool


class ControlSchema(BaseModel):
    """Render contract of one field."""

    control: str
    input_type: str | None = None
    name: str
    label: str
    value: str = ""
    error: str | None = None
    placeholder: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)
    options: list[OptionStateSchema] = Field(default_factory=list)
    orientation: str | None = None
    header_level: str | None = None
    spacer_size: str | None = None


class LayoutItemSchema(BaseModel):
    index: int = Field(..., description="Position in the field list")
    field_id: int
    visible: bool = True
    control: ControlSchema


class LayoutRowSchema(BaseModel):
    """A full-width row or a two-lane columns row."""

    type: Literal["full", "columns"]
    item: LayoutItemSchema | None = None
    left: list[LayoutItemSchema] = Field(default_factory=list)
    right: list[LayoutItemSchema] = Field(default_factory=list)


class LayoutSchema(BaseModel):
    viewport: str
    rows: list[LayoutRowSchema]


class MaskResponseSchema(BaseModel):
    """Masked value plus the builder preset of the mask."""

    value: str
    placeholder: str = ""
    pattern: str | None = None
    max_length: int | None = None


class MaskPresetSchema(BaseModel):
    mask: str
    placeholder: str = ""
    pattern: str | None = None
    max_length: int | None = None


class MaskListSchema(BaseModel):
    masks: list[MaskPresetSchema]


class ValidationResultSchema(BaseModel):
    """Response for form document validation."""

    is_valid: bool = Field(..., description="Whether the document is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Validation errors")
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class TemplateListItemSchema(BaseModel):
    """Single template in the list."""

    name: str = Field(..., description="Template name")
    title: str = Field(default="", description="Form title")
    description: str = Field(..., description="Template description")


class TemplateListSchema(BaseModel):
    """Response for template listing."""

    templates: list[TemplateListItemSchema] = Field(..., description="Available templates")


class TemplateContentSchema(BaseModel):
    """Response for template content."""

    name: str = Field(..., description="Template name")
    description: str = Field(..., description="Template description")
    content: dict[str, Any] = Field(..., description="Form document content")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
