"""Pydantic models for JSON form documents.

A form document describes a complete form: its fields in display order
and, optionally, initial values to apply once the form is built. Field
keys use snake_case; unknown keys are rejected so typos surface as
validation errors rather than being silently ignored.

Example document:
    {
      "schema_version": "1.0",
      "title": "Contact",
      "fields": [
        {"kind": "text", "name": "full_name", "label": "Full name",
         "constraints": {"required": true, "min_length": 2}},
        {"kind": "email", "name": "email", "label": "Email",
         "constraints": {"required": true}}
      ]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from formbuilder.domain.value_objects import (
    FieldKind,
    HeaderLevel,
    LayoutWidth,
    MaskKind,
    Orientation,
    SpacerSize,
)

SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class OptionConfig(BaseModel):
    """One choice of a checkbox group, radio group or select."""

    model_config = ConfigDict(extra="forbid")

    label: str
    value: str = Field(..., min_length=1)
    default_selected: bool = False

    @field_validator("value")
    @classmethod
    def value_has_no_comma(cls, v: str) -> str:
        if "," in v:
            raise ValueError("option values cannot contain commas")
        return v


class ConstraintsConfig(BaseModel):
    """Validation rules of a field. Every rule is optional."""

    model_config = ConfigDict(extra="forbid")

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
    allowed_values: list[str] | None = None
    disallowed_values: list[str] | None = None
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
    max_file_size_mb: float | None = Field(default=None, ge=0)
    match_field: str | None = None
    custom_error_message: str | None = None


class FieldConfig(BaseModel):
    """One field of a form document.

    Only ``kind`` is always required. Value-bearing kinds also need a
    name and a label, which is checked when the form is built so the
    failure is reported the same way as in the interactive builder.
    """

    model_config = ConfigDict(extra="forbid")

    kind: FieldKind
    name: str = ""
    label: str = ""
    layout_width: LayoutWidth | None = None
    mask: MaskKind | None = None
    placeholder: str | None = None
    constraints: ConstraintsConfig = Field(default_factory=ConstraintsConfig)
    options: list[OptionConfig] | None = None
    orientation: Orientation = Orientation.VERTICAL
    multiple: bool = False
    rows: int | None = Field(default=None, ge=1)
    header_level: HeaderLevel | None = None
    spacer_size: SpacerSize | None = None
    hide_on_small: bool = False

    @model_validator(mode="after")
    def mask_fits_kind(self) -> "FieldConfig":
        if self.mask is not None and not self.kind.supports_masking:
            raise ValueError(f"fields of kind '{self.kind.value}' do not support masks")
        return self


class FormDocument(BaseModel):
    """Root model of a form document."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = "1.0"
    title: str = ""
    description: str = ""
    fields: list[FieldConfig] = Field(default_factory=list)
    values: dict[str, str] = Field(default_factory=dict)

    @field_validator("schema_version")
    @classmethod
    def version_supported(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"unsupported schema_version '{v}' (supported: {supported})")
        return v
