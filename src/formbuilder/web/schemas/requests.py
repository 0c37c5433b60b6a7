"""Pydantic request schemas for the REST API."""

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from formbuilder.domain import Direction, HeaderLevel, MaskKind, SpacerSize


class CreateSessionRequest(BaseModel):
    """Request for creating a form session.

    At most one source may be given; with none the session starts empty.
    """

    document: dict[str, Any] | None = Field(default=None, description="Form document JSON")
    template: str | None = Field(default=None, description="Bundled template name")

    @model_validator(mode="after")
    def single_source(self) -> "CreateSessionRequest":
        if self.document is not None and self.template is not None:
            raise ValueError("give either a document or a template, not both")
        return self


class FormValidateRequest(BaseModel):
    """Request for validating a form document."""

    document: dict[str, Any] = Field(..., description="Form document JSON")


class MoveFieldRequest(BaseModel):
    """Request for moving a field one position."""

    direction: Direction = Field(..., description="up or down")


class StructuralBlockRequest(BaseModel):
    """Request for inserting a header or spacer."""

    kind: Literal["header", "spacer"] = Field(..., description="Block kind")
    at_index: int = Field(
        default=-1, description="Insert after this position; negative inserts at the top"
    )
    level: HeaderLevel | None = Field(default=None, description="Header level")
    spacer_size: SpacerSize | None = Field(default=None, description="Spacer size")


class ValueChangeRequest(BaseModel):
    """Raw input for one field."""

    value: str = Field(..., description="Raw input as typed")


class MaskRequest(BaseModel):
    """Request for applying a mask to raw input."""

    mask: MaskKind = Field(..., description="Mask to apply")
    raw: str = Field(..., description="Raw input")
    pattern: str | None = Field(default=None, description="Regex for the custom mask")
    multiline: bool = Field(default=False, description="Keep line breaks")
