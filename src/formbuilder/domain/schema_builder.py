"""Draft creation and finalization for form field schemas.

A field is composed as a ``FieldDraft`` in the builder and becomes a
``FieldSchema`` only through ``finalize``, which either returns the
schema or a ``SchemaError`` value describing the first problem found.
Nothing in this module raises for an incomplete or invalid draft.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable

from .entities import FieldDraft, FieldSchema
from .value_objects import FieldKind, FieldOption, HeaderLevel, SpacerSize


@dataclass(frozen=True)
class SchemaError:
    """Base of the errors a draft can fail finalization with."""

    code: ClassVar[str] = "schema_error"

    @property
    def message(self) -> str:
        return "Invalid field definition."

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MissingType(SchemaError):
    code: ClassVar[str] = "missing_type"

    @property
    def message(self) -> str:
        return "Type is required."


@dataclass(frozen=True)
class MissingName(SchemaError):
    code: ClassVar[str] = "missing_name"

    @property
    def message(self) -> str:
        return "Name (key) is required."


@dataclass(frozen=True)
class MissingLabel(SchemaError):
    code: ClassVar[str] = "missing_label"

    @property
    def message(self) -> str:
        return "Label is required."


@dataclass(frozen=True)
class DuplicateName(SchemaError):
    code: ClassVar[str] = "duplicate_name"

    name: str = ""

    @property
    def message(self) -> str:
        return f'Field name "{self.name}" is already in use.'


@dataclass(frozen=True)
class InsufficientOptions(SchemaError):
    code: ClassVar[str] = "insufficient_options"

    kind: FieldKind = FieldKind.RADIO_GROUP
    min_required: int = 1

    @property
    def message(self) -> str:
        noun = "option" if self.min_required == 1 else "options"
        return f"{self.kind.value} fields must have at least {self.min_required} {noun}."


def create_draft(kind: FieldKind | None = None) -> FieldDraft:
    """Start a new draft, applying the defaults of ``kind`` when given."""
    draft = FieldDraft()
    if kind is not None:
        draft.set_kind(kind)
    return draft


def _single_default(options: Iterable[FieldOption]) -> tuple[FieldOption, ...]:
    """Keep only the first pre-selected option."""
    seen = False
    result: list[FieldOption] = []
    for option in options:
        if option.default_selected and seen:
            result.append(FieldOption(label=option.label, value=option.value))
            continue
        seen = seen or option.default_selected
        result.append(option)
    return tuple(result)


def finalize(
    draft: FieldDraft,
    existing_fields: Iterable[FieldSchema],
    field_id: int = 0,
) -> FieldSchema | SchemaError:
    """Turn a draft into a schema, or report why it cannot be one.

    Checks run in order and the first failure is returned: missing kind,
    missing name, missing label, a name already used by another
    value-bearing field, and too few options for the kind. Structural
    kinds need neither name nor label. Constraint bounds are repaired on
    the way out (see ``Constraints.normalized``), and extra defaults on
    single-choice kinds are dropped, keeping the first.

    Args:
        draft: The draft to finalize. It is not modified.
        existing_fields: Fields already in the schema.
        field_id: Id of the field being replaced when editing; 0 for a
            new field. The field with this id is ignored by the
            duplicate-name check.

    Returns:
        The finalized FieldSchema (carrying ``field_id``) or a SchemaError.
    """
    kind = draft.kind
    if kind is None:
        return MissingType()

    name = draft.name.strip()
    label = draft.label.strip()
    if not kind.is_structural:
        if not name:
            return MissingName()
        if not label:
            return MissingLabel()
        for other in existing_fields:
            if other.is_structural or (field_id and other.id == field_id):
                continue
            if other.name == name:
                return DuplicateName(name=name)

    if len(draft.options) < kind.min_options:
        return InsufficientOptions(kind=kind, min_required=kind.min_options)

    options: tuple[FieldOption, ...] = ()
    if kind.is_selection:
        options = tuple(draft.options)
        if kind.single_default and not (kind is FieldKind.SELECT and draft.multiple):
            options = _single_default(options)

    return FieldSchema(
        id=field_id,
        kind=kind,
        name=name,
        label=label,
        layout_width=draft.layout_width,
        mask_kind=draft.mask_kind if kind.supports_masking else None,
        placeholder=draft.placeholder,
        constraints=draft.constraints.normalized(),
        options=options,
        orientation=draft.orientation,
        multiple=draft.multiple,
        rows=draft.rows if kind is FieldKind.TEXTAREA else None,
        header_level=(draft.header_level or HeaderLevel.H2) if kind is FieldKind.HEADER else None,
        spacer_size=(draft.spacer_size or SpacerSize.MD) if kind is FieldKind.SPACER else None,
        hide_on_small=draft.hide_on_small,
    )


def compute_default_value(field: FieldSchema) -> str:
    """Initial value of a field, derived from its pre-selected options.

    Radio groups and single selects take the first default option's value;
    checkbox groups and multi-selects join every default with commas; all
    other kinds start empty.
    """
    if field.is_multi_select:
        return ",".join(o.value for o in field.options if o.default_selected)
    if field.kind in (FieldKind.RADIO_GROUP, FieldKind.SELECT):
        for option in field.options:
            if option.default_selected:
                return option.value
    return ""
