"""Conversion from domain and application objects to response schemas."""

from dataclasses import asdict, fields as dataclass_fields

from formbuilder.application import SessionSnapshot
from formbuilder.domain import (
    ColumnsRow,
    Constraints,
    FieldSchema,
    LayoutItem,
    LayoutRow,
    Viewport,
)
from formbuilder.infrastructure import ControlSpec, describe_control
from formbuilder.web.schemas.responses import (
    ControlSchema,
    FieldSchemaOut,
    LayoutItemSchema,
    LayoutRowSchema,
    LayoutSchema,
    OptionSchema,
    OptionStateSchema,
    SnapshotSchema,
)

_DEFAULT_CONSTRAINTS = Constraints()


def _set_constraints(constraints: Constraints) -> dict:
    """Constraints that differ from their defaults."""
    result = {}
    for f in dataclass_fields(constraints):
        value = getattr(constraints, f.name)
        if value != getattr(_DEFAULT_CONSTRAINTS, f.name):
            result[f.name] = list(value) if isinstance(value, tuple) else value
    return result


def field_to_schema(schema: FieldSchema) -> FieldSchemaOut:
    return FieldSchemaOut(
        id=schema.id,
        kind=schema.kind.value,
        name=schema.name,
        label=schema.label,
        layout_width=schema.layout_width.value,
        mask_kind=schema.mask_kind.value if schema.mask_kind else None,
        placeholder=schema.placeholder,
        constraints=_set_constraints(schema.constraints),
        options=[OptionSchema(**asdict(o)) for o in schema.options],
        orientation=schema.orientation.value,
        multiple=schema.multiple,
        rows=schema.rows,
        header_level=schema.header_level.value if schema.header_level else None,
        spacer_size=schema.spacer_size.value if schema.spacer_size else None,
        hide_on_small=schema.hide_on_small,
    )


def snapshot_to_schema(session_id: str, snapshot: SessionSnapshot) -> SnapshotSchema:
    return SnapshotSchema(
        session_id=session_id,
        fields=[field_to_schema(f) for f in snapshot.fields],
        values=dict(snapshot.values),
        errors=dict(snapshot.errors),
        editing_field_id=snapshot.editing_field_id,
    )


def control_to_schema(control: ControlSpec) -> ControlSchema:
    return ControlSchema(
        control=control.control,
        input_type=control.input_type,
        name=control.name,
        label=control.label,
        value=control.value,
        error=control.error,
        placeholder=control.placeholder,
        attributes=dict(control.attributes),
        options=[OptionStateSchema(**asdict(o)) for o in control.options],
        orientation=control.orientation,
        header_level=control.header_level,
        spacer_size=control.spacer_size,
    )


def _item_to_schema(item: LayoutItem, snapshot: SessionSnapshot) -> LayoutItemSchema:
    name = item.field.name
    control = describe_control(item.field, snapshot.value_of(name), snapshot.error_of(name))
    return LayoutItemSchema(
        index=item.index,
        field_id=item.field.id,
        visible=item.visible,
        control=control_to_schema(control),
    )


def layout_to_schema(
    rows: list[LayoutRow], snapshot: SessionSnapshot, viewport: Viewport
) -> LayoutSchema:
    converted: list[LayoutRowSchema] = []
    for row in rows:
        if isinstance(row, ColumnsRow):
            converted.append(
                LayoutRowSchema(
                    type="columns",
                    left=[_item_to_schema(i, snapshot) for i in row.left],
                    right=[_item_to_schema(i, snapshot) for i in row.right],
                )
            )
        else:
            converted.append(LayoutRowSchema(type="full", item=_item_to_schema(row.item, snapshot)))
    return LayoutSchema(viewport=viewport.value, rows=converted)
