"""Control descriptions for the per-field render contract.

A host renders each field from a ``ControlSpec``: which control to draw,
its HTML-style input type, the attributes derived from the field's
constraints and the checked state of every option. Masking and
validation never happen here; the host feeds raw input back through
``FormSession.change_value``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from formbuilder.domain import FieldKind, FieldSchema, Viewport
from formbuilder.domain.services import format_number

if TYPE_CHECKING:
    from formbuilder.application import FieldState, FormSession
    from formbuilder.contracts import FieldRenderer

_INPUT_TYPES: dict[FieldKind, str] = {
    FieldKind.TEXT: "text",
    FieldKind.EMAIL: "email",
    FieldKind.PASSWORD: "password",
    FieldKind.URL: "url",
    FieldKind.TEL: "tel",
    FieldKind.NUMBER: "number",
    # masked "$1,234.50" text
    FieldKind.CURRENCY: "text",
    FieldKind.DATE: "date",
    FieldKind.DATETIME: "datetime-local",
    FieldKind.FILE: "file",
}

_DATE_FORMATS: dict[FieldKind, re.Pattern[str]] = {
    FieldKind.DATE: re.compile(r"^\d{4}-\d{2}-\d{2}$"),
    FieldKind.DATETIME: re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}$"),
}


def normalize_date_value(value: str | None, kind: FieldKind) -> str:
    """Value a native date control accepts, or "" when it would reject it.

    Date controls take ``YYYY-MM-DD``; date-time controls take
    ``YYYY-MM-DDTHH:MM``. Any other string renders as empty.
    """
    if not value:
        return ""
    pattern = _DATE_FORMATS.get(kind)
    if pattern is None:
        return ""
    return value if pattern.match(value) else ""


@dataclass(frozen=True)
class OptionState:
    """One choice of a selection control with its checked state."""

    label: str
    value: str
    selected: bool


@dataclass(frozen=True)
class ControlSpec:
    """Everything a host needs to draw one field.

    Attributes:
        control: Control family: input, textarea, select, checkbox-group,
            radio-group, header or spacer.
        input_type: Input type for the ``input`` family, else None.
        name: Field name, used as the control name.
        label: Display label.
        value: Value to show in the control.
        error: Inline error, if any.
        placeholder: Hint text.
        attributes: Native constraint attributes (min, max, step,
            minlength, maxlength, pattern, multiple, accept, rows).
        options: Choices with their checked state.
        orientation: Choice arrangement for checkbox and radio groups.
        header_level: Heading level for headers.
        spacer_size: Height class for spacers.
    """

    control: str
    name: str
    label: str
    value: str = ""
    error: str | None = None
    input_type: str | None = None
    placeholder: str = ""
    attributes: dict[str, Any] = field(default_factory=dict)
    options: tuple[OptionState, ...] = ()
    orientation: str | None = None
    header_level: str | None = None
    spacer_size: str | None = None


def _numeric_attributes(schema: FieldSchema) -> dict[str, Any]:
    c = schema.constraints
    attrs: dict[str, Any] = {}
    if c.min_value is not None:
        attrs["min"] = format_number(c.min_value)
    if c.max_value is not None:
        attrs["max"] = format_number(c.max_value)
    if c.step is not None:
        attrs["step"] = format_number(c.step)
    return attrs


def _text_attributes(schema: FieldSchema) -> dict[str, Any]:
    c = schema.constraints
    attrs: dict[str, Any] = {}
    if c.min_length is not None:
        attrs["minlength"] = c.min_length
    if c.max_length is not None:
        attrs["maxlength"] = c.max_length
    if c.pattern:
        attrs["pattern"] = c.pattern
    return attrs


def describe_control(schema: FieldSchema, value: str = "", error: str | None = None) -> ControlSpec:
    """Describe the control for a field and its current state.

    Args:
        schema: The field to render.
        value: Its current stored value.
        error: Its current error, if any.

    Returns:
        The ControlSpec for the field.
    """
    kind = schema.kind
    base: dict[str, Any] = {"name": schema.name, "label": schema.label, "error": error}

    if kind is FieldKind.HEADER:
        level = schema.header_level.value if schema.header_level else "h2"
        return ControlSpec(control="header", header_level=level, **base)
    if kind is FieldKind.SPACER:
        size = schema.spacer_size.value if schema.spacer_size else "md"
        return ControlSpec(control="spacer", spacer_size=size, **base)

    if kind.is_selection:
        chosen = set(value.split(",")) if schema.is_multi_select else {value}
        options = tuple(
            OptionState(label=o.label, value=o.value, selected=o.value in chosen)
            for o in schema.options
        )
        attrs: dict[str, Any] = {"multiple": True} if schema.is_multi_select else {}
        control = "select" if kind is FieldKind.SELECT else kind.value
        return ControlSpec(
            control=control,
            value=value,
            options=options,
            orientation=None if kind is FieldKind.SELECT else schema.orientation.value,
            attributes=attrs,
            **base,
        )

    if kind is FieldKind.TEXTAREA:
        attrs = _text_attributes(schema)
        if schema.rows:
            attrs["rows"] = schema.rows
        return ControlSpec(
            control="textarea",
            value=value,
            placeholder=schema.placeholder,
            attributes=attrs,
            **base,
        )

    if kind.is_date:
        attrs = {}
        low = normalize_date_value(schema.constraints.min_date, kind)
        high = normalize_date_value(schema.constraints.max_date, kind)
        if low:
            attrs["min"] = low
        if high:
            attrs["max"] = high
        return ControlSpec(
            control="input",
            input_type=_INPUT_TYPES[kind],
            value=normalize_date_value(value, kind),
            attributes=attrs,
            **base,
        )

    if kind is FieldKind.FILE:
        attrs = {}
        if schema.multiple:
            attrs["multiple"] = True
        if schema.constraints.accept:
            attrs["accept"] = schema.constraints.accept
        return ControlSpec(
            control="input", input_type="file", value=value, attributes=attrs, **base
        )

    attrs = _numeric_attributes(schema) if kind is FieldKind.NUMBER else _text_attributes(schema)
    return ControlSpec(
        control="input",
        input_type=_INPUT_TYPES[kind],
        value=value,
        placeholder=schema.placeholder,
        attributes=attrs,
        **base,
    )


def render_session(
    session: FormSession,
    renderer: FieldRenderer,
    viewport: Viewport = Viewport.LARGE,
) -> list[Any]:
    """Render every visible field of a session in layout order.

    Each control's ``on_change`` callback applies raw input to the
    session and returns the resulting ``FieldState``.

    Returns:
        The renderer's results, in the order the controls were drawn.
    """
    snapshot = session.snapshot()
    drawn: list[Any] = []
    for row in session.layout(viewport):
        for item in row.items:
            if not item.visible:
                continue
            schema = item.field
            control = describe_control(
                schema, snapshot.value_of(schema.name), snapshot.error_of(schema.name)
            )

            def on_change(raw: str, field_id: int = schema.id) -> FieldState:
                return session.change_value(field_id, raw)

            drawn.append(renderer.render(control, on_change))
    return drawn
