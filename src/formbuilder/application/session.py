"""Form session controller.

A ``FormSession`` owns one form schema together with the current values,
the current errors and the builder's editing state. Every intent coming
from the hosting UI goes through one of its methods; masking and
validation are delegated to the pure domain services.

State machine:
    Idle                 no field is loaded in the builder
    Editing(field_id)    the builder draft is bound to an existing field

``edit_field`` moves Idle -> Editing, ``save_edit`` and ``cancel_edit``
move back to Idle. Adding a field is only possible while Idle, and a
field cannot be deleted while it is the one being edited.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterator

from formbuilder.domain import (
    Direction,
    FieldDraft,
    FieldKind,
    FieldSchema,
    HeaderLevel,
    LayoutRow,
    LayoutWidth,
    SchemaError,
    SpacerSize,
    Viewport,
    apply_mask,
    compute_default_value,
    finalize,
    segment,
    validate,
)

from .dtos import FieldState, SessionSnapshot

logger = logging.getLogger(__name__)


class SessionStateError(Exception):
    """Raised when an intent is not allowed in the session's current state."""


class FieldNotFoundError(KeyError):
    """Raised when an intent addresses a field the session does not have."""

    def __init__(self, ref: int | str) -> None:
        self.ref = ref
        super().__init__(f"Field not found: {ref}")

    def __str__(self) -> str:
        return self.args[0]


class FormSession:
    """Mutable state of one form: schema, values, errors and editing state.

    The session is driven by one caller at a time; it is not thread-safe.
    Hosts read state through ``snapshot()`` and never mutate it directly.

    Example:
        session = FormSession()
        draft = session.draft
        draft.set_kind(FieldKind.TEXT)
        draft.name, draft.label = "first_name", "First name"
        session.add_field()
        session.change_value("first_name", "Ada")
        if session.submit():
            print(session.submitted_data())
    """

    def __init__(self) -> None:
        self._fields: list[FieldSchema] = []
        self._values: dict[str, str] = {}
        self._errors: dict[str, str | None] = {}
        self._editing_id: int | None = None
        self._last_id = 0
        # match-field target name -> ids of fields referencing it
        self._dependents: dict[str, set[int]] = {}
        self.draft = FieldDraft()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def fields(self) -> tuple[FieldSchema, ...]:
        return tuple(self._fields)

    @property
    def editing_field_id(self) -> int | None:
        return self._editing_id

    def snapshot(self) -> SessionSnapshot:
        """Immutable copy of the current state."""
        return SessionSnapshot(
            fields=tuple(self._fields),
            values=self._values,
            errors=self._errors,
            editing_field_id=self._editing_id,
        )

    def get_field(self, ref: int | str) -> FieldSchema:
        """Look up a field by id or by name.

        Raises:
            FieldNotFoundError: If no field matches.
        """
        for f in self._fields:
            if (isinstance(ref, int) and f.id == ref) or f.name == ref:
                return f
        raise FieldNotFoundError(ref)

    def dependents_of(self, name: str) -> frozenset[int]:
        """Ids of the fields whose must-equal rule references ``name``."""
        return frozenset(self._dependents.get(name, ()))

    def layout(self, viewport: Viewport) -> list[LayoutRow]:
        return segment(self._fields, viewport)

    def next_id(self) -> int:
        """Hand out a fresh field id. Ids are never reused."""
        self._last_id += 1
        return self._last_id

    def _value_fields(self) -> Iterator[FieldSchema]:
        return (f for f in self._fields if not f.is_structural)

    def _rebuild_dependencies(self) -> None:
        index: dict[str, set[int]] = {}
        for f in self._value_fields():
            target = f.constraints.match_field
            if target:
                index.setdefault(target, set()).add(f.id)
        self._dependents = index

    # ------------------------------------------------------------------
    # Schema intents
    # ------------------------------------------------------------------

    def add_field(self, draft: FieldDraft | None = None) -> FieldSchema | SchemaError:
        """Finalize a draft and append it to the schema.

        Args:
            draft: Draft to add; defaults to the session's builder draft.

        Returns:
            The new field (with a fresh id) or the SchemaError that kept
            it out of the schema.

        Raises:
            SessionStateError: If a field is currently being edited.
        """
        if self._editing_id is not None:
            raise SessionStateError(
                f"Cannot add a field while field {self._editing_id} is being edited"
            )
        draft = draft if draft is not None else self.draft
        result = finalize(draft, self._fields)
        if isinstance(result, SchemaError):
            logger.debug(f"Rejected new field: {result.message}")
            return result

        schema = replace(result, id=self.next_id())
        self._fields.append(schema)
        if not schema.is_structural:
            self._values[schema.name] = compute_default_value(schema)
        self._rebuild_dependencies()
        self.draft = FieldDraft()
        logger.debug(f"Added field {schema.id} '{schema.name}' ({schema.kind.value})")
        return schema

    def edit_field(self, field_id: int) -> FieldDraft:
        """Load a field into the builder draft and enter the editing state.

        Raises:
            FieldNotFoundError: If no field has this id.
        """
        schema = self.get_field(field_id)
        self.draft = FieldDraft.from_schema(schema)
        self._editing_id = schema.id
        logger.debug(f"Editing field {schema.id}")
        return self.draft

    def save_edit(self, draft: FieldDraft | None = None) -> FieldSchema | SchemaError:
        """Replace the field being edited, keeping its id and position.

        A renamed field carries its stored value over to the new name. The
        default value is seeded only when the field had no value.

        Returns:
            The updated field, or the SchemaError that kept the edit open.

        Raises:
            SessionStateError: If no field is being edited.
        """
        if self._editing_id is None:
            raise SessionStateError("No field is being edited")
        draft = draft if draft is not None else self.draft
        field_id = self._editing_id
        result = finalize(draft, self._fields, field_id=field_id)
        if isinstance(result, SchemaError):
            logger.debug(f"Rejected edit of field {field_id}: {result.message}")
            return result

        position = next(i for i, f in enumerate(self._fields) if f.id == field_id)
        previous = self._fields[position]
        self._fields[position] = result

        if previous.name != result.name or result.is_structural:
            carried = self._values.pop(previous.name, "")
            self._errors.pop(previous.name, None)
            if not result.is_structural:
                self._values[result.name] = carried
        if not result.is_structural and not self._values.get(result.name):
            self._values[result.name] = compute_default_value(result)

        self._rebuild_dependencies()
        self._editing_id = None
        self.draft = FieldDraft()
        logger.debug(f"Saved field {field_id} '{result.name}'")
        return result

    update_field = save_edit

    def cancel_edit(self) -> None:
        """Leave the editing state, discarding draft changes."""
        if self._editing_id is not None:
            logger.debug(f"Cancelled edit of field {self._editing_id}")
        self._editing_id = None
        self.draft = FieldDraft()

    def move_field(self, index: int, direction: Direction) -> bool:
        """Swap a field with its neighbour.

        Returns:
            True if the field moved; False at either boundary or for an
            index out of range.
        """
        target = index - 1 if direction is Direction.UP else index + 1
        if not (0 <= index < len(self._fields)) or not (0 <= target < len(self._fields)):
            return False
        self._fields[index], self._fields[target] = self._fields[target], self._fields[index]
        return True

    def delete_field(self, index: int) -> bool:
        """Remove the field at ``index`` and purge its value and error.

        Returns:
            True if removed; False for an index out of range or when the
            field is the one currently being edited.
        """
        if not 0 <= index < len(self._fields):
            return False
        removed = self._fields[index]
        if removed.id == self._editing_id:
            logger.warning(f"Refusing to delete field {removed.id} while it is being edited")
            return False

        del self._fields[index]
        if not removed.is_structural:
            self._values.pop(removed.name, None)
            self._errors.pop(removed.name, None)
        self._rebuild_dependencies()
        logger.debug(f"Deleted field {removed.id} '{removed.name}'")
        return True

    def insert_structural_block(
        self,
        at_index: int,
        kind: FieldKind,
        level: HeaderLevel | None = None,
        spacer_size: SpacerSize | None = None,
    ) -> FieldSchema:
        """Insert a header or spacer right after the field at ``at_index``.

        A negative index inserts at the top; an index past the end appends.

        Raises:
            ValueError: If ``kind`` is not structural.
        """
        if not kind.is_structural:
            raise ValueError(f"'{kind.value}' is not a structural kind")

        block_id = self.next_id()
        if kind is FieldKind.HEADER:
            level = level or HeaderLevel.H2
            block = FieldSchema(
                id=block_id,
                kind=kind,
                name=f"header_{block_id}",
                label="Header" if level in (HeaderLevel.H1, HeaderLevel.H2) else "Subheader",
                layout_width=LayoutWidth.FULL,
                header_level=level,
            )
        else:
            block = FieldSchema(
                id=block_id,
                kind=kind,
                name=f"spacer_{block_id}",
                label="",
                layout_width=LayoutWidth.FULL,
                spacer_size=spacer_size or SpacerSize.MD,
            )

        target = 0 if at_index < 0 else min(at_index + 1, len(self._fields))
        self._fields.insert(target, block)
        logger.debug(f"Inserted {kind.value} block {block_id} at {target}")
        return block

    # ------------------------------------------------------------------
    # Value intents
    # ------------------------------------------------------------------

    def change_value(self, field: FieldSchema | int | str, raw: str) -> FieldState:
        """Apply user input to a field.

        The raw input is masked, validated against the form values as they
        would be after the change, and stored together with its error.
        Fields whose must-equal rule references this field are then
        re-validated so their errors follow the new value.

        Args:
            field: The field, or its id or name.
            raw: Raw input as typed.

        Returns:
            The stored value and its error.

        Raises:
            FieldNotFoundError: If the field is not part of the schema.
        """
        schema = self.get_field(field.id if isinstance(field, FieldSchema) else field)
        if schema.is_structural:
            return FieldState(value="")

        value = raw
        if schema.kind.supports_masking:
            value = apply_mask(
                schema.mask_kind,
                raw,
                custom_pattern=schema.constraints.pattern,
                multiline=schema.kind is FieldKind.TEXTAREA,
            )

        hypothetical = {**self._values, schema.name: value}
        error = validate(value, schema, hypothetical, self._fields)
        self._values[schema.name] = value
        self._errors[schema.name] = error

        for dependent_id in sorted(self._dependents.get(schema.name, ())):
            dependent = self.get_field(dependent_id)
            self._errors[dependent.name] = validate(
                self._values.get(dependent.name, ""), dependent, self._values, self._fields
            )
        return FieldState(value=value, error=error)

    def submit(self) -> bool:
        """Validate every value-bearing field.

        The first pass validates each field's own value; an empty
        non-selection, non-file field falls back to its computed default.
        A second pass re-checks every field with a must-equal rule against
        the stored values. The error map is replaced by the result.

        Returns:
            True when no field has an error.
        """
        errors: dict[str, str | None] = {}
        for f in self._value_fields():
            value = self._values.get(f.name, "")
            if not value and not (f.kind.is_selection or f.kind is FieldKind.FILE):
                value = compute_default_value(f)
            errors[f.name] = validate(value, f, {**self._values, f.name: value}, self._fields)

        for f in self._value_fields():
            if f.constraints.match_field:
                error = validate(self._values.get(f.name, ""), f, self._values, self._fields)
                if error:
                    errors[f.name] = error

        self._errors = errors
        failed = sum(1 for error in errors.values() if error)
        if failed:
            logger.info(f"Submit rejected: {failed} field(s) with errors")
            return False
        logger.info(f"Submit accepted: {len(errors)} field(s)")
        return True

    def submitted_data(self) -> dict[str, str]:
        """Values of value-bearing fields in field order."""
        return {f.name: self._values.get(f.name, "") for f in self._value_fields()}

    def reset(self) -> None:
        """Restore every value to its default and clear every error."""
        self._values = {f.name: compute_default_value(f) for f in self._value_fields()}
        self._errors = {f.name: None for f in self._value_fields()}
