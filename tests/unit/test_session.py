"""Unit tests for the FormSession controller.

These tests verify:
- Schema intents (add, edit, save, cancel, move, delete, structural blocks)
- The Idle/Editing state machine
- Masking and validation on value changes
- Cross-field re-validation of dependents
- Submit, submitted data and reset
"""

import pytest

from formbuilder.application import (
    FieldNotFoundError,
    FieldState,
    FormSession,
    SessionStateError,
)
from formbuilder.domain import (
    Direction,
    DuplicateName,
    FieldKind,
    FieldOption,
    FieldSchema,
    FullRow,
    HeaderLevel,
    MaskKind,
    MissingName,
    SpacerSize,
    Viewport,
    create_draft,
)


class TestAddField:
    """Tests for add_field."""

    def test_assigns_fresh_ids(self, session: FormSession, add_field) -> None:
        first = add_field(FieldKind.TEXT, name="first")
        second = add_field(FieldKind.TEXT, name="second")

        assert first.id != second.id
        assert [f.name for f in session.fields] == ["first", "second"]

    def test_uses_and_resets_builder_draft(self, session: FormSession) -> None:
        session.draft.set_kind(FieldKind.TEXT)
        session.draft.name, session.draft.label = "city", "City"

        result = session.add_field()

        assert isinstance(result, FieldSchema)
        assert session.draft.kind is None

    def test_rejected_draft_returns_error(self, session: FormSession) -> None:
        result = session.add_field(create_draft(FieldKind.TEXT))

        assert isinstance(result, MissingName)
        assert session.fields == ()

    def test_duplicate_name_rejected(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="email")
        draft = create_draft(FieldKind.EMAIL)
        draft.name, draft.label = "email", "Email"

        assert isinstance(session.add_field(draft), DuplicateName)

    def test_seeds_default_value(self, session: FormSession, add_field) -> None:
        options = [FieldOption("A", "a"), FieldOption("B", "b", default_selected=True)]
        add_field(FieldKind.RADIO_GROUP, name="choice", options=options)

        assert session.snapshot().value_of("choice") == "b"

    def test_not_allowed_while_editing(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="first")
        session.edit_field(field.id)

        with pytest.raises(SessionStateError, match="being edited"):
            session.add_field(create_draft(FieldKind.TEXT))

    def test_ids_never_reused(self, session: FormSession, add_field) -> None:
        first = add_field(FieldKind.TEXT, name="first")
        session.delete_field(0)
        second = add_field(FieldKind.TEXT, name="first")

        assert second.id > first.id


class TestEditing:
    """Tests for the editing state machine."""

    def test_edit_loads_draft(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="first", constraints={"required": True})

        draft = session.edit_field(field.id)

        assert session.editing_field_id == field.id
        assert session.snapshot().is_editing
        assert draft.name == "first"
        assert draft.constraints.required

    def test_edit_unknown_field(self, session: FormSession) -> None:
        with pytest.raises(FieldNotFoundError) as exc_info:
            session.edit_field(42)

        assert str(exc_info.value) == "Field not found: 42"
        assert exc_info.value.ref == 42

    def test_save_keeps_id_and_position(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="first")
        second = add_field(FieldKind.TEXT, name="second")
        add_field(FieldKind.TEXT, name="third")

        draft = session.edit_field(second.id)
        draft.label = "Second field"
        saved = session.save_edit()

        assert isinstance(saved, FieldSchema)
        assert saved.id == second.id
        assert session.fields[1].label == "Second field"
        assert session.editing_field_id is None

    def test_rename_carries_value(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="first_name")
        session.change_value("first_name", "Ada")

        draft = session.edit_field(field.id)
        draft.name = "given_name"
        session.save_edit()

        snapshot = session.snapshot()
        assert snapshot.value_of("given_name") == "Ada"
        assert "first_name" not in snapshot.values

    def test_save_keeps_existing_value(self, session: FormSession, add_field) -> None:
        options = [FieldOption("A", "a", default_selected=True), FieldOption("B", "b")]
        field = add_field(FieldKind.SELECT, name="pick", options=options)
        session.change_value("pick", "b")

        session.edit_field(field.id)
        session.update_field()

        assert session.snapshot().value_of("pick") == "b"

    def test_rejected_save_stays_editing(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="first")
        second = add_field(FieldKind.TEXT, name="second")

        draft = session.edit_field(second.id)
        draft.name = "first"
        result = session.save_edit()

        assert isinstance(result, DuplicateName)
        assert session.editing_field_id == second.id
        assert session.fields[1].name == "second"

    def test_save_without_editing(self, session: FormSession) -> None:
        with pytest.raises(SessionStateError, match="No field is being edited"):
            session.save_edit()

    def test_cancel_discards_changes(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="first")
        session.edit_field(field.id).label = "Changed"

        session.cancel_edit()

        assert session.editing_field_id is None
        assert session.fields[0].label == "First"
        assert session.draft.kind is None


class TestMoveAndDelete:
    """Tests for move_field and delete_field."""

    def test_move_swaps_neighbours(self, session: FormSession, add_field) -> None:
        for name in ("a", "b", "c"):
            add_field(FieldKind.TEXT, name=name)

        assert session.move_field(1, Direction.UP) is True
        assert [f.name for f in session.fields] == ["b", "a", "c"]
        assert session.move_field(1, Direction.DOWN) is True
        assert [f.name for f in session.fields] == ["b", "c", "a"]

    def test_move_at_boundaries_is_noop(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        add_field(FieldKind.TEXT, name="b")

        assert session.move_field(0, Direction.UP) is False
        assert session.move_field(1, Direction.DOWN) is False
        assert session.move_field(7, Direction.UP) is False
        assert [f.name for f in session.fields] == ["a", "b"]

    def test_delete_purges_value_and_error(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a", constraints={"min_length": 3})
        session.change_value("a", "x")

        assert session.delete_field(0) is True

        snapshot = session.snapshot()
        assert snapshot.fields == ()
        assert "a" not in snapshot.values
        assert "a" not in snapshot.errors

    def test_delete_out_of_range(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")

        assert session.delete_field(1) is False
        assert session.delete_field(-1) is False

    def test_delete_refused_while_editing(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="a")
        session.edit_field(field.id)

        assert session.delete_field(0) is False
        assert len(session.fields) == 1

    def test_delete_other_field_while_editing(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        second = add_field(FieldKind.TEXT, name="b")
        session.edit_field(second.id)

        assert session.delete_field(0) is True


class TestStructuralBlocks:
    """Tests for insert_structural_block."""

    def test_header_at_top(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")

        block = session.insert_structural_block(-1, FieldKind.HEADER)

        assert session.fields[0] == block
        assert block.label == "Header"
        assert block.name == f"header_{block.id}"
        assert block.header_level is HeaderLevel.H2

    def test_subheader_label(self, session: FormSession) -> None:
        block = session.insert_structural_block(0, FieldKind.HEADER, level=HeaderLevel.H3)

        assert block.label == "Subheader"

    def test_spacer_after_index(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        add_field(FieldKind.TEXT, name="b")

        block = session.insert_structural_block(0, FieldKind.SPACER)

        kinds = [f.kind for f in session.fields]
        assert kinds == [FieldKind.TEXT, FieldKind.SPACER, FieldKind.TEXT]
        assert block.spacer_size is SpacerSize.MD
        assert block.label == ""

    def test_index_past_end_appends(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")

        session.insert_structural_block(10, FieldKind.SPACER, spacer_size=SpacerSize.LG)

        assert session.fields[-1].spacer_size is SpacerSize.LG

    def test_blocks_hold_no_value(self, session: FormSession) -> None:
        block = session.insert_structural_block(-1, FieldKind.HEADER)

        assert session.change_value(block.id, "text") == FieldState(value="")
        assert session.submitted_data() == {}

    def test_non_structural_kind_rejected(self, session: FormSession) -> None:
        with pytest.raises(ValueError, match="not a structural kind"):
            session.insert_structural_block(0, FieldKind.TEXT)


class TestChangeValue:
    """Tests for change_value."""

    def test_masks_input(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEL, name="phone")

        state = session.change_value("phone", "5551234567")

        assert state == FieldState(value="(555) 123-4567", error=None)
        assert state.is_valid

    def test_textarea_mask_keeps_line_breaks(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXTAREA, name="notes", mask=MaskKind.ALPHANUMERIC)

        assert session.change_value("notes", "line 1!\nline 2").value == "line 1\nline 2"

    def test_unmaskable_kind_stores_raw(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.NUMBER, name="qty")

        assert session.change_value("qty", "12abc").value == "12abc"

    def test_stores_error(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="code", constraints={"min_length": 3})

        state = session.change_value("code", "ab")

        assert state.error == "Must be at least 3 characters"
        assert session.snapshot().error_of("code") == "Must be at least 3 characters"

    def test_accepts_field_id_or_schema(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="a")

        session.change_value(field.id, "one")
        session.change_value(field, "two")

        assert session.snapshot().value_of("a") == "two"

    def test_unknown_field(self, session: FormSession) -> None:
        with pytest.raises(FieldNotFoundError):
            session.change_value("missing", "x")

    def test_selection_count(self, session: FormSession, add_field) -> None:
        add_field(
            FieldKind.CHECKBOX_GROUP,
            name="toppings",
            options=["cheese", "ham", "olives"],
            constraints={"min_value": 2},
        )

        assert session.change_value("toppings", "cheese").error == "Select at least 2 options"
        assert session.change_value("toppings", "cheese,ham").error is None


class TestCrossFieldValidation:
    """Dependents of a field are re-validated when it changes."""

    @pytest.fixture
    def passwords(self, session: FormSession, add_field) -> FormSession:
        add_field(FieldKind.PASSWORD, name="password")
        add_field(FieldKind.PASSWORD, name="confirm", constraints={"match_field": "password"})
        return session

    def test_dependents_index(self, passwords: FormSession) -> None:
        confirm = passwords.get_field("confirm")

        assert passwords.dependents_of("password") == frozenset({confirm.id})
        assert passwords.dependents_of("confirm") == frozenset()

    def test_error_follows_target(self, passwords: FormSession) -> None:
        assert passwords.change_value("confirm", "secret").error == "Must match Password"

        passwords.change_value("password", "secret")
        assert passwords.snapshot().error_of("confirm") is None

        passwords.change_value("password", "secret!")
        assert passwords.snapshot().error_of("confirm") == "Must match Password"

    def test_deleting_target(self, passwords: FormSession) -> None:
        passwords.delete_field(0)

        assert passwords.change_value("confirm", "x").error == (
            'Match field "password" not found in form'
        )


class TestSubmit:
    """Tests for submit, submitted_data and reset."""

    def test_rejects_invalid_form(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="name", constraints={"required": True})
        add_field(FieldKind.EMAIL, name="email")

        assert session.submit() is False
        snapshot = session.snapshot()
        assert snapshot.error_of("name") == "This field is required"
        assert snapshot.error_of("email") is None
        assert snapshot.has_errors

    def test_accepts_valid_form(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="name", constraints={"required": True})
        session.insert_structural_block(-1, FieldKind.HEADER)
        add_field(FieldKind.EMAIL, name="email")
        session.change_value("name", "Ada")
        session.change_value("email", "ada@example.com")

        assert session.submit() is True
        assert session.submitted_data() == {"name": "Ada", "email": "ada@example.com"}
        assert not session.snapshot().has_errors

    def test_second_pass_checks_matches(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.PASSWORD, name="confirm", constraints={"match_field": "password"})
        add_field(FieldKind.PASSWORD, name="password")
        session.change_value("confirm", "abc")
        session.change_value("password", "abd")

        assert session.submit() is False
        assert session.snapshot().error_of("confirm") == "Must match Password"

    def test_replaces_stale_errors(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="code", constraints={"min_length": 3})
        session.change_value("code", "ab")
        session.edit_field(session.fields[0].id).set_constraint("min_length", 1)
        session.save_edit()

        assert session.submit() is True
        assert session.snapshot().error_of("code") is None

    def test_reset(self, session: FormSession, add_field) -> None:
        options = [FieldOption("A", "a", default_selected=True), FieldOption("B", "b")]
        add_field(FieldKind.RADIO_GROUP, name="choice", options=options)
        add_field(FieldKind.TEXT, name="name", constraints={"required": True})
        session.change_value("choice", "b")
        session.submit()

        session.reset()

        snapshot = session.snapshot()
        assert snapshot.values == {"choice": "a", "name": ""}
        assert not snapshot.has_errors


class TestReadAccess:
    """Tests for snapshots, lookups and layout."""

    def test_snapshot_is_read_only(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        snapshot = session.snapshot()

        with pytest.raises(TypeError):
            snapshot.values["a"] = "x"  # type: ignore[index]

    def test_snapshot_does_not_follow_changes(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        snapshot = session.snapshot()

        session.change_value("a", "new")

        assert snapshot.value_of("a") == ""

    def test_get_field_by_id_and_name(self, session: FormSession, add_field) -> None:
        field = add_field(FieldKind.TEXT, name="a")

        assert session.get_field(field.id) == field
        assert session.get_field("a") == field
        with pytest.raises(FieldNotFoundError, match="Field not found: b"):
            session.get_field("b")

    def test_layout(self, session: FormSession, add_field) -> None:
        add_field(FieldKind.TEXT, name="a")
        add_field(FieldKind.TEXT, name="b")

        assert len(session.layout(Viewport.LARGE)) == 1
        rows = session.layout(Viewport.SMALL)
        assert len(rows) == 2
        assert all(isinstance(r, FullRow) for r in rows)
