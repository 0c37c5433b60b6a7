"""Integration tests for the REST API.

Each test gets a fresh application and session store, so sessions
created in one test are never visible in another.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from formbuilder.web import create_app
from formbuilder.web.dependencies import get_session_store
from formbuilder.web.store import SessionStore

API = "/api/v1"


@pytest.fixture
def client() -> TestClient:
    app = create_app()
    store = SessionStore()
    app.dependency_overrides[get_session_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def new_session(client: TestClient):
    """Create a session and return its snapshot."""

    def _create(body: dict[str, Any] | None = None) -> dict[str, Any]:
        response = client.post(f"{API}/sessions", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def _text(name: str, label: str | None = None, **extra: Any) -> dict[str, Any]:
    return {"kind": "text", "name": name, "label": label or name.title(), **extra}


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSessionLifecycle:
    """Tests for creating, reading and deleting sessions."""

    def test_empty_session(self, new_session) -> None:
        snapshot = new_session()

        assert snapshot["session_id"]
        assert snapshot["fields"] == []
        assert snapshot["editing_field_id"] is None

    def test_from_template(self, new_session) -> None:
        snapshot = new_session({"template": "contact"})

        names = [f["name"] for f in snapshot["fields"] if f["kind"] not in ("header", "spacer")]
        assert names == ["full_name", "email", "phone", "topic", "message"]
        assert snapshot["values"]["topic"] == "general"
        phone = next(f for f in snapshot["fields"] if f["name"] == "phone")
        assert phone["mask_kind"] == "phone"
        assert phone["constraints"]["max_length"] == 14

    def test_from_document(self, new_session) -> None:
        snapshot = new_session(
            {"document": {"fields": [_text("city")], "values": {"city": "Oslo"}}}
        )

        assert snapshot["fields"][0]["label"] == "City"
        assert snapshot["values"]["city"] == "Oslo"

    def test_document_and_template_conflict(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/sessions", json={"template": "contact", "document": {"fields": []}}
        )

        assert response.status_code == 422

    def test_invalid_document(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/sessions", json={"document": {"fields": [{"kind": "slider"}]}}
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "fields[0].kind"

    def test_unknown_template(self, client: TestClient) -> None:
        response = client.post(f"{API}/sessions", json={"template": "invoice"})

        assert response.status_code == 404
        assert response.json()["error"] == "Template not found: invoice"

    def test_get_and_delete(self, client: TestClient, new_session) -> None:
        session_id = new_session({"template": "signup"})["session_id"]

        assert client.get(f"{API}/sessions/{session_id}").status_code == 200
        assert client.delete(f"{API}/sessions/{session_id}").status_code == 204

        response = client.get(f"{API}/sessions/{session_id}")
        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"
        assert response.json()["details"] == {"session_id": session_id}

    def test_delete_unknown(self, client: TestClient) -> None:
        assert client.delete(f"{API}/sessions/nope").status_code == 404


class TestFieldEditing:
    """Tests for adding, editing and saving fields."""

    @pytest.fixture
    def session_id(self, client: TestClient, new_session) -> str:
        session_id = new_session()["session_id"]
        for name in ("first", "last"):
            response = client.post(f"{API}/sessions/{session_id}/fields", json=_text(name))
            assert response.status_code == 201
        return session_id

    def _fields(self, client: TestClient, session_id: str) -> list[dict[str, Any]]:
        return client.get(f"{API}/sessions/{session_id}").json()["fields"]

    def test_add_field(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/fields",
            json={"kind": "email", "name": "email", "label": "Email"},
        )

        assert response.status_code == 201
        added = response.json()["fields"][-1]
        assert added["name"] == "email"
        assert added["mask_kind"] == "email"
        assert added["placeholder"] == "name@example.com"

    def test_duplicate_name_rejected(self, client: TestClient, session_id: str) -> None:
        response = client.post(f"{API}/sessions/{session_id}/fields", json=_text("first"))

        assert response.status_code == 422
        assert response.json()["error_type"] == "duplicate_name"
        assert response.json()["error"] == 'Field name "first" is already in use.'
        assert len(self._fields(client, session_id)) == 2

    def test_missing_label_rejected(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/fields", json={"kind": "text", "name": "x"}
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "missing_label"

    def test_unknown_kind_is_request_error(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/fields", json={"kind": "slider", "name": "x"}
        )

        assert response.status_code == 422

    def test_edit_then_save(self, client: TestClient, session_id: str) -> None:
        field_id = self._fields(client, session_id)[0]["id"]

        edited = client.post(f"{API}/sessions/{session_id}/fields/{field_id}/edit")
        assert edited.json()["editing_field_id"] == field_id

        saved = client.put(
            f"{API}/sessions/{session_id}/fields/{field_id}",
            json=_text("given_name", "Given name"),
        )

        assert saved.status_code == 200
        snapshot = saved.json()
        assert snapshot["editing_field_id"] is None
        assert snapshot["fields"][0]["id"] == field_id
        assert snapshot["fields"][0]["label"] == "Given name"

    def test_put_enters_editing(self, client: TestClient, session_id: str) -> None:
        field_id = self._fields(client, session_id)[1]["id"]

        saved = client.put(
            f"{API}/sessions/{session_id}/fields/{field_id}", json=_text("surname")
        )

        assert saved.status_code == 200
        assert [f["name"] for f in saved.json()["fields"]] == ["first", "surname"]

    def test_put_other_field_while_editing(self, client: TestClient, session_id: str) -> None:
        first, last = (f["id"] for f in self._fields(client, session_id))
        client.post(f"{API}/sessions/{session_id}/fields/{first}/edit")

        response = client.put(f"{API}/sessions/{session_id}/fields/{last}", json=_text("x"))

        assert response.status_code == 409
        assert response.json()["error_type"] == "session_state"

    def test_add_while_editing(self, client: TestClient, session_id: str) -> None:
        first = self._fields(client, session_id)[0]["id"]
        client.post(f"{API}/sessions/{session_id}/fields/{first}/edit")

        response = client.post(f"{API}/sessions/{session_id}/fields", json=_text("extra"))

        assert response.status_code == 409

    def test_rejected_save_keeps_editing(self, client: TestClient, session_id: str) -> None:
        first, _ = (f["id"] for f in self._fields(client, session_id))

        response = client.put(f"{API}/sessions/{session_id}/fields/{first}", json=_text("last"))

        assert response.status_code == 422
        snapshot = client.get(f"{API}/sessions/{session_id}").json()
        assert snapshot["editing_field_id"] == first
        assert snapshot["fields"][0]["name"] == "first"

    def test_cancel_edit(self, client: TestClient, session_id: str) -> None:
        first = self._fields(client, session_id)[0]["id"]
        client.post(f"{API}/sessions/{session_id}/fields/{first}/edit")

        response = client.post(f"{API}/sessions/{session_id}/cancel-edit")

        assert response.json()["editing_field_id"] is None

    def test_edit_unknown_field(self, client: TestClient, session_id: str) -> None:
        response = client.post(f"{API}/sessions/{session_id}/fields/999/edit")

        assert response.status_code == 404
        assert response.json()["details"] == {"field": 999}


class TestStructureChanges:
    """Tests for moving, deleting and inserting blocks."""

    @pytest.fixture
    def session_id(self, new_session) -> str:
        document = {"fields": [_text("a"), _text("b")]}
        return new_session({"document": document})["session_id"]

    def test_move_down(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/positions/0/move", json={"direction": "down"}
        )

        body = response.json()
        assert body["changed"] is True
        assert [f["name"] for f in body["snapshot"]["fields"]] == ["b", "a"]

    def test_move_at_edge_is_noop(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/positions/0/move", json={"direction": "up"}
        )

        assert response.json()["changed"] is False

    def test_bad_direction(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/positions/0/move", json={"direction": "left"}
        )

        assert response.status_code == 422

    def test_delete(self, client: TestClient, session_id: str) -> None:
        response = client.delete(f"{API}/sessions/{session_id}/positions/0")

        body = response.json()
        assert body["changed"] is True
        assert [f["name"] for f in body["snapshot"]["fields"]] == ["b"]
        assert "a" not in body["snapshot"]["values"]

    def test_delete_out_of_range(self, client: TestClient, session_id: str) -> None:
        response = client.delete(f"{API}/sessions/{session_id}/positions/5")

        assert response.json()["changed"] is False

    def test_insert_header_at_top(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/blocks", json={"kind": "header", "level": "h3"}
        )

        assert response.status_code == 201
        header = response.json()["fields"][0]
        assert header["kind"] == "header"
        assert header["header_level"] == "h3"
        assert header["label"] == "Subheader"
        assert header["layout_width"] == "full"

    def test_insert_spacer_after(self, client: TestClient, session_id: str) -> None:
        response = client.post(
            f"{API}/sessions/{session_id}/blocks",
            json={"kind": "spacer", "at_index": 0, "spacer_size": "lg"},
        )

        kinds = [f["kind"] for f in response.json()["fields"]]
        assert kinds == ["text", "spacer", "text"]
        assert response.json()["fields"][1]["spacer_size"] == "lg"


class TestValuesAndSubmit:
    """Tests for value changes, submit and reset."""

    def _put(self, client: TestClient, session_id: str, name: str, value: str):
        return client.put(f"{API}/sessions/{session_id}/values/{name}", json={"value": value})

    def test_value_is_masked_and_validated(self, client: TestClient, new_session) -> None:
        session_id = new_session({"template": "signup"})["session_id"]

        response = self._put(client, session_id, "username", "Ada_99")

        assert response.status_code == 200
        assert response.json()["value"] == "Ada99"
        assert response.json()["error"] == "Must be lowercase only"

    def test_dependent_errors_follow_target(self, client: TestClient, new_session) -> None:
        session_id = new_session({"template": "signup"})["session_id"]
        self._put(client, session_id, "password", "secret123")

        mismatch = self._put(client, session_id, "confirm_password", "secret124")
        assert mismatch.json()["error"] == "Must match Password"

        response = self._put(client, session_id, "password", "secret124")

        assert response.json()["dependent_errors"] == {"confirm_password": None}

    def test_unknown_field(self, client: TestClient, new_session) -> None:
        session_id = new_session()["session_id"]

        response = self._put(client, session_id, "nope", "x")

        assert response.status_code == 404
        assert response.json()["details"] == {"field": "nope"}

    def test_submit_rejected_then_accepted(self, client: TestClient, new_session) -> None:
        session_id = new_session({"template": "contact"})["session_id"]

        rejected = client.post(f"{API}/sessions/{session_id}/submit").json()

        assert rejected["accepted"] is False
        assert rejected["data"] is None
        assert rejected["errors"]["full_name"] == "This field is required"
        assert "phone" not in rejected["errors"]

        self._put(client, session_id, "full_name", "Ada Lovelace")
        self._put(client, session_id, "email", "ada@example.com")
        self._put(client, session_id, "message", "Hello there dear friends")
        accepted = client.post(f"{API}/sessions/{session_id}/submit").json()

        assert accepted["accepted"] is True
        assert accepted["errors"] == {}
        assert accepted["data"]["full_name"] == "Ada Lovelace"
        assert accepted["data"]["topic"] == "general"

    def test_reset(self, client: TestClient, new_session) -> None:
        session_id = new_session({"template": "contact"})["session_id"]
        self._put(client, session_id, "topic", "billing")
        self._put(client, session_id, "full_name", "A")

        snapshot = client.post(f"{API}/sessions/{session_id}/reset").json()

        assert snapshot["values"]["topic"] == "general"
        assert snapshot["values"]["full_name"] == ""
        assert not any(snapshot["errors"].values())


class TestLayout:
    """Tests for the layout endpoint."""

    @pytest.fixture
    def session_id(self, new_session) -> str:
        return new_session({"template": "contact"})["session_id"]

    def test_large(self, client: TestClient, session_id: str) -> None:
        body = client.get(f"{API}/sessions/{session_id}/layout").json()

        assert body["viewport"] == "large"
        assert [r["type"] for r in body["rows"]] == ["full", "columns", "full", "columns"]
        columns = body["rows"][1]
        names = [i["control"]["name"] for i in columns["left"] + columns["right"]]
        assert sorted(names) == ["email", "full_name", "phone", "topic"]
        assert body["rows"][0]["item"]["control"]["control"] == "header"

    def test_width_selects_small(self, client: TestClient, session_id: str) -> None:
        body = client.get(f"{API}/sessions/{session_id}/layout", params={"width": 500}).json()

        assert body["viewport"] == "small"
        assert {r["type"] for r in body["rows"]} == {"full"}
        items = [r["item"] for r in body["rows"]]
        spacer = next(i for i in items if i["control"]["control"] == "spacer")
        assert spacer["visible"] is False

    def test_controls_carry_values(self, client: TestClient, session_id: str) -> None:
        body = client.get(f"{API}/sessions/{session_id}/layout?viewport=small").json()

        topic = next(r["item"] for r in body["rows"] if r["item"]["control"]["name"] == "topic")
        selected = [o["value"] for o in topic["control"]["options"] if o["selected"]]
        assert selected == ["general"]


class TestMasks:
    """Tests for the mask endpoints."""

    def test_list(self, client: TestClient) -> None:
        masks = client.get(f"{API}/masks").json()["masks"]

        by_name = {m["mask"]: m for m in masks}
        assert len(masks) == 14
        assert by_name["zip"]["max_length"] == 5
        assert by_name["custom"]["pattern"] is None

    def test_apply(self, client: TestClient) -> None:
        response = client.post(f"{API}/masks/apply", json={"mask": "phone", "raw": "5551234567"})

        body = response.json()
        assert body["value"] == "(555) 123-4567"
        assert body["placeholder"] == "(123) 456-7890"
        assert body["max_length"] == 14

    def test_apply_custom(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/masks/apply", json={"mask": "custom", "raw": "abc", "pattern": "^[a-z]+$"}
        )

        assert response.json()["value"] == "abc"
        assert response.json()["pattern"] == "^[a-z]+$"

    def test_unknown_mask(self, client: TestClient) -> None:
        response = client.post(f"{API}/masks/apply", json={"mask": "roman", "raw": "xii"})

        assert response.status_code == 422


class TestTemplatesAndForms:
    """Tests for template and document validation endpoints."""

    def test_list_templates(self, client: TestClient) -> None:
        templates = client.get(f"{API}/templates").json()["templates"]

        assert [t["name"] for t in templates] == ["contact", "signup", "survey"]
        assert templates[0]["title"] == "Contact us"

    def test_get_template(self, client: TestClient) -> None:
        body = client.get(f"{API}/templates/survey").json()

        assert body["name"] == "survey"
        assert body["description"] == "Tell us how we are doing."
        assert body["content"]["title"] == "Feedback survey"

    def test_unknown_template(self, client: TestClient) -> None:
        response = client.get(f"{API}/templates/invoice")

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_validate_clean_document(self, client: TestClient) -> None:
        content = client.get(f"{API}/templates/signup").json()["content"]

        body = client.post(f"{API}/forms/validate", json={"document": content}).json()

        assert body == {"is_valid": True, "errors": [], "warnings": []}

    def test_validate_reports_errors_and_warnings(self, client: TestClient) -> None:
        document = {
            "fields": [
                {"kind": "text", "label": "No name"},
                _text("a", constraints={"min_words": 2}),
            ]
        }

        body = client.post(f"{API}/forms/validate", json={"document": document}).json()

        assert body["is_valid"] is False
        assert body["errors"] == [{"message": "Name (key) is required.", "path": "fields[0]"}]
        assert body["warnings"][0]["path"] == "fields[1].constraints.min_words"

    def test_validate_schema_error(self, client: TestClient) -> None:
        response = client.post(
            f"{API}/forms/validate", json={"document": {"schema_version": "9.9"}}
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "validation"
