"""Pytest configuration and shared fixtures for form tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from formbuilder.application import FormSession
from formbuilder.application.templates import TemplateManager
from formbuilder.domain import (
    FieldDraft,
    FieldKind,
    FieldOption,
    FieldSchema,
    MaskKind,
    create_draft,
    finalize,
)


def _build_draft(
    kind: FieldKind,
    name: str,
    label: str | None,
    mask: MaskKind | None,
    constraints: dict[str, Any] | None,
    options: list[str] | list[FieldOption] | None,
    settings: dict[str, Any],
) -> FieldDraft:
    draft = create_draft(kind)
    draft.name = name
    draft.label = label if label is not None else name.replace("_", " ").capitalize()
    if mask is not None:
        draft.set_mask(mask)
    for key, value in (constraints or {}).items():
        draft.set_constraint(key, value)
    if options is not None:
        draft.options = [
            o if isinstance(o, FieldOption) else FieldOption(label=o.title(), value=o)
            for o in options
        ]
    for key, value in settings.items():
        setattr(draft, key, value)
    return draft


@pytest.fixture
def make_field() -> Callable[..., FieldSchema]:
    """Build a finalized field schema the way the builder would.

    Options may be given as plain values; labels are derived from them.
    """

    def _make(
        kind: FieldKind,
        name: str = "field",
        label: str | None = None,
        mask: MaskKind | None = None,
        constraints: dict[str, Any] | None = None,
        options: list[str] | list[FieldOption] | None = None,
        field_id: int = 1,
        **settings: Any,
    ) -> FieldSchema:
        draft = _build_draft(kind, name, label, mask, constraints, options, settings)
        result = finalize(draft, [], field_id=field_id)
        assert isinstance(result, FieldSchema), result
        return result

    return _make


@pytest.fixture
def session() -> FormSession:
    """An empty form session."""
    return FormSession()


@pytest.fixture
def add_field(session: FormSession) -> Callable[..., FieldSchema]:
    """Add a field to the ``session`` fixture and return its schema."""

    def _add(
        kind: FieldKind,
        name: str = "field",
        label: str | None = None,
        mask: MaskKind | None = None,
        constraints: dict[str, Any] | None = None,
        options: list[str] | list[FieldOption] | None = None,
        **settings: Any,
    ) -> FieldSchema:
        draft = _build_draft(kind, name, label, mask, constraints, options, settings)
        result = session.add_field(draft)
        assert isinstance(result, FieldSchema), result
        return result

    return _add


@pytest.fixture
def template_document() -> Callable[[str], dict[str, Any]]:
    """Parsed JSON of a bundled template."""
    return TemplateManager().load


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write data as JSON into the test's temporary directory."""

    def _write(filename: str, data: Any) -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
