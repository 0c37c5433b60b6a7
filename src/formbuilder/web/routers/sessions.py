"""Form session endpoints.

Every endpoint maps onto one session intent. Schema and validation
failures that the builder reports as values come back as 422 responses;
intents that the session's state does not allow come back as 409.
"""

from fastapi import APIRouter, Body, Query, Response, status

from formbuilder.application import FormSession, SessionStateError
from formbuilder.application.config import (
    FieldConfig,
    document_to_session,
    field_config_to_draft,
    load_form_from_dict,
)
from formbuilder.domain import FieldKind, SchemaError, Viewport
from formbuilder.web.dependencies import SessionStoreDep, TemplateManagerDep
from formbuilder.web.exceptions import FieldRejectedError
from formbuilder.web.schemas import (
    ActionResultSchema,
    CreateSessionRequest,
    FieldStateSchema,
    LayoutSchema,
    MoveFieldRequest,
    SnapshotSchema,
    StructuralBlockRequest,
    SubmitResultSchema,
    ValueChangeRequest,
    layout_to_schema,
    snapshot_to_schema,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _snapshot(session_id: str, session: FormSession) -> SnapshotSchema:
    return snapshot_to_schema(session_id, session.snapshot())


@router.post("", response_model=SnapshotSchema, status_code=status.HTTP_201_CREATED)
async def create_session(
    store: SessionStoreDep,
    templates: TemplateManagerDep,
    request: CreateSessionRequest | None = Body(default=None),
) -> SnapshotSchema:
    """Create a session, empty or built from a form document or template.

    Raises:
        ConfigError: If the document is invalid (handled by exception handler).
        TemplateNotFoundError: If the template does not exist.
    """
    session = FormSession()
    if request is not None and request.template is not None:
        session = document_to_session(load_form_from_dict(templates.load(request.template)))
    elif request is not None and request.document is not None:
        session = document_to_session(load_form_from_dict(request.document))

    session_id, session = store.create(session)
    return _snapshot(session_id, session)


@router.get("/{session_id}", response_model=SnapshotSchema)
async def get_session(session_id: str, store: SessionStoreDep) -> SnapshotSchema:
    return _snapshot(session_id, store.get(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str, store: SessionStoreDep) -> Response:
    store.delete(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/fields", response_model=SnapshotSchema, status_code=201)
async def add_field(
    session_id: str, field: FieldConfig, store: SessionStoreDep
) -> SnapshotSchema:
    """Add a field built from a field definition.

    Raises:
        FieldRejectedError: If the builder rejects the definition.
        SessionStateError: If a field is being edited.
    """
    session = store.get(session_id)
    result = session.add_field(field_config_to_draft(field))
    if isinstance(result, SchemaError):
        raise FieldRejectedError(result)
    return _snapshot(session_id, session)


@router.post("/{session_id}/fields/{field_id}/edit", response_model=SnapshotSchema)
async def edit_field(session_id: str, field_id: int, store: SessionStoreDep) -> SnapshotSchema:
    """Load a field into the builder (enter the editing state)."""
    session = store.get(session_id)
    session.edit_field(field_id)
    return _snapshot(session_id, session)


@router.put("/{session_id}/fields/{field_id}", response_model=SnapshotSchema)
async def save_field(
    session_id: str, field_id: int, field: FieldConfig, store: SessionStoreDep
) -> SnapshotSchema:
    """Replace a field, keeping its id and position.

    The field is loaded into the builder first when the session is idle.
    A rejected definition leaves the session editing that field.

    Raises:
        SessionStateError: If a different field is being edited.
    """
    session = store.get(session_id)
    if session.editing_field_id is None:
        session.edit_field(field_id)
    elif session.editing_field_id != field_id:
        raise SessionStateError(
            f"Field {session.editing_field_id} is being edited, not field {field_id}"
        )

    draft = field_config_to_draft(field)
    draft.id = field_id
    result = session.save_edit(draft)
    if isinstance(result, SchemaError):
        raise FieldRejectedError(result)
    return _snapshot(session_id, session)


@router.post("/{session_id}/cancel-edit", response_model=SnapshotSchema)
async def cancel_edit(session_id: str, store: SessionStoreDep) -> SnapshotSchema:
    session = store.get(session_id)
    session.cancel_edit()
    return _snapshot(session_id, session)


@router.post("/{session_id}/positions/{index}/move", response_model=ActionResultSchema)
async def move_field(
    session_id: str, index: int, request: MoveFieldRequest, store: SessionStoreDep
) -> ActionResultSchema:
    """Swap the field at ``index`` with its neighbour; no-op at the edges."""
    session = store.get(session_id)
    moved = session.move_field(index, request.direction)
    return ActionResultSchema(changed=moved, snapshot=_snapshot(session_id, session))


@router.delete("/{session_id}/positions/{index}", response_model=ActionResultSchema)
async def delete_field(session_id: str, index: int, store: SessionStoreDep) -> ActionResultSchema:
    """Delete the field at ``index``; no-op when out of range or being edited."""
    session = store.get(session_id)
    deleted = session.delete_field(index)
    return ActionResultSchema(changed=deleted, snapshot=_snapshot(session_id, session))


@router.post("/{session_id}/blocks", response_model=SnapshotSchema, status_code=201)
async def insert_block(
    session_id: str, request: StructuralBlockRequest, store: SessionStoreDep
) -> SnapshotSchema:
    """Insert a header or spacer after the given position."""
    session = store.get(session_id)
    session.insert_structural_block(
        request.at_index,
        FieldKind(request.kind),
        level=request.level,
        spacer_size=request.spacer_size,
    )
    return _snapshot(session_id, session)


@router.put("/{session_id}/values/{name}", response_model=FieldStateSchema)
async def change_value(
    session_id: str, name: str, request: ValueChangeRequest, store: SessionStoreDep
) -> FieldStateSchema:
    """Apply raw input to a field.

    The response carries the masked value, its error and the refreshed
    errors of every field whose must-equal rule references this one.

    Raises:
        FieldNotFoundError: If the form has no such field.
    """
    session = store.get(session_id)
    state = session.change_value(name, request.value)
    snapshot = session.snapshot()
    dependents: dict[str, str | None] = {}
    for field_id in session.dependents_of(name):
        dependent = session.get_field(field_id).name
        dependents[dependent] = snapshot.error_of(dependent)
    return FieldStateSchema(
        name=name, value=state.value, error=state.error, dependent_errors=dependents
    )


@router.post("/{session_id}/submit", response_model=SubmitResultSchema)
async def submit(session_id: str, store: SessionStoreDep) -> SubmitResultSchema:
    session = store.get(session_id)
    accepted = session.submit()
    errors = {name: error for name, error in session.snapshot().errors.items() if error}
    return SubmitResultSchema(
        accepted=accepted,
        errors=errors,
        data=session.submitted_data() if accepted else None,
    )


@router.post("/{session_id}/reset", response_model=SnapshotSchema)
async def reset(session_id: str, store: SessionStoreDep) -> SnapshotSchema:
    session = store.get(session_id)
    session.reset()
    return _snapshot(session_id, session)


@router.get("/{session_id}/layout", response_model=LayoutSchema)
async def get_layout(
    session_id: str,
    store: SessionStoreDep,
    viewport: Viewport = Query(default=Viewport.LARGE),
    width: int | None = Query(default=None, ge=0, description="Viewport width in pixels"),
) -> LayoutSchema:
    """Layout rows with the render contract of every field."""
    session = store.get(session_id)
    if width is not None:
        viewport = Viewport.from_width(width)
    return layout_to_schema(session.layout(viewport), session.snapshot(), viewport)
