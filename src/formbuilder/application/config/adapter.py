"""Adapter from form documents to live form sessions.

Fields are built the same way the interactive builder builds them: a
draft is created for the kind (picking up the kind's defaults and
implied mask), the document's settings are applied over it, and the
draft is added to the session, which finalizes it. Document values are
then applied through ``change_value`` so they are masked and validated
like typed input.
"""

from __future__ import annotations

import logging

from formbuilder.application.config.loader import ConfigError
from formbuilder.application.config.schema import FieldConfig, FormDocument
from formbuilder.application.session import FieldNotFoundError, FormSession
from formbuilder.domain import FieldDraft, FieldOption, SchemaError, create_draft

logger = logging.getLogger(__name__)


def field_config_to_draft(config: FieldConfig) -> FieldDraft:
    """Build a builder draft from one field of a form document."""
    draft = create_draft(config.kind)
    draft.name = config.name
    draft.label = config.label
    if config.layout_width is not None:
        draft.layout_width = config.layout_width
    if config.mask is not None:
        draft.set_mask(config.mask, config.constraints.pattern)
    if config.placeholder is not None:
        draft.placeholder = config.placeholder

    # Only explicitly written rules override the kind and mask defaults
    rules = config.constraints.model_dump(exclude_unset=True)
    draft.set_constraints(
        {name: tuple(value) if isinstance(value, list) else value for name, value in rules.items()}
    )

    if config.options is not None:
        draft.options = [
            FieldOption(label=o.label, value=o.value, default_selected=o.default_selected)
            for o in config.options
        ]
    draft.orientation = config.orientation
    draft.multiple = config.multiple
    draft.rows = config.rows
    if config.header_level is not None:
        draft.header_level = config.header_level
    if config.spacer_size is not None:
        draft.spacer_size = config.spacer_size
    draft.hide_on_small = config.hide_on_small
    return draft


def document_to_session(document: FormDocument) -> FormSession:
    """Build a form session from a validated form document.

    Args:
        document: A FormDocument returned by ``load_form``.

    Returns:
        A session holding every field of the document, with the document
        values applied.

    Raises:
        ConfigError: If a field is rejected by the builder (missing name,
            duplicate name, too few options) or a value names a field the
            form does not have.
    """
    session = FormSession()
    for index, field_config in enumerate(document.fields):
        result = session.add_field(field_config_to_draft(field_config))
        if isinstance(result, SchemaError):
            path = f"fields[{index}]"
            raise ConfigError(
                message=f"Invalid field at {path}: {result.message}",
                error_type="validation",
                details=[{"path": path, "message": result.message, "error_type": result.code}],
            )

    for name, value in document.values.items():
        try:
            session.change_value(name, value)
        except FieldNotFoundError:
            raise ConfigError(
                message=f"Value given for unknown field: {name}",
                error_type="validation",
                details=[{"path": f"values.{name}", "message": "unknown field", "value": value}],
            )

    logger.debug(f"Built session with {len(session.fields)} fields from '{document.title}'")
    return session
