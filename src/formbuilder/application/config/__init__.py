"""JSON form documents: schema, loading, validation and session building.

Public API:
    - FormDocument: Root form document model
    - FieldConfig: One field of a form document
    - OptionConfig: One choice of a selection field
    - ConstraintsConfig: Validation rules of a field
    - load_form: Load a form document from a JSON file
    - load_form_from_dict: Load a form document from a dictionary
    - ConfigError: Exception for form document errors
    - ValidationResult: Container for validation results
    - validate_form: Perform full form document validation
    - document_to_session: Build a FormSession from a form document

Example:
    >>> from pathlib import Path
    >>> from formbuilder.application.config import load_form, document_to_session
    >>>
    >>> document = load_form(Path("contact.json"))
    >>> session = document_to_session(document)
"""

from formbuilder.application.config.adapter import (
    document_to_session,
    field_config_to_draft,
)
from formbuilder.application.config.loader import (
    ConfigError,
    load_form,
    load_form_from_dict,
)
from formbuilder.application.config.schema import (
    SUPPORTED_VERSIONS,
    ConstraintsConfig,
    FieldConfig,
    FormDocument,
    OptionConfig,
)
from formbuilder.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_field_advisories,
    validate_form,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "ConstraintsConfig",
    "FieldConfig",
    "FormDocument",
    "OptionConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_field_advisories",
    "document_to_session",
    "field_config_to_draft",
    "load_form",
    "load_form_from_dict",
    "validate_form",
]
