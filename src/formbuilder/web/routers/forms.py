"""Form document validation endpoint."""

from fastapi import APIRouter

from formbuilder.application.config import load_form_from_dict, validate_form
from formbuilder.web.schemas import FormValidateRequest, ValidationResultSchema

router = APIRouter(prefix="/forms", tags=["forms"])


@router.post("/validate", response_model=ValidationResultSchema)
async def validate_document(request: FormValidateRequest) -> ValidationResultSchema:
    """Validate a form document without creating a session.

    Schema errors are returned as a 422 by the ConfigError handler;
    builder errors and advisories come back in the result.
    """
    result = validate_form(load_form_from_dict(request.document))
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
