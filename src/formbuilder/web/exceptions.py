"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from formbuilder.application import FieldNotFoundError, SessionStateError
from formbuilder.application.config import ConfigError
from formbuilder.application.templates.manager import TemplateNotFoundError
from formbuilder.domain import SchemaError
from formbuilder.web.store import SessionNotFoundError


class FieldRejectedError(Exception):
    """Raised when the builder rejects a field definition."""

    def __init__(self, error: SchemaError) -> None:
        self.error = error
        super().__init__(error.message)


def _error(status_code: int, error: str, error_type: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "error_type": error_type, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return _error(422, exc.message, exc.error_type, exc.details)

    @app.exception_handler(FieldRejectedError)
    async def field_rejected_handler(request: Request, exc: FieldRejectedError) -> JSONResponse:
        return _error(422, exc.error.message, exc.error.code)

    @app.exception_handler(SessionStateError)
    async def session_state_handler(request: Request, exc: SessionStateError) -> JSONResponse:
        return _error(409, str(exc), "session_state")

    @app.exception_handler(FieldNotFoundError)
    async def field_not_found_handler(request: Request, exc: FieldNotFoundError) -> JSONResponse:
        return _error(404, str(exc), "not_found", {"field": exc.ref})

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return _error(404, str(exc), "not_found", {"session_id": exc.session_id})

    @app.exception_handler(TemplateNotFoundError)
    async def template_not_found_handler(
        request: Request, exc: TemplateNotFoundError
    ) -> JSONResponse:
        return _error(404, f"Template not found: {exc.name}", "not_found")
