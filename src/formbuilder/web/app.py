"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from formbuilder.web.exceptions import register_exception_handlers
from formbuilder.web.routers import (
    forms_router,
    masks_router,
    sessions_router,
    templates_router,
)

API_PREFIX = "/api/v1"


def create_app() -> FastAPI:
    """Build the API: session intents, masks, templates and document checks.

    Every call returns a new application; the session store is shared
    through the ``get_session_store`` dependency.
    """
    app = FastAPI(
        title="Form Builder API",
        description="Build, fill and validate dynamic forms over HTTP",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (sessions_router, forms_router, masks_router, templates_router):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
