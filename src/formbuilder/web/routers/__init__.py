"""API routers for the REST API."""

from formbuilder.web.routers.forms import router as forms_router
from formbuilder.web.routers.masks import router as masks_router
from formbuilder.web.routers.sessions import router as sessions_router
from formbuilder.web.routers.templates import router as templates_router

__all__ = [
    "forms_router",
    "masks_router",
    "sessions_router",
    "templates_router",
]
