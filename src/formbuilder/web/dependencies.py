"""FastAPI dependency injection for form services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from formbuilder.application.templates.manager import TemplateManager
from formbuilder.web.store import SessionStore


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Get the process-wide SessionStore."""
    return SessionStore()


def get_template_manager() -> TemplateManager:
    """Dependency for TemplateManager."""
    return TemplateManager()


# Type aliases for cleaner endpoint signatures
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
TemplateManagerDep = Annotated[TemplateManager, Depends(get_template_manager)]
