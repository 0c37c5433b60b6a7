"""FastAPI REST API for dynamic forms.

This module provides a REST API for driving form sessions, validating
form documents, applying masks and reading bundled templates.

Usage:
    uvicorn formbuilder.web:app --reload
"""

from formbuilder.web.app import app, create_app

__all__ = ["app", "create_app"]
