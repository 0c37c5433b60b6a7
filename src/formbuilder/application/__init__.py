"""Application layer - form session controller and form documents."""

from .dtos import FieldState, SessionSnapshot
from .session import FieldNotFoundError, FormSession, SessionStateError

__all__ = [
    "FieldNotFoundError",
    "FieldState",
    "FormSession",
    "SessionSnapshot",
    "SessionStateError",
]
