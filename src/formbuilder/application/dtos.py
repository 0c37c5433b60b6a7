"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from formbuilder.domain import FieldSchema


@dataclass(frozen=True)
class FieldState:
    """Value and error of one field after a change."""

    value: str
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a form session, sufficient to re-render it.

    Attributes:
        fields: Field schemas in display order.
        values: Current value of every value-bearing field by name.
        errors: Current error (or None) of every field by name.
        editing_field_id: Id of the field loaded in the builder, if any.
    """

    fields: tuple[FieldSchema, ...] = ()
    values: Mapping[str, str] = field(default_factory=dict)
    errors: Mapping[str, str | None] = field(default_factory=dict)
    editing_field_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    @property
    def is_editing(self) -> bool:
        return self.editing_field_id is not None

    @property
    def has_errors(self) -> bool:
        return any(error for error in self.errors.values())

    def value_of(self, name: str) -> str:
        return self.values.get(name, "")

    def error_of(self, name: str) -> str | None:
        return self.errors.get(name)
