"""Choice options for checkbox groups, radio groups and selects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldOption:
    """One selectable choice.

    Attributes:
        label: Text shown to the user.
        value: Token stored in the form values when the option is chosen.
        default_selected: Whether the option starts selected.
    """

    label: str
    value: str
    default_selected: bool = False

    def __post_init__(self) -> None:
        if "," in self.value:
            raise ValueError(
                f"Option value must not contain a comma, got '{self.value}'"
            )
