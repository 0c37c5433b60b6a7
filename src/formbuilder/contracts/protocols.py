"""Protocols for hosts that render forms.

The engine never draws anything. A host implements ``FieldRenderer`` to
turn a ``ControlSpec`` into an interactive control and to report raw
input back to the session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from formbuilder.domain import FieldSchema, LayoutRow
    from formbuilder.infrastructure.controls import ControlSpec


@runtime_checkable
class FieldRenderer(Protocol):
    """Renders one field control.

    Example:
        ```python
        class TerminalRenderer:
            def render(self, control, on_change):
                raw = input(f"{control.label}: ")
                on_change(raw)
                return raw
        ```
    """

    def render(self, control: ControlSpec, on_change: Callable[[str], Any]) -> Any:
        """Draw a control.

        Args:
            control: Description of the control and its current state.
            on_change: Callback receiving raw user input; it applies the
                input to the session and returns the new field state.

        Returns:
            Whatever the host uses to represent a drawn control.
        """
        ...


@runtime_checkable
class FormatterProtocol(Protocol):
    """Formats a segmented layout as text."""

    def format(self, rows: Sequence[LayoutRow], title: str = "") -> str:
        ...


@runtime_checkable
class SubmissionFormatterProtocol(Protocol):
    """Formats submitted data for display."""

    def format(self, fields: Sequence[FieldSchema], data: Any) -> str:
        ...
