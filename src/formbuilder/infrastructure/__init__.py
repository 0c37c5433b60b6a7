"""Infrastructure layer - render contract and formatters."""

from .controls import (
    ControlSpec,
    OptionState,
    describe_control,
    normalize_date_value,
    render_session,
)
from .formatters import (
    LayoutDiagramFormatter,
    SubmissionFormatter,
    SubmissionJsonExporter,
)

__all__ = [
    "ControlSpec",
    "LayoutDiagramFormatter",
    "OptionState",
    "SubmissionFormatter",
    "SubmissionJsonExporter",
    "describe_control",
    "normalize_date_value",
    "render_session",
]
