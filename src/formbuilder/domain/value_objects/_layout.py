"""Rows produced by layout segmentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from formbuilder.domain.entities import FieldSchema


@dataclass(frozen=True)
class LayoutItem:
    """A field placed in the layout.

    Attributes:
        field: The field schema being placed.
        index: Position of the field in the session's field list, so that
            move/edit/delete intents can address it from any row.
        visible: False when the field asks to be hidden on the current
            viewport; the row is still emitted.
    """

    field: "FieldSchema"
    index: int
    visible: bool = True

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("Layout index must be non-negative")


@dataclass(frozen=True)
class FullRow:
    """A row holding a single field across the full width."""

    item: LayoutItem

    @property
    def items(self) -> tuple[LayoutItem, ...]:
        return (self.item,)


@dataclass(frozen=True)
class ColumnsRow:
    """A row group of half-width fields split into two independent lanes.

    Each lane flows vertically on its own, so a tall field in the left
    lane never moves the fields of the right lane.
    """

    left: tuple[LayoutItem, ...]
    right: tuple[LayoutItem, ...]

    @property
    def items(self) -> tuple[LayoutItem, ...]:
        """Items in original field order."""
        return tuple(sorted(self.left + self.right, key=lambda it: it.index))


LayoutRow = Union[FullRow, ColumnsRow]
