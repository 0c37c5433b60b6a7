"""Layout segmentation of a form into full-width rows and two-lane row groups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from formbuilder.domain.value_objects import (
    ColumnsRow,
    FullRow,
    LayoutItem,
    LayoutRow,
    LayoutWidth,
    Viewport,
)

if TYPE_CHECKING:
    from formbuilder.domain.entities import FieldSchema

logger = logging.getLogger(__name__)


def distribute_to_lanes(
    items: Sequence[LayoutItem],
) -> tuple[tuple[LayoutItem, ...], tuple[LayoutItem, ...]]:
    """Split a run of half-width items into left and right lanes.

    Assignment alternates left, right, left, ... starting on the left.
    """
    left = tuple(items[0::2])
    right = tuple(items[1::2])
    return left, right


def segment(fields: Sequence["FieldSchema"], viewport: Viewport) -> list[LayoutRow]:
    """Partition an ordered field list into layout rows.

    Fields are scanned in order. A full-width field flushes any pending
    run of half-width fields into a ``ColumnsRow`` and is emitted as its
    own ``FullRow``. Consecutive half-width fields accumulate and are
    flushed into one ``ColumnsRow`` when interrupted or at the end of the
    list, with lanes assigned alternately. On the small viewport every
    field gets its own ``FullRow`` in original order.

    Args:
        fields: Fields in schema order.
        viewport: Viewport class being rendered.

    Returns:
        Rows in display order. The same input always yields the same rows.
    """
    small = viewport is Viewport.SMALL
    rows: list[LayoutRow] = []
    buffer: list[LayoutItem] = []

    def flush() -> None:
        if buffer:
            left, right = distribute_to_lanes(buffer)
            rows.append(ColumnsRow(left=left, right=right))
            buffer.clear()

    for index, field in enumerate(fields):
        item = LayoutItem(
            field=field,
            index=index,
            visible=not (small and field.hide_on_small),
        )
        if small or field.layout_width is LayoutWidth.FULL:
            flush()
            rows.append(FullRow(item=item))
        else:
            buffer.append(item)
    flush()

    logger.debug(f"Segmented {len(fields)} fields into {len(rows)} rows ({viewport.value})")
    return rows
