"""Text formatters for form layouts and submissions."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Mapping, Sequence

from formbuilder.domain import (
    ColumnsRow,
    FieldKind,
    FieldSchema,
    LayoutItem,
    LayoutRow,
    parse_files,
)
from formbuilder.domain.services import format_number, parse_number
from formbuilder.domain.value_objects import parse_datetime

EMPTY_VALUE = "-"


class LayoutDiagramFormatter:
    """Formats ASCII diagrams of segmented form layouts.

    Full rows span the whole box; columns rows are split into a left and
    a right lane, each listing its items top to bottom.
    """

    def format(self, rows: Sequence[LayoutRow], title: str = "", width: int = 64) -> str:
        if not rows:
            return "No fields to display."

        inner = width - 4
        lane = (width - 7) // 2
        lines = [
            f"FORM LAYOUT{f': {title}' if title else ''}",
            "=" * width,
        ]
        border = "+" + "-" * (width - 2) + "+"
        split = "+" + "-" * (lane + 2) + "+" + "-" * (width - lane - 5) + "+"

        for row in rows:
            if isinstance(row, ColumnsRow):
                lines.append(split)
                left = [self._item_text(i) for i in row.left]
                right = [self._item_text(i) for i in row.right]
                right_width = width - lane - 7
                for n in range(max(len(left), len(right))):
                    l_text = left[n] if n < len(left) else ""
                    r_text = right[n] if n < len(right) else ""
                    lines.append(
                        f"| {l_text[:lane]:<{lane}} | {r_text[:right_width]:<{right_width}} |"
                    )
                lines.append(split)
            else:
                lines.append(border)
                text = self._item_text(row.item)
                lines.append(f"| {text[:inner]:<{inner}} |")
                lines.append(border)

        lines.append("")
        items = [item for row in rows for item in row.items]
        lines.append(f"Rows: {len(rows)}")
        lines.append(f"Fields: {len(items)}")
        hidden = sum(1 for item in items if not item.visible)
        if hidden:
            lines.append(f"Hidden on this viewport: {hidden}")
        return "\n".join(lines)

    def _item_text(self, item: LayoutItem) -> str:
        f = item.field
        if f.kind is FieldKind.HEADER:
            level = f.header_level.value if f.header_level else "h2"
            text = f"[{item.index}] {level.upper()} {f.label}"
        elif f.kind is FieldKind.SPACER:
            size = f.spacer_size.value if f.spacer_size else "md"
            text = f"[{item.index}] ~ spacer ({size}) ~"
        else:
            text = f"[{item.index}] {f.label} ({f.kind.value})"
        if not item.visible:
            text += " (hidden)"
        return text


class SubmissionFormatter:
    """Formats submitted form data as a label/value summary.

    Option values render as their labels, file payloads as file names
    with sizes, and numbers, currency and dates in a readable form.
    Empty values render as ``-``.
    """

    def format(self, fields: Sequence[FieldSchema], data: Mapping[str, str]) -> str:
        value_fields = [f for f in fields if not f.is_structural]
        if not value_fields:
            return "No submitted data."

        label_width = max(len(f.label or f.name) for f in value_fields)
        lines = ["SUBMITTED DATA", "=" * 60]
        for f in value_fields:
            rendered = self.render_value(f, data.get(f.name, "")).split("\n")
            lines.append(f"{(f.label or f.name):<{label_width}}  {rendered[0]}")
            for continuation in rendered[1:]:
                lines.append(f"{'':<{label_width}}  {continuation}")
        return "\n".join(lines)

    def render_value(self, f: FieldSchema, raw: str) -> str:
        """Human-readable form of one stored value."""
        if not raw or not raw.strip():
            return EMPTY_VALUE

        kind = f.kind
        if f.is_multi_select:
            selected = [v for v in raw.split(",") if v]
            labels = [o.label for o in f.options if o.value in selected]
            return ", ".join(labels or selected) or EMPTY_VALUE
        if kind in (FieldKind.RADIO_GROUP, FieldKind.SELECT):
            return f.option_label(raw)
        if kind is FieldKind.FILE:
            files = parse_files(raw)
            if not files:
                return EMPTY_VALUE
            return "\n".join(
                f"{file.name} ({format_number(file.size_mb)} MB)" if file.size_mb else file.name
                for file in files
            )
        if kind is FieldKind.CURRENCY:
            amount = parse_number(raw)
            places = f.constraints.decimal_places
            places = 2 if places is None else places
            return raw if amount is None else f"${amount:,.{places}f}"
        if kind is FieldKind.NUMBER:
            return self._render_number(raw, f.constraints.decimal_places)
        if kind.is_date:
            parsed = parse_datetime(raw)
            if parsed is None:
                return raw
            if kind is FieldKind.DATE:
                return parsed.strftime("%m/%d/%Y")
            return parsed.strftime("%m/%d/%Y, %I:%M %p")
        return raw

    @staticmethod
    def _render_number(raw: str, decimal_places: int | None) -> str:
        try:
            number = float(raw)
        except ValueError:
            return raw
        if decimal_places is not None:
            return f"{number:,.{decimal_places}f}"
        if "." not in raw:
            return f"{number:,.0f}"
        # at least two, at most six fractional digits
        text = f"{number:,.6f}".rstrip("0")
        whole, _, frac = text.partition(".")
        return f"{whole}.{frac.ljust(2, '0')}"


class SubmissionJsonExporter:
    """Exports submitted form data as JSON."""

    def export(
        self,
        fields: Sequence[FieldSchema],
        data: Mapping[str, str],
        title: str = "",
    ) -> str:
        payload: dict[str, Any] = {
            "title": title,
            "submitted_at": datetime.now().isoformat(timespec="seconds"),
            "fields": [
                {
                    "name": f.name,
                    "label": f.label,
                    "kind": f.kind.value,
                    "value": data.get(f.name, ""),
                }
                for f in fields
                if not f.is_structural
            ],
            "data": dict(data),
        }
        return json.dumps(payload, indent=2)
