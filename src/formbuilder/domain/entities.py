"""Form field entities: the finalized schema and the mutable builder draft."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from formbuilder.domain.services.masking import implied_mask, mask_preset
from formbuilder.domain.value_objects import (
    Constraints,
    FieldKind,
    FieldOption,
    HeaderLevel,
    LayoutWidth,
    MaskKind,
    Orientation,
    SpacerSize,
)


@dataclass(frozen=True)
class FieldSchema:
    """A finalized form field definition.

    Instances only come out of ``finalize`` (or the session's structural
    block insertion), so every invariant of the field model holds: kind,
    name and label are set, option counts fit the kind, and the
    constraint bounds are consistent.

    Attributes:
        id: Identifier handed out by the owning session; never reused.
        kind: Field kind.
        name: Key under which the value is stored. Unique among
            value-bearing fields.
        label: Display text.
        layout_width: Full or half width.
        mask_kind: Live input mask, if any.
        placeholder: Hint text for empty controls.
        constraints: Validation rules.
        options: Choices for selection kinds.
        orientation: Arrangement of checkbox and radio choices.
        multiple: Multi-select for selects, multiple files for file inputs.
        rows: Visible rows of a textarea.
        header_level: Heading level of a header block.
        spacer_size: Height class of a spacer block.
        hide_on_small: Hide a structural block on the small viewport.
    """

    id: int
    kind: FieldKind
    name: str
    label: str
    layout_width: LayoutWidth = LayoutWidth.HALF
    mask_kind: MaskKind | None = None
    placeholder: str = ""
    constraints: Constraints = field(default_factory=Constraints)
    options: tuple[FieldOption, ...] = ()
    orientation: Orientation = Orientation.VERTICAL
    multiple: bool = False
    rows: int | None = None
    header_level: HeaderLevel | None = None
    spacer_size: SpacerSize | None = None
    hide_on_small: bool = False

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError("Field id must be non-negative")

    @property
    def is_structural(self) -> bool:
        return self.kind.is_structural

    @property
    def is_multi_select(self) -> bool:
        """Checkbox groups and multi-selects store comma-joined values."""
        return self.kind is FieldKind.CHECKBOX_GROUP or (
            self.kind is FieldKind.SELECT and self.multiple
        )

    def option_label(self, value: str) -> str:
        """Label of the option with the given value, or the value itself."""
        for option in self.options:
            if option.value == value:
                return option.label
        return value


@dataclass
class FieldDraft:
    """A field being composed in the builder.

    Every attribute is optional while composing; ``kind`` stays None until
    a kind is chosen. ``id`` is 0 for a new field and the existing id when
    the draft was loaded from a schema for editing.
    """

    id: int = 0
    kind: FieldKind | None = None
    name: str = ""
    label: str = ""
    layout_width: LayoutWidth = LayoutWidth.FULL
    mask_kind: MaskKind | None = None
    placeholder: str = ""
    constraints: Constraints = field(default_factory=Constraints)
    options: list[FieldOption] = field(default_factory=list)
    orientation: Orientation = Orientation.VERTICAL
    multiple: bool = False
    rows: int | None = None
    header_level: HeaderLevel | None = None
    spacer_size: SpacerSize | None = None
    hide_on_small: bool = False

    @classmethod
    def from_schema(cls, schema: FieldSchema) -> "FieldDraft":
        """Load an existing schema back into an editable draft."""
        return cls(
            id=schema.id,
            kind=schema.kind,
            name=schema.name,
            label=schema.label,
            layout_width=schema.layout_width,
            mask_kind=schema.mask_kind,
            placeholder=schema.placeholder,
            constraints=schema.constraints,
            options=list(schema.options),
            orientation=schema.orientation,
            multiple=schema.multiple,
            rows=schema.rows,
            header_level=schema.header_level,
            spacer_size=schema.spacer_size,
            hide_on_small=schema.hide_on_small,
        )

    def set_kind(self, kind: FieldKind | None) -> None:
        """Choose the field kind and apply its defaults.

        Setting the same kind again is a no-op. Changing kind resets
        masking, applies the kind's default layout width and seeds the
        initial options of selection kinds. Every change to tel, email or url
        adopts that kind's implied mask preset again, since changing kind
        resets masking. The preset stays until the mask or kind changes.
        """
        if kind == self.kind:
            return
        if kind is None:
            # Clearing the kind starts the draft over, keeping identity and naming
            self.kind = None
            self.layout_width = LayoutWidth.FULL
            self._seed_mask(None)
            self.constraints = Constraints()
            self.options = []
            return

        self.kind = kind
        self.layout_width = kind.default_layout
        self.mask_kind = None
        self.placeholder = ""
        self.constraints = replace(self.constraints, pattern=None, max_length=None)

        if kind is FieldKind.RADIO_GROUP:
            self.options = [
                FieldOption(label="Option 1", value="opt1"),
                FieldOption(label="Option 2", value="opt2"),
            ]
            self.orientation = Orientation.VERTICAL
        elif kind in (FieldKind.CHECKBOX_GROUP, FieldKind.SELECT):
            self.options = [FieldOption(label="Option 1", value="opt1")]
            self.orientation = Orientation.VERTICAL
        else:
            self.options = []

        if kind is FieldKind.HEADER:
            self.header_level = self.header_level or HeaderLevel.H2
        elif kind is FieldKind.SPACER:
            self.spacer_size = self.spacer_size or SpacerSize.MD

        preset_mask = implied_mask(kind)
        if preset_mask is not None:
            self._seed_mask(preset_mask)

    def set_mask(self, mask_kind: MaskKind | None, custom_pattern: str | None = None) -> None:
        """Choose a mask explicitly, seeding its pattern and placeholder.

        Raises:
            ValueError: If the draft's kind does not support masking.
        """
        if mask_kind is not None and (self.kind is None or not self.kind.supports_masking):
            kind_name = self.kind.value if self.kind else "unset"
            raise ValueError(f"Fields of kind '{kind_name}' do not support masks")
        self._seed_mask(mask_kind, custom_pattern)

    def _seed_mask(self, mask_kind: MaskKind | None, custom_pattern: str | None = None) -> None:
        preset = mask_preset(mask_kind, custom_pattern)
        self.mask_kind = mask_kind
        self.placeholder = preset.placeholder
        self.constraints = replace(
            self.constraints, pattern=preset.pattern, max_length=preset.max_length
        )

    def set_constraint(self, name: str, value: Any) -> None:
        """Set one constraint; bound pairs stay consistent (see Constraints.with_bound)."""
        self.constraints = self.constraints.with_bound(name, value)

    def set_constraints(self, rules: dict[str, Any]) -> None:
        """Set several constraints at once, as a document declares them.

        Bound pairs are not reconciled here; finalizing the draft repairs
        them with the minimum winning (see Constraints.normalized).

        Raises:
            AttributeError: If a name is not a constraint attribute.
        """
        for name in rules:
            if not hasattr(self.constraints, name):
                raise AttributeError(f"Unknown constraint '{name}'")
        self.constraints = replace(self.constraints, **rules)

    # Option editing

    def add_option(self, label: str = "", value: str = "") -> None:
        self.options.append(FieldOption(label=label, value=value))

    def remove_option(self, index: int) -> None:
        if 0 <= index < len(self.options):
            del self.options[index]

    def update_option(
        self,
        index: int,
        label: str | None = None,
        value: str | None = None,
    ) -> None:
        current = self.options[index]
        self.options[index] = replace(
            current,
            label=current.label if label is None else label,
            value=current.value if value is None else value,
        )

    def set_option_default(self, index: int, selected: bool = True) -> None:
        """Mark an option as pre-selected.

        Radio groups and single selects keep at most one default: selecting one
        clears the others. Checkbox groups and multi-selects allow any number.
        """
        single = self.kind is FieldKind.RADIO_GROUP or (
            self.kind is FieldKind.SELECT and not self.multiple
        )
        updated: list[FieldOption] = []
        for i, option in enumerate(self.options):
            if i == index:
                updated.append(replace(option, default_selected=selected))
            elif single and selected:
                updated.append(replace(option, default_selected=False))
            else:
                updated.append(option)
        self.options = updated
