"""Domain services: masking, validation and layout segmentation."""

from .layout import distribute_to_lanes, segment
from .masking import MaskPreset, apply_mask, implied_mask, mask_preset
from .validation import format_number, normalize_token, parse_number, validate

__all__ = [
    "MaskPreset",
    "apply_mask",
    "distribute_to_lanes",
    "format_number",
    "implied_mask",
    "mask_preset",
    "normalize_token",
    "parse_number",
    "segment",
    "validate",
]
