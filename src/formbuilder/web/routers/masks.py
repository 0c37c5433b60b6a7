"""Input mask endpoints."""

from fastapi import APIRouter

from formbuilder.domain import MaskKind, apply_mask, mask_preset
from formbuilder.web.schemas import (
    MaskListSchema,
    MaskPresetSchema,
    MaskRequest,
    MaskResponseSchema,
)

router = APIRouter(prefix="/masks", tags=["masks"])


@router.get("", response_model=MaskListSchema)
async def list_masks() -> MaskListSchema:
    """List every mask with the builder preset it seeds."""
    masks = []
    for kind in MaskKind:
        preset = mask_preset(kind)
        masks.append(
            MaskPresetSchema(
                mask=kind.value,
                placeholder=preset.placeholder,
                pattern=preset.pattern,
                max_length=preset.max_length,
            )
        )
    return MaskListSchema(masks=masks)


@router.post("/apply", response_model=MaskResponseSchema)
async def apply(request: MaskRequest) -> MaskResponseSchema:
    """Shape raw input with a mask."""
    preset = mask_preset(request.mask, request.pattern)
    return MaskResponseSchema(
        value=apply_mask(
            request.mask, request.raw, custom_pattern=request.pattern, multiline=request.multiline
        ),
        placeholder=preset.placeholder,
        pattern=preset.pattern,
        max_length=preset.max_length,
    )
