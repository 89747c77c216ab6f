"""GET /api/palettes: preset palette catalogue."""

from __future__ import annotations

from fastapi import APIRouter

from numberpaint.engine.palettes import PRESET_PALETTES, preset_brands
from numberpaint.models.responses import (
    PaletteColorModel,
    PaletteListResponse,
    PresetPaletteModel,
)
from numberpaint.utils.color import rgb_to_hex

router = APIRouter()


@router.get("/palettes", response_model=PaletteListResponse)
async def list_palettes() -> PaletteListResponse:
    return PaletteListResponse(
        brands=preset_brands(),
        palettes=[
            PresetPaletteModel(
                id=p.id,
                label=p.label,
                brand=p.brand,
                medium=p.medium,
                colors=[
                    PaletteColorModel(name=c.name, rgb=c.rgb, hex=rgb_to_hex(c.rgb), code=c.code)
                    for c in p.colors
                ],
            )
            for p in PRESET_PALETTES
        ],
    )
