"""Stage 1: build the palette and per-pixel index map."""

from __future__ import annotations

import numpy as np

from numberpaint.engine.config import PipelineConfig
from numberpaint.engine.context import PipelineContext
from numberpaint.engine.palettes import find_preset_palette
from numberpaint.engine.quantize import quantize
from numberpaint.engine.registry import Phase, stage


def resolve_fixed_palette(cfg: PipelineConfig) -> list[tuple[int, int, int]] | None:
    """Explicit colors first, then a preset by id, else None (cluster)."""
    if cfg.fixed_palette is not None:
        return cfg.fixed_palette
    if cfg.preset_palette_id:
        preset = find_preset_palette(cfg.preset_palette_id)
        if preset is None:
            raise ValueError(f"Unknown preset palette: {cfg.preset_palette_id!r}")
        return preset.rgb
    return None


@stage(
    id="quantize",
    phase=Phase.PALETTE,
    dependencies=["preprocess"],
    description="Reduce colors to a k-entry palette",
)
def quantize_colors(ctx: PipelineContext) -> None:
    cfg = ctx.config
    result = quantize(
        ctx.pixels,
        cfg.algorithm,
        cfg.palette_size,
        resolve_fixed_palette(cfg),
        rng=np.random.default_rng(cfg.random_seed),
        on_progress=ctx.progress_callback,
        max_samples=cfg.max_samples,
        max_iterations=cfg.max_iterations,
        convergence_threshold=cfg.convergence_threshold,
        lut_size=cfg.lut_size,
    )
    ctx.index_map = result.index_map
    ctx.palette = result.palette
    ctx.lab_palette = result.lab_palette
