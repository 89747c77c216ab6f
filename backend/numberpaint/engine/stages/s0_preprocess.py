"""Stage 0: brightness / contrast / saturation adjustments."""

from __future__ import annotations

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.preprocessing import apply_preprocessing
from numberpaint.engine.registry import Phase, stage


@stage(
    id="preprocess",
    phase=Phase.PREPARE,
    description="Apply brightness, contrast and saturation adjustments",
)
def preprocess(ctx: PipelineContext) -> None:
    cfg = ctx.config
    if not cfg.has_preprocessing:
        return
    ctx.pixels = apply_preprocessing(
        ctx.pixels,
        brightness=cfg.brightness,
        contrast=cfg.contrast,
        saturation=cfg.saturation,
    )
    if ctx.progress_callback is not None:
        ctx.progress_callback(100)
