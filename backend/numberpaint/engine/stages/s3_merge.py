"""Stage 3: fold undersized regions into their closest-colored neighbour."""

from __future__ import annotations

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.merging import merge_small_regions
from numberpaint.engine.registry import Phase, stage


@stage(
    id="merge",
    phase=Phase.REGIONS,
    dependencies=["segment"],
    description="Merge regions below the minimum size",
)
def merge(ctx: PipelineContext) -> None:
    if ctx.label_map is None:
        raise RuntimeError("merge requires a label map")
    ctx.label_map, ctx.regions = merge_small_regions(
        ctx.label_map,
        ctx.index_map,
        ctx.regions,
        ctx.config.min_region_size,
        ctx.palette,
        ctx.lab_palette,
        ctx.progress_callback,
    )
