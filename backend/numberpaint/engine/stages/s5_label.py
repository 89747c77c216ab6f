"""Stage 5: number placement and summary statistics."""

from __future__ import annotations

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.placement import place_labels
from numberpaint.engine.registry import Phase, stage
from numberpaint.engine.statistics import calculate_region_statistics


@stage(
    id="label",
    phase=Phase.VECTORS,
    dependencies=["contour"],
    description="Place numbers at each region's pole of inaccessibility",
)
def label(ctx: PipelineContext) -> None:
    ctx.labels = place_labels(ctx.contours, ctx.config.label_precision, ctx.progress_callback)
    ctx.statistics = calculate_region_statistics(ctx.regions)
