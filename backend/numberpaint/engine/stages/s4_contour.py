"""Stage 4: trace and simplify region outlines."""

from __future__ import annotations

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.contours import trace_contours
from numberpaint.engine.registry import Phase, stage


@stage(
    id="contour",
    phase=Phase.VECTORS,
    dependencies=["merge"],
    description="Trace region outlines with marching squares",
)
def contour(ctx: PipelineContext) -> None:
    if ctx.label_map is None:
        raise RuntimeError("contour requires a label map")
    ctx.contours = trace_contours(
        ctx.label_map,
        ctx.regions,
        ctx.config.simplification_epsilon,
        ctx.progress_callback,
    )
