"""Stage 2: connected-component labeling of the index map."""

from __future__ import annotations

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.labeling import label_regions
from numberpaint.engine.registry import Phase, stage


@stage(
    id="segment",
    phase=Phase.REGIONS,
    dependencies=["quantize"],
    description="Label 4-connected same-color regions",
)
def segment(ctx: PipelineContext) -> None:
    if ctx.index_map is None:
        raise RuntimeError("segment requires an index map")
    ctx.label_map, ctx.regions = label_regions(ctx.index_map, ctx.progress_callback)
