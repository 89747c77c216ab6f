"""Engine dataclasses <-> API models."""

from __future__ import annotations

import dataclasses

from numberpaint.engine.context import BoundingBox, PipelineContext, Region
from numberpaint.engine.statistics import RegionStatistics
from numberpaint.models.requests import BoundingBoxModel, RegionModel
from numberpaint.models.responses import (
    ColorUsageModel,
    ContourModel,
    LabelModel,
    PipelineResponse,
    StatisticsModel,
)
from numberpaint.utils.buffers import encode_array
from numberpaint.utils.color import rgb_to_hex


def region_to_model(region: Region) -> RegionModel:
    return RegionModel(
        id=region.id,
        color_index=region.color_index,
        pixel_count=region.pixel_count,
        bbox=BoundingBoxModel(**dataclasses.asdict(region.bbox)),
    )


def model_to_region(model: RegionModel) -> Region:
    return Region(
        id=model.id,
        color_index=model.color_index,
        pixel_count=model.pixel_count,
        bbox=BoundingBox(**model.bbox.model_dump()),
    )


def statistics_to_model(stats: RegionStatistics | None) -> StatisticsModel:
    if stats is None:
        return StatisticsModel()
    return StatisticsModel(
        total_regions=stats.total_regions,
        regions_per_color=stats.regions_per_color,
        largest_region=region_to_model(stats.largest_region) if stats.largest_region else None,
        smallest_region=region_to_model(stats.smallest_region) if stats.smallest_region else None,
        average_region_size=stats.average_region_size,
        color_sizes=[ColorUsageModel(**dataclasses.asdict(c)) for c in stats.color_sizes],
    )


def context_to_response(
    ctx: PipelineContext,
    include_maps: bool = True,
    processing_time_ms: float = 0.0,
) -> PipelineResponse:
    palette = [tuple(int(c) for c in rgb) for rgb in ctx.palette]
    return PipelineResponse(
        width=ctx.width,
        height=ctx.height,
        palette=palette,
        palette_hex=[rgb_to_hex(rgb) for rgb in palette],
        lab_palette=[tuple(float(c) for c in lab) for lab in ctx.lab_palette],
        regions=[region_to_model(r) for r in ctx.regions],
        contours=[
            ContourModel(
                region_id=c.region_id,
                color_index=c.color_index,
                outer_ring=c.outer_ring.tolist(),
                holes=[h.tolist() for h in c.holes],
            )
            for c in ctx.contours
        ],
        labels=[LabelModel(**dataclasses.asdict(lbl)) for lbl in ctx.labels],
        statistics=statistics_to_model(ctx.statistics),
        label_map=encode_array(ctx.label_map) if include_maps else None,
        index_map=encode_array(ctx.index_map) if include_maps else None,
        processing_time_ms=round(processing_time_ms, 1),
        stages_completed=list(ctx.completed_stages),
        timings_ms=dict(ctx.timings_ms),
    )
