"""Paint-by-numbers segmentation engine."""

from numberpaint.engine.config import PipelineConfig
from numberpaint.engine.context import (
    BoundingBox,
    ContourData,
    LabelPlacement,
    PipelineContext,
    Region,
)
from numberpaint.engine.pipeline import (
    Pipeline,
    PipelineCancelledError,
    StageFailedError,
    create_pipeline,
)
from numberpaint.engine.registry import Phase, get_registry, stage

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "PipelineConfig",
    "PipelineContext",
    "BoundingBox",
    "Region",
    "ContourData",
    "LabelPlacement",
    "Pipeline",
    "PipelineCancelledError",
    "StageFailedError",
    "create_pipeline",
]
