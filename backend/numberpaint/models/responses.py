"""API response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from numberpaint.models.requests import RegionModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class PaletteColorModel(BaseModel):
    name: str
    rgb: tuple[int, int, int]
    hex: str
    code: Optional[str] = None


class PresetPaletteModel(BaseModel):
    id: str
    label: str
    brand: str
    medium: str
    colors: list[PaletteColorModel]


class PaletteListResponse(BaseModel):
    brands: list[str]
    palettes: list[PresetPaletteModel]


class ContourModel(BaseModel):
    region_id: int
    color_index: int
    outer_ring: list[tuple[float, float]]
    holes: list[list[tuple[float, float]]] = Field(default_factory=list)


class LabelModel(BaseModel):
    region_id: int
    color_index: int
    x: float
    y: float
    max_inscribed_radius: float


class ColorUsageModel(BaseModel):
    color_index: int
    count: int
    total_pixels: int
    average_pixels: int


class StatisticsModel(BaseModel):
    total_regions: int = 0
    regions_per_color: dict[int, int] = Field(default_factory=dict)
    largest_region: Optional[RegionModel] = None
    smallest_region: Optional[RegionModel] = None
    average_region_size: int = 0
    color_sizes: list[ColorUsageModel] = Field(default_factory=list)


class PipelineResponse(BaseModel):
    width: int
    height: int
    palette: list[tuple[int, int, int]]
    palette_hex: list[str]
    lab_palette: list[tuple[float, float, float]]
    regions: list[RegionModel]
    contours: list[ContourModel]
    labels: list[LabelModel]
    statistics: StatisticsModel
    label_map: Optional[str] = None
    index_map: Optional[str] = None
    processing_time_ms: float = 0.0
    stages_completed: list[str] = Field(default_factory=list)
    timings_ms: dict[str, float] = Field(default_factory=dict)


class MergeSuggestionModel(BaseModel):
    target_region_id: int
    color_distance: float
    edge_coherence: float
    size_ratio: float
    context_score: float
    is_adjacent: bool = True


class SuggestMergeResponse(BaseModel):
    source_id: int
    suggestions: list[MergeSuggestionModel]


class RegionOpResponse(BaseModel):
    """Result of a merge or split; ``region_id`` is -1 when nothing changed."""

    region_id: int
    label_map: str
    regions: list[RegionModel]


class SplitCandidateModel(BaseModel):
    x: int
    y: int
    strength: float


class SplitAnalysisResponse(BaseModel):
    region_id: int
    has_subregions: bool
    estimated_variance: float
    split_candidates: list[SplitCandidateModel]
