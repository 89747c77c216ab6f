"""API request models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from numberpaint.engine.config import PipelineConfig


class BoundingBoxModel(BaseModel):
    x: int
    y: int
    w: int
    h: int


class RegionModel(BaseModel):
    id: int
    color_index: int
    pixel_count: int
    bbox: BoundingBoxModel


class PipelineSettingsModel(BaseModel):
    palette_size: int = Field(default=16, ge=1, le=256)
    algorithm: Literal["kmeans", "mediancut"] = "kmeans"
    preset_palette_id: Optional[str] = Field(
        default=None, description="Preset palette id, e.g. 'crayola-8'"
    )
    fixed_palette: Optional[list[tuple[int, int, int]]] = Field(
        default=None, description="Explicit RGB palette; overrides preset_palette_id"
    )
    min_region_size: int = Field(default=20, ge=0)
    simplification_epsilon: float = Field(default=1.0, ge=0)
    label_precision: float = Field(default=1.0, gt=0)
    random_seed: Optional[int] = None
    brightness: int = Field(default=0, ge=-100, le=100)
    contrast: int = Field(default=0, ge=-100, le=100)
    saturation: int = Field(default=0, ge=-100, le=100)

    def to_config(self) -> PipelineConfig:
        return PipelineConfig(**self.model_dump())


class ImageModel(BaseModel):
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    pixels: str = Field(..., description="Base64 row-major RGBA bytes")


class PipelineRequest(BaseModel):
    image: ImageModel
    settings: PipelineSettingsModel = Field(default_factory=PipelineSettingsModel)
    include_maps: bool = Field(default=True, description="Return base64 label/index maps")


class LabelMapModel(BaseModel):
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    label_map: str = Field(..., description="Base64 little-endian int32 labels")


class SuggestMergeRequest(LabelMapModel):
    source_id: int
    regions: list[RegionModel]
    palette: list[tuple[int, int, int]]
    lab_palette: list[tuple[float, float, float]]
    top_n: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def check_palette(self) -> SuggestMergeRequest:
        if len(self.palette) != len(self.lab_palette):
            raise ValueError("palette and lab_palette must have the same length")
        for region in self.regions:
            if not 0 <= region.color_index < len(self.lab_palette):
                raise ValueError(
                    f"Region {region.id} has color_index {region.color_index}; "
                    f"palette holds {len(self.lab_palette)} colors"
                )
        return self


class MergeRequest(LabelMapModel):
    a_id: int = Field(..., description="Region absorbed")
    b_id: int = Field(..., description="Region that survives")
    regions: list[RegionModel]


class SplitAnalysisRequest(LabelMapModel):
    region_id: int
    sampling_rate: int = Field(default=2, ge=1)
    seed: Optional[int] = Field(default=None, description="Seed for the jitter term")


class SplitRequest(LabelMapModel):
    region_id: int
    seed_x: int
    seed_y: int
    regions: list[RegionModel]
    pixels: str = Field(..., description="Base64 row-major RGBA bytes of the source image")
    color_threshold: float = Field(default=30.0, ge=0)
