"""PipelineContext: the single mutable state object flowing through all stages.

Per-region results -> Region / ContourData / LabelPlacement
Whole-image buffers -> PipelineContext.* (index_map, label_map, ...)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from numberpaint.engine.config import PipelineConfig


@dataclass
class BoundingBox:
    """Pixel-space box; w and h count pixels, so a single pixel is 1x1."""

    x: int
    y: int
    w: int
    h: int

    @property
    def x2(self) -> int:
        return self.x + self.w - 1

    @property
    def y2(self) -> int:
        return self.y + self.h - 1

    def union(self, other: BoundingBox) -> BoundingBox:
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        return BoundingBox(
            x=x,
            y=y,
            w=max(self.x2, other.x2) - x + 1,
            h=max(self.y2, other.y2) - y + 1,
        )


@dataclass
class Region:
    """A connected, flat-colored area. ``id`` is its current label value."""

    id: int
    color_index: int
    pixel_count: int
    bbox: BoundingBox


@dataclass
class ContourData:
    """Outer ring plus holes for one region, in full-image pixel coordinates."""

    region_id: int
    color_index: int
    outer_ring: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    holes: list[NDArray[np.float64]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.outer_ring) < 3

    @property
    def polygon(self) -> Polygon | None:
        if self.is_empty:
            return None
        return Polygon(self.outer_ring, [h for h in self.holes if len(h) >= 3])


@dataclass
class LabelPlacement:
    region_id: int
    color_index: int
    x: float
    y: float
    max_inscribed_radius: float


@dataclass
class PipelineContext:
    """Shared state flowing through the entire pipeline."""

    # Input RGBA pixels, shape (height, width, 4), uint8
    pixels: NDArray[np.uint8]
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Stage 1: palette ---
    index_map: NDArray[np.uint8] | None = None
    palette: NDArray[np.uint8] | None = None
    lab_palette: NDArray[np.float64] | None = None

    # --- Stages 2-3: regions ---
    label_map: NDArray[np.int32] | None = None
    regions: list[Region] = field(default_factory=list)

    # --- Stages 4-5: vectors ---
    contours: list[ContourData] = field(default_factory=list)
    labels: list[LabelPlacement] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_stages: list[str] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)
    timings_ms: dict[str, float] = field(default_factory=dict)
    # Set by the orchestrator for the duration of each stage
    progress_callback: Optional[Callable[[int], None]] = None
    statistics: Any = None

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def num_regions(self) -> int:
        return len(self.regions)

    def get_region(self, region_id: int) -> Region | None:
        for r in self.regions:
            if r.id == region_id:
                return r
        return None
