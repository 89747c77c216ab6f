"""Contour tracer: per-region outer ring and holes in image pixel space."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from numberpaint.engine.context import ContourData, Region
from numberpaint.utils.contour import douglas_peucker, trace_binary_grid
from numberpaint.utils.geometry import polygon_area
from numberpaint.utils.progress import ProgressCallback, as_reporter

logger = logging.getLogger(__name__)


def region_mask(label_map: NDArray[np.int32], region: Region, pad: int = 1) -> NDArray[np.uint8]:
    """Binary occupancy of ``region`` cropped to its bbox plus ``pad`` pixels.

    Crop cell (pad, pad) is the bbox's top-left pixel.
    """
    b = region.bbox
    grid = np.zeros((b.h + 2 * pad, b.w + 2 * pad), dtype=np.uint8)
    window = label_map[b.y : b.y + b.h, b.x : b.x + b.w]
    grid[pad : pad + b.h, pad : pad + b.w] = window == region.id
    return grid


def extract_contour(label_map: NDArray[np.int32], region: Region, epsilon: float) -> ContourData:
    """Trace, offset and simplify one region's rings.

    The ring with the largest absolute signed area is the outer ring; every
    other ring with at least 3 points is a hole.
    """
    grid = region_mask(label_map, region)
    offset = np.array([region.bbox.x - 1, region.bbox.y - 1], dtype=np.float64)

    rings = []
    for ring in trace_binary_grid(grid):
        simplified = douglas_peucker(ring + offset, epsilon)
        if len(simplified) >= 3:
            rings.append(simplified)

    contour = ContourData(region_id=region.id, color_index=region.color_index)
    if not rings:
        return contour

    areas = [polygon_area(r) for r in rings]
    outer = int(np.argmax(areas))
    contour.outer_ring = rings[outer]
    contour.holes = [r for i, r in enumerate(rings) if i != outer]
    return contour


def trace_contours(
    label_map: NDArray[np.int32],
    regions: list[Region],
    epsilon: float,
    on_progress: Optional[ProgressCallback] = None,
) -> list[ContourData]:
    """One ContourData per region that yields a usable outer ring."""
    progress = as_reporter(on_progress)
    contours: list[ContourData] = []
    empty = 0
    total = len(regions)

    for i, region in enumerate(regions):
        contour = extract_contour(label_map, region, epsilon)
        if contour.is_empty:
            empty += 1
        else:
            contours.append(contour)
        progress((i + 1) / total * 100)

    progress(100)
    if empty:
        logger.debug("Dropped %d regions with no usable contour", empty)
    return contours
