"""Summary numbers over a region list, for the legend and API responses."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from numberpaint.engine.context import Region


@dataclass
class ColorUsage:
    color_index: int
    count: int
    total_pixels: int
    average_pixels: int


@dataclass
class RegionStatistics:
    total_regions: int = 0
    regions_per_color: dict[int, int] = field(default_factory=dict)
    largest_region: Optional[Region] = None
    smallest_region: Optional[Region] = None
    average_region_size: int = 0
    color_sizes: list[ColorUsage] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_region_statistics(regions: list[Region]) -> RegionStatistics:
    if not regions:
        return RegionStatistics()

    per_color: dict[int, int] = {}
    pixels_per_color: dict[int, int] = {}
    largest = smallest = regions[0]
    total_pixels = 0

    for region in regions:
        per_color[region.color_index] = per_color.get(region.color_index, 0) + 1
        pixels_per_color[region.color_index] = (
            pixels_per_color.get(region.color_index, 0) + region.pixel_count
        )
        # First region wins ties
        if region.pixel_count > largest.pixel_count:
            largest = region
        if region.pixel_count < smallest.pixel_count:
            smallest = region
        total_pixels += region.pixel_count

    color_sizes = [
        ColorUsage(
            color_index=ci,
            count=count,
            total_pixels=pixels_per_color[ci],
            average_pixels=_round_half_up(pixels_per_color[ci] / count),
        )
        for ci, count in per_color.items()
    ]
    color_sizes.sort(key=lambda c: c.total_pixels, reverse=True)

    return RegionStatistics(
        total_regions=len(regions),
        regions_per_color=per_color,
        largest_region=largest,
        smallest_region=smallest,
        average_region_size=_round_half_up(total_pixels / len(regions)),
        color_sizes=color_sizes,
    )
