"""Pole of inaccessibility via best-first quad-tree search.

Cells are ranked by the upper bound ``d + h*sqrt(2)`` on the distance any
point inside them can reach; cells that cannot beat the current best by more
than ``precision`` are discarded without subdividing.
"""

from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from numberpaint.utils.geometry import point_to_polygon_distance, polygon_centroid


@dataclass
class Cell:
    x: float
    y: float
    h: float  # half-size
    d: float  # signed distance from center to polygon
    max: float  # upper bound for any point in the cell


def _make_cell(x: float, y: float, h: float, polygon: NDArray[np.float64]) -> Cell:
    d = point_to_polygon_distance(x, y, polygon)
    return Cell(x=x, y=y, h=h, d=d, max=d + h * math.sqrt(2.0))


def polylabel(
    polygon: NDArray[np.float64],
    precision: float = 1.0,
) -> tuple[float, float, float]:
    """Return ``(x, y, distance)`` of the largest inscribed circle's center."""
    polygon = np.asarray(polygon, dtype=np.float64)
    if len(polygon) == 0:
        return (0.0, 0.0, 0.0)

    min_x, min_y = (float(v) for v in polygon.min(axis=0))
    max_x, max_y = (float(v) for v in polygon.max(axis=0))
    cell_size = min(max_x - min_x, max_y - min_y)
    if cell_size == 0:
        return (min_x, min_y, 0.0)

    h = cell_size / 2.0
    heap: list[tuple[float, int, Cell]] = []
    tiebreak = itertools.count()

    def push(cell: Cell) -> None:
        heapq.heappush(heap, (-cell.max, next(tiebreak), cell))

    x = min_x
    while x < max_x:
        y = min_y
        while y < max_y:
            push(_make_cell(x + h, y + h, h, polygon))
            y += cell_size
        x += cell_size

    cx, cy = polygon_centroid(polygon)
    best = _make_cell(cx, cy, 0.0, polygon)

    while heap:
        _, _, cell = heapq.heappop(heap)

        if cell.d > best.d:
            best = cell

        if cell.max - best.d <= precision:
            continue

        h = cell.h / 2.0
        push(_make_cell(cell.x - h, cell.y - h, h, polygon))
        push(_make_cell(cell.x + h, cell.y - h, h, polygon))
        push(_make_cell(cell.x - h, cell.y + h, h, polygon))
        push(_make_cell(cell.x + h, cell.y + h, h, polygon))

    return (best.x, best.y, best.d)
