"""Leaf-node geometry helpers. No engine imports.

Polygons are (n, 2) float arrays of (x, y), implicitly closed: the first
point is not repeated at the end.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula for signed area. Positive = CCW in a y-up frame."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: NDArray[np.float64]) -> float:
    return abs(signed_area(points))


def polygon_centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Area-weighted centroid; vertex mean for zero-area polygons."""
    if len(points) == 0:
        return (0.0, 0.0)
    x = points[:, 0]
    y = points[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    cross = x * y_next - x_next * y
    area = float(np.sum(cross)) / 2.0
    if abs(area) < 1e-10:
        return (float(np.mean(x)), float(np.mean(y)))
    cx = float(np.sum((x + x_next) * cross)) / (6.0 * area)
    cy = float(np.sum((y + y_next) * cross)) / (6.0 * area)
    return (cx, cy)


def point_to_segment_dist_sq(
    px: float, py: float, ax: float, ay: float, bx: float, by: float
) -> float:
    """Squared distance from P to segment AB. Zero-length AB collapses to a point."""
    dx = bx - ax
    dy = by - ay
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        ex, ey = px - ax, py - ay
        return ex * ex + ey * ey
    t = ((px - ax) * dx + (py - ay) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    ex = px - (ax + t * dx)
    ey = py - (ay + t * dy)
    return ex * ex + ey * ey


def point_to_polygon_distance(x: float, y: float, polygon: NDArray[np.float64]) -> float:
    """Signed distance to the polygon boundary: positive inside, negative outside."""
    ax = polygon[:, 0]
    ay = polygon[:, 1]
    bx = np.roll(ax, 1)
    by = np.roll(ay, 1)

    # Ray casting, vectorized over edges
    crosses = (ay > y) != (by > y)
    with np.errstate(divide="ignore", invalid="ignore"):
        x_int = (bx - ax) * (y - ay) / (by - ay) + ax
    inside = bool(np.count_nonzero(crosses & (x < x_int)) % 2)

    # Point-to-segment distance, vectorized over edges
    dx = bx - ax
    dy = by - ay
    len_sq = dx * dx + dy * dy
    with np.errstate(divide="ignore", invalid="ignore"):
        t = np.where(len_sq > 0, ((x - ax) * dx + (y - ay) * dy) / len_sq, 0.0)
    t = np.clip(t, 0.0, 1.0)
    ex = x - (ax + t * dx)
    ey = y - (ay + t * dy)
    min_dist = math.sqrt(float(np.min(ex * ex + ey * ey)))

    return min_dist if inside else -min_dist
