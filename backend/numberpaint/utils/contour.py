"""Contour extraction: marching squares, segment chaining, RDP simplification."""

from __future__ import annotations

from collections import defaultdict

import numpy as np
from numpy.typing import NDArray

from numberpaint.utils.geometry import point_to_segment_dist_sq

# Cell edge midpoints in doubled integer coordinates relative to the cell's
# top-left corner, so chain keys stay exact.
_TOP = (1, 0)
_RIGHT = (2, 1)
_BOTTOM = (1, 2)
_LEFT = (0, 1)

# Case index = tl<<3 | tr<<2 | br<<1 | bl. Saddles (5, 10) emit two segments.
_SEGMENT_TABLE: dict[int, tuple[tuple[tuple[int, int], tuple[int, int]], ...]] = {
    1: ((_LEFT, _BOTTOM),),
    2: ((_BOTTOM, _RIGHT),),
    3: ((_LEFT, _RIGHT),),
    4: ((_RIGHT, _TOP),),
    5: ((_LEFT, _TOP), (_BOTTOM, _RIGHT)),
    6: ((_BOTTOM, _TOP),),
    7: ((_LEFT, _TOP),),
    8: ((_TOP, _LEFT),),
    9: ((_TOP, _BOTTOM),),
    10: ((_TOP, _RIGHT), (_LEFT, _BOTTOM)),
    11: ((_TOP, _RIGHT),),
    12: ((_RIGHT, _LEFT),),
    13: ((_BOTTOM, _RIGHT),),
    14: ((_BOTTOM, _LEFT),),
}

Segment = tuple[tuple[int, int], tuple[int, int]]


def marching_squares(grid: NDArray[np.uint8]) -> list[Segment]:
    """Boundary segments of a binary grid, one or two per mixed 2x2 window.

    Endpoints are edge midpoints in doubled grid coordinates (divide by 2 for
    grid units).
    """
    g = (np.asarray(grid) != 0).astype(np.uint8)
    if g.shape[0] < 2 or g.shape[1] < 2:
        return []
    cases = (g[:-1, :-1] << 3) | (g[:-1, 1:] << 2) | (g[1:, 1:] << 1) | g[1:, :-1]
    mixed_rows, mixed_cols = np.nonzero((cases != 0) & (cases != 15))

    segments: list[Segment] = []
    for cy, cx, case in zip(
        mixed_rows.tolist(), mixed_cols.tolist(), cases[mixed_rows, mixed_cols].tolist()
    ):
        ox, oy = 2 * cx, 2 * cy
        for (ax, ay), (bx, by) in _SEGMENT_TABLE[case]:
            segments.append(((ox + ax, oy + ay), (ox + bx, oy + by)))
    return segments


def chain_segments(segments: list[Segment]) -> list[list[tuple[int, int]]]:
    """Chain undirected segments into closed rings.

    Each unused segment is walked forward until the chain closes on itself or
    runs out of continuations. Chains with fewer than 3 points are dropped.
    """
    if not segments:
        return []

    adjacency: dict[tuple[int, int], list[int]] = defaultdict(list)
    for i, (a, b) in enumerate(segments):
        adjacency[a].append(i)
        adjacency[b].append(i)

    used = bytearray(len(segments))
    chains: list[list[tuple[int, int]]] = []

    for i, (a, b) in enumerate(segments):
        if used[i]:
            continue
        used[i] = 1
        chain = [a, b]

        extended = True
        while extended:
            extended = False
            last = chain[-1]
            for ni in adjacency.get(last, ()):
                if used[ni]:
                    continue
                used[ni] = 1
                sa, sb = segments[ni]
                chain.append(sb if sa == last else sa)
                extended = True
                if chain[-1] == chain[0]:
                    chain.pop()
                    extended = False
                break

        if len(chain) >= 3:
            chains.append(chain)

    return chains


def douglas_peucker(points: NDArray[np.float64], epsilon: float) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Iterative with an explicit stack so very long rings cannot overflow the
    recursion limit. A point is kept when its squared distance to the current
    chord exceeds epsilon squared.
    """
    points = np.asarray(points, dtype=np.float64)
    n = len(points)
    if n <= 2:
        return points.copy()

    eps_sq = epsilon * epsilon
    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True

    stack = [(0, n - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        ax, ay = points[start]
        bx, by = points[end]
        max_dist = 0.0
        max_idx = start
        for i in range(start + 1, end):
            d = point_to_segment_dist_sq(points[i, 0], points[i, 1], ax, ay, bx, by)
            if d > max_dist:
                max_dist = d
                max_idx = i
        if max_dist > eps_sq:
            keep[max_idx] = True
            stack.append((start, max_idx))
            stack.append((max_idx, end))

    return points[keep]


def trace_binary_grid(grid: NDArray[np.uint8]) -> list[NDArray[np.float64]]:
    """Closed boundary rings of a binary grid, in grid coordinates."""
    chains = chain_segments(marching_squares(grid))
    return [np.asarray(chain, dtype=np.float64) / 2.0 for chain in chains]
