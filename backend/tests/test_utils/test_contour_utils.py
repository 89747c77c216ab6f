"""Tests for marching squares, segment chaining and Douglas-Peucker."""

import numpy as np

from numberpaint.utils.contour import (
    chain_segments,
    douglas_peucker,
    marching_squares,
    trace_binary_grid,
)
from numberpaint.utils.geometry import polygon_area


def test_empty_grid_has_no_segments():
    assert marching_squares(np.zeros((4, 4), dtype=np.uint8)) == []
    assert marching_squares(np.ones((1, 5), dtype=np.uint8)) == []


def test_single_pixel_diamond():
    grid = np.zeros((3, 3), dtype=np.uint8)
    grid[1, 1] = 1
    segments = marching_squares(grid)
    assert len(segments) == 4

    rings = trace_binary_grid(grid)
    assert len(rings) == 1
    assert len(rings[0]) == 4
    assert polygon_area(rings[0]) == 0.5


def test_saddle_cases_emit_two_segments():
    assert len(marching_squares(np.array([[1, 0], [0, 1]], dtype=np.uint8))) == 2
    assert len(marching_squares(np.array([[0, 1], [1, 0]], dtype=np.uint8))) == 2


def test_chain_drops_short_chains():
    assert chain_segments([((0, 0), (1, 1))]) == []


def test_block_with_hole_gives_two_rings():
    grid = np.zeros((7, 7), dtype=np.uint8)
    grid[1:6, 1:6] = 1
    grid[3, 3] = 0
    rings = trace_binary_grid(grid)
    assert len(rings) == 2
    areas = sorted(polygon_area(r) for r in rings)
    assert areas[0] < areas[1]


def test_dp_collinear_keeps_endpoints():
    line = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0], [3.0, 3.0], [4.0, 4.0]])
    for eps in (0.01, 0.5, 3.0):
        out = douglas_peucker(line, eps)
        np.testing.assert_array_equal(out, [[0.0, 0.0], [4.0, 4.0]])


def test_dp_zero_epsilon_keeps_deviating_points():
    zigzag = np.array([[0.0, 0.0], [1.0, 0.3], [2.0, -0.2], [3.0, 0.4], [4.0, 0.0]])
    out = douglas_peucker(zigzag, 0.0)
    np.testing.assert_array_equal(out, zigzag)


def test_dp_short_input_returned():
    pts = np.array([[0.0, 0.0], [5.0, 5.0]])
    np.testing.assert_array_equal(douglas_peucker(pts, 1.0), pts)


def test_dp_handles_long_rings():
    t = np.linspace(0, 2 * np.pi, 20000, endpoint=False)
    ring = np.stack([100 * np.cos(t), 100 * np.sin(t)], axis=1)
    out = douglas_peucker(ring, 0.5)
    assert 3 <= len(out) < len(ring)
