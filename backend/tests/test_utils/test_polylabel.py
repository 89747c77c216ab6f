"""Tests for the pole-of-inaccessibility search."""

import numpy as np
import pytest
from shapely.geometry import Polygon

from numberpaint.utils.geometry import point_to_polygon_distance
from numberpaint.utils.polylabel import polylabel
from tests.conftest import circle_polygon


def test_circle_center_and_radius():
    x, y, d = polylabel(circle_polygon(radius=10.0, n=128), precision=1.0)
    assert abs(x) <= 1.0 and abs(y) <= 1.0
    assert d == pytest.approx(10.0, abs=1.0)


def test_offset_circle():
    x, y, d = polylabel(circle_polygon(radius=5.0, cx=20.0, cy=-3.0), precision=0.1)
    assert x == pytest.approx(20.0, abs=0.1)
    assert y == pytest.approx(-3.0, abs=0.1)
    assert d == pytest.approx(5.0, abs=0.2)


def test_degenerate_inputs():
    assert polylabel(np.empty((0, 2))) == (0.0, 0.0, 0.0)
    flat = np.array([[1.0, 2.0], [5.0, 2.0], [3.0, 2.0]])
    assert polylabel(flat) == (1.0, 2.0, 0.0)


def test_l_shape_label_is_inside():
    l_shape = np.array([[0, 0], [10, 0], [10, 2], [2, 2], [2, 10], [0, 10]], dtype=np.float64)
    x, y, d = polylabel(l_shape, precision=0.1)
    assert Polygon(l_shape).contains(Polygon(circle_polygon(radius=max(d - 0.05, 0.01), cx=x, cy=y)))
    assert point_to_polygon_distance(x, y, l_shape) == pytest.approx(d)
    # Best circle sits in the corner square, pushed towards the inner corner
    assert 1.0 < d < 1.2
