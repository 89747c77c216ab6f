"""Tests for contour tracing and label placement."""

import numpy as np
import pytest
from shapely.geometry import LinearRing, Polygon

from numberpaint.engine.context import ContourData
from numberpaint.engine.contours import extract_contour, region_mask, trace_contours
from numberpaint.engine.labeling import label_regions
from numberpaint.engine.placement import place_labels
from numberpaint.engine.quantize import quantize
from numberpaint.utils.geometry import polygon_area
from tests.conftest import BLUE, WHITE, circle_polygon


def _block_index_map() -> np.ndarray:
    index_map = np.zeros((8, 12), dtype=np.uint8)
    index_map[2:6, 3:9] = 1
    return index_map


def test_region_mask_pads_bbox():
    label_map, regions = label_regions(_block_index_map())
    block = next(r for r in regions if r.color_index == 1)
    mask = region_mask(label_map, block)
    assert mask.shape == (6, 8)
    assert mask[0].sum() == 0 and mask[:, 0].sum() == 0
    assert mask.sum() == 24


def test_rectangle_area_unsimplified():
    label_map, regions = label_regions(_block_index_map())
    block = next(r for r in regions if r.color_index == 1)
    contour = extract_contour(label_map, block, 0.0)
    assert contour.holes == []
    # Boundary runs between pixel centers; each corner is cut by 1/8 pixel
    assert polygon_area(contour.outer_ring) == pytest.approx(24.0 - 0.5)
    assert contour.outer_ring[:, 0].min() == pytest.approx(2.5)
    assert contour.outer_ring[:, 0].max() == pytest.approx(8.5)


@pytest.mark.parametrize("epsilon", [0.5, 1.0])
def test_simplified_ring_within_epsilon(epsilon):
    label_map, regions = label_regions(_block_index_map())
    block = next(r for r in regions if r.color_index == 1)
    exact = extract_contour(label_map, block, 0.0)
    simplified = extract_contour(label_map, block, epsilon)
    assert simplified.holes == []
    assert len(simplified.outer_ring) <= len(exact.outer_ring)
    drift = LinearRing(simplified.outer_ring).hausdorff_distance(LinearRing(exact.outer_ring))
    assert drift <= epsilon + 1e-9


def test_background_gets_hole():
    label_map, regions = label_regions(_block_index_map())
    background = next(r for r in regions if r.color_index == 0)
    exact = extract_contour(label_map, background, 0.0)
    assert len(exact.holes) == 1
    poly = exact.polygon
    assert isinstance(poly, Polygon)
    assert poly.is_valid
    assert poly.area == pytest.approx(95.5 - 23.5)

    simplified = extract_contour(label_map, background, 0.5)
    assert len(simplified.holes) == 1
    assert LinearRing(simplified.outer_ring).hausdorff_distance(LinearRing(exact.outer_ring)) <= 0.5 + 1e-9
    assert LinearRing(simplified.holes[0]).hausdorff_distance(LinearRing(exact.holes[0])) <= 0.5 + 1e-9


def test_ring_image_hole(ring_image):
    quantized = quantize(ring_image, "kmeans", 2, fixed_palette=[WHITE, BLUE])
    label_map, regions = label_regions(quantized.index_map)
    contours = trace_contours(label_map, regions, 0.5)
    by_color = {c.color_index: c for c in contours}
    assert len(by_color[0].holes) >= 1
    assert by_color[1].holes == []


def test_single_pixel_dropped_at_coarse_epsilon():
    index_map = np.zeros((5, 5), dtype=np.uint8)
    index_map[2, 2] = 1
    label_map, regions = label_regions(index_map)
    contours = trace_contours(label_map, regions, 1.0)
    assert [c.color_index for c in contours] == [0]
    kept = trace_contours(label_map, regions, 0.0)
    assert len(kept) == 2


def test_trace_progress():
    label_map, regions = label_regions(_block_index_map())
    seen = []
    trace_contours(label_map, regions, 1.0, on_progress=seen.append)
    assert seen == [50, 100]


def test_place_labels_on_circle():
    contour = ContourData(region_id=3, color_index=1, outer_ring=circle_polygon(radius=6.0, cx=10, cy=10))
    labels = place_labels([contour], precision=0.5)
    assert len(labels) == 1
    label = labels[0]
    assert (label.region_id, label.color_index) == (3, 1)
    assert label.x == pytest.approx(10.0, abs=0.5)
    assert label.y == pytest.approx(10.0, abs=0.5)
    assert label.max_inscribed_radius == pytest.approx(6.0, abs=0.5)


def test_place_labels_skips_degenerate_rings():
    empty = ContourData(region_id=1, color_index=0)
    line = ContourData(region_id=2, color_index=0, outer_ring=np.array([[0.0, 0.0], [1.0, 1.0]]))
    assert place_labels([empty, line]) == []


def test_label_stays_inside_region():
    label_map, regions = label_regions(_block_index_map())
    labels = place_labels(trace_contours(label_map, regions, 1.0))
    block_label = next(lbl for lbl in labels if lbl.color_index == 1)
    assert 3 <= block_label.x <= 8 and 2 <= block_label.y <= 5
    assert block_label.max_inscribed_radius == pytest.approx(2.0, abs=1.0)
