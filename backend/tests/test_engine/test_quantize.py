"""Tests for palette building and pixel mapping."""

import numpy as np
import pytest

from numberpaint.engine.kmeans import kmeans_plus_plus, lloyd
from numberpaint.engine.median_cut import largest_axis, median_cut_palette
from numberpaint.engine.quantize import build_lut, map_pixels, quantize, quantize_fixed_palette, sample_pixels
from numberpaint.utils.color import rgb_to_lab
from tests.conftest import BLUE, RED, make_rgba


@pytest.mark.parametrize("algorithm", ["kmeans", "mediancut"])
def test_two_colors_recovered(algorithm, two_color_image, rng):
    result = quantize(two_color_image, algorithm, 2, rng=rng)
    assert result.index_map.shape == (4, 4)
    assert result.k == 2
    assert len(result.lab_palette) == 2
    assert sorted(tuple(c) for c in result.palette.tolist()) == sorted([RED, BLUE])
    # Left half shares one index, right half the other
    assert len(np.unique(result.index_map[:, :2])) == 1
    assert result.index_map[0, 0] != result.index_map[0, 3]


@pytest.mark.parametrize("algorithm", ["kmeans", "mediancut"])
def test_index_range_on_noisy_image(algorithm, noisy_image, rng):
    result = quantize(noisy_image, algorithm, 8, rng=rng)
    assert result.index_map.size == 32 * 32
    assert result.index_map.dtype == np.uint8
    assert result.index_map.max() < 8
    assert result.palette.shape == (8, 3)
    assert result.lab_palette.shape == (8, 3)


def test_kmeans_seed_is_reproducible(noisy_image):
    a = quantize(noisy_image, "kmeans", 6, rng=np.random.default_rng(3))
    b = quantize(noisy_image, "kmeans", 6, rng=np.random.default_rng(3))
    np.testing.assert_array_equal(a.palette, b.palette)
    np.testing.assert_array_equal(a.index_map, b.index_map)


def test_progress_is_monotonic_and_complete(noisy_image, rng):
    seen = []
    quantize(noisy_image, "kmeans", 4, rng=rng, on_progress=seen.append)
    assert seen == sorted(seen)
    assert seen[-1] == 100
    assert 70 in seen and 90 in seen


def test_mediancut_pads_with_black():
    one_pixel = make_rgba([[RED]])
    result = quantize(one_pixel, "mediancut", 3)
    assert result.palette.shape == (3, 3)
    assert result.palette[1].tolist() == [0, 0, 0]
    assert result.palette[2].tolist() == [0, 0, 0]
    assert result.index_map[0, 0] == 0


def test_fixed_palette_kept_verbatim(two_color_image):
    palette = [(250, 10, 10), (10, 10, 250), (240, 240, 240)]
    result = quantize(two_color_image, "kmeans", 99, fixed_palette=palette)
    assert result.palette.tolist() == [list(c) for c in palette]
    assert result.index_map[:, :2].tolist() == [[0, 0]] * 4
    assert result.index_map[:, 2:].tolist() == [[1, 1]] * 4


def test_fixed_palette_size_checked(two_color_image):
    with pytest.raises(ValueError):
        quantize_fixed_palette(two_color_image, [])


@pytest.mark.parametrize("k", [0, 257])
def test_invalid_k(two_color_image, k):
    with pytest.raises(ValueError):
        quantize(two_color_image, "kmeans", k)


def test_invalid_algorithm(two_color_image):
    with pytest.raises(ValueError, match="Unknown"):
        quantize(two_color_image, "octree", 4)


def test_invalid_shape():
    with pytest.raises(ValueError):
        quantize(np.zeros((4, 4, 3), dtype=np.uint8), "kmeans", 2)
    with pytest.raises(ValueError):
        quantize(np.zeros((0, 4, 4), dtype=np.uint8), "kmeans", 2)


def test_sample_pixels_stride():
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[..., 0] = np.arange(100).reshape(10, 10)
    samples = sample_pixels(pixels, max_samples=25)
    assert samples.shape == (25, 3)
    assert samples[:3, 0].tolist() == [0, 4, 8]


def test_lut_lookup_matches_direct_nearest():
    lab_palette = rgb_to_lab(np.array([[0, 0, 0], [255, 255, 255], [255, 0, 0]]))
    lut = build_lut(lab_palette)
    assert lut.shape == (32, 32, 32)
    pixels = make_rgba([[(0, 0, 0), (255, 255, 255), (250, 5, 5), (20, 10, 10)]])
    assert map_pixels(pixels, lut).tolist() == [[0, 1, 2, 0]]


def test_kmeans_plus_plus_spreads_seeds(rng):
    samples = np.array([[0.0, 0.0, 0.0]] * 10 + [[80.0, 0.0, 0.0]] * 10)
    seeds = kmeans_plus_plus(samples, 2, rng)
    assert sorted(seeds[:, 0].tolist()) == [0.0, 80.0]


def test_lloyd_keeps_empty_cluster():
    samples = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
    centroids = np.array([[1.0, 0.0, 0.0], [100.0, 0.0, 0.0]])
    out, iterations = lloyd(samples, centroids)
    np.testing.assert_allclose(out[0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(out[1], [100.0, 0.0, 0.0])
    assert iterations == 1


def test_median_cut_splits_widest_axis():
    samples = np.array([[10.0, 0.0, 0.0], [12.0, 0.0, 0.0], [11.0, -40.0, 0.0], [11.0, 40.0, 0.0]])
    assert largest_axis(samples) == 1
    palette = median_cut_palette(samples, 2)
    assert sorted(palette[:, 1].tolist()) == [-20.0, 20.0]
