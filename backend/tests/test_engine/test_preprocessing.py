"""Tests for brightness / contrast / saturation adjustments."""

import numpy as np

from numberpaint.engine.preprocessing import (
    apply_preprocessing,
    hsl_to_rgb,
    rgb_to_hsl,
)
from tests.conftest import make_rgba


def test_identity_returns_copy(two_color_image):
    out = apply_preprocessing(two_color_image)
    np.testing.assert_array_equal(out, two_color_image)
    assert out is not two_color_image


def test_brightness_saturates():
    pixels = make_rgba([[(10, 120, 250)]])
    out = apply_preprocessing(pixels, brightness=100)
    assert tuple(out[0, 0, :3]) == (255, 255, 255)
    out = apply_preprocessing(pixels, brightness=-100)
    assert tuple(out[0, 0, :3]) == (0, 0, 0)


def test_contrast_floor_is_mid_gray():
    pixels = make_rgba([[(0, 90, 255), (30, 200, 40)]])
    out = apply_preprocessing(pixels, contrast=-100)
    assert np.all(out[..., :3] == 128)


def test_desaturate_to_gray():
    pixels = make_rgba([[(255, 0, 0), (40, 200, 90)]])
    out = apply_preprocessing(pixels, saturation=-100)
    rgb = out[..., :3]
    assert np.all(rgb[..., 0] == rgb[..., 1])
    assert np.all(rgb[..., 1] == rgb[..., 2])
    assert out[0, 0, 0] == 128


def test_alpha_untouched():
    pixels = make_rgba([[(10, 20, 30), (200, 100, 50)]])
    pixels[0, 1, 3] = 17
    out = apply_preprocessing(pixels, brightness=30, contrast=20, saturation=40)
    np.testing.assert_array_equal(out[..., 3], pixels[..., 3])


def test_hsl_round_trip(rng):
    rgb = rng.integers(0, 256, size=(200, 3)).astype(np.float64)
    back = hsl_to_rgb(rgb_to_hsl(rgb))
    np.testing.assert_allclose(back, rgb, atol=1.0)


def test_hsl_known_values():
    hsl = rgb_to_hsl(np.array([[255.0, 0.0, 0.0], [128.0, 128.0, 128.0]]))
    np.testing.assert_allclose(hsl[0], [0.0, 1.0, 0.5])
    assert hsl[1, 0] == 0.0 and hsl[1, 1] == 0.0
