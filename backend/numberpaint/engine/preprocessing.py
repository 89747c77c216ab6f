"""Brightness / contrast / saturation adjustments applied before quantization.

Each adjustment takes a value in -100..100; 0 leaves the channel untouched.
They run in that order and never touch alpha.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def apply_brightness(rgb: NDArray[np.float64], brightness: float) -> NDArray[np.float64]:
    if brightness == 0:
        return rgb
    return np.clip(rgb + 255.0 * brightness / 100.0, 0.0, 255.0)


def apply_contrast(rgb: NDArray[np.float64], contrast: float) -> NDArray[np.float64]:
    if contrast == 0:
        return rgb
    factor = (100.0 + contrast) / 100.0
    intercept = 128.0 * (1.0 - factor)
    return np.clip(rgb * factor + intercept, 0.0, 255.0)


def rgb_to_hsl(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """0-255 RGB -> HSL with every component in [0, 1]."""
    c = rgb / 255.0
    r, g, b = c[..., 0], c[..., 1], c[..., 2]
    mx = c.max(axis=-1)
    mn = c.min(axis=-1)
    light = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d > 0

    with np.errstate(divide="ignore", invalid="ignore"):
        sat = np.where(light > 0.5, d / (2.0 - mx - mn), d / (mx + mn))
        hr = (g - b) / d + np.where(g < b, 6.0, 0.0)
        hg = (b - r) / d + 2.0
        hb = (r - g) / d + 4.0
    hue = np.where(mx == r, hr, np.where(mx == g, hg, hb)) / 6.0

    hue = np.where(chromatic, hue, 0.0)
    sat = np.where(chromatic, sat, 0.0)
    return np.stack([hue, sat, light], axis=-1)


def _hue_to_rgb(p: NDArray, q: NDArray, t: NDArray) -> NDArray:
    t = np.where(t < 0, t + 1.0, t)
    t = np.where(t > 1, t - 1.0, t)
    return np.where(
        t < 1 / 6,
        p + (q - p) * 6.0 * t,
        np.where(t < 1 / 2, q, np.where(t < 2 / 3, p + (q - p) * (2 / 3 - t) * 6.0, p)),
    )


def hsl_to_rgb(hsl: NDArray[np.float64]) -> NDArray[np.float64]:
    """HSL in [0, 1] -> RGB rounded to whole 0-255 values."""
    h, s, light = hsl[..., 0], hsl[..., 1], hsl[..., 2]
    q = np.where(light < 0.5, light * (1.0 + s), light + s - light * s)
    p = 2.0 * light - q
    r = _hue_to_rgb(p, q, h + 1 / 3)
    g = _hue_to_rgb(p, q, h)
    b = _hue_to_rgb(p, q, h - 1 / 3)
    rgb = np.stack([r, g, b], axis=-1)
    # Achromatic pixels are pure lightness
    rgb = np.where((s == 0)[..., None], light[..., None], rgb)
    return np.rint(rgb * 255.0)


def apply_saturation(rgb: NDArray[np.float64], saturation: float) -> NDArray[np.float64]:
    if saturation == 0:
        return rgb
    hsl = rgb_to_hsl(rgb)
    s = hsl[..., 1]
    factor = saturation / 100.0
    room = (1.0 - s) if saturation > 0 else s
    hsl[..., 1] = np.clip(s + factor * room, 0.0, 1.0)
    return hsl_to_rgb(hsl)


def apply_preprocessing(
    pixels: NDArray[np.uint8],
    brightness: float = 0,
    contrast: float = 0,
    saturation: float = 0,
) -> NDArray[np.uint8]:
    """Return an adjusted copy of an RGBA buffer."""
    out = pixels.copy()
    if not (brightness or contrast or saturation):
        return out
    rgb = pixels[..., :3].astype(np.float64)
    rgb = apply_brightness(rgb, brightness)
    rgb = apply_contrast(rgb, contrast)
    rgb = apply_saturation(rgb, saturation)
    out[..., :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    return out
