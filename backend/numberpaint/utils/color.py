"""sRGB <-> CIELAB conversion (D65) and Lab distances. No engine imports.

All functions are vectorized: inputs may be a single triple or any array whose
last axis has length 3.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

# D65 reference white
XN = 0.95047
YN = 1.0
ZN = 1.08883

_RGB_TO_XYZ = np.array([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])

_XYZ_TO_RGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])

_WHITE = np.array([XN, YN, ZN])


def srgb_to_linear(c: NDArray[np.float64]) -> NDArray[np.float64]:
    """8-bit sRGB channel values -> linear light in [0, 1]."""
    c = np.asarray(c, dtype=np.float64) / 255.0
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(c: NDArray[np.float64]) -> NDArray[np.uint8]:
    """Linear light -> 8-bit sRGB, rounded and clamped to 0..255."""
    c = np.asarray(c, dtype=np.float64)
    # Negative linear values show up for out-of-gamut Lab; keep the power
    # branch away from them before clamping.
    safe = np.maximum(c, 0.0)
    v = np.where(c <= 0.0031308, c * 12.92, 1.055 * safe ** (1 / 2.4) - 0.055)
    return np.clip(np.rint(v * 255.0), 0, 255).astype(np.uint8)


def _lab_f(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(t > 0.008856, np.cbrt(t), 7.787 * t + 16.0 / 116.0)


def _lab_f_inv(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.where(t > 0.206893, t * t * t, (t - 16.0 / 116.0) / 7.787)


def rgb_to_lab(rgb: ArrayLike) -> NDArray[np.float64]:
    """sRGB (0-255) -> CIELAB. Shape (..., 3) in, shape (..., 3) out."""
    linear = srgb_to_linear(rgb)
    xyz = linear @ _RGB_TO_XYZ.T / _WHITE
    f = _lab_f(xyz)
    fx, fy, fz = f[..., 0], f[..., 1], f[..., 2]
    return np.stack([116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)], axis=-1)


def lab_to_rgb(lab: ArrayLike) -> NDArray[np.uint8]:
    """CIELAB -> sRGB uint8. Shape (..., 3) in, shape (..., 3) out."""
    lab = np.asarray(lab, dtype=np.float64)
    fy = (lab[..., 0] + 16.0) / 116.0
    fx = lab[..., 1] / 500.0 + fy
    fz = fy - lab[..., 2] / 200.0
    xyz = _lab_f_inv(np.stack([fx, fy, fz], axis=-1)) * _WHITE
    return linear_to_srgb(xyz @ _XYZ_TO_RGB.T)


def lab_distance_sq(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64] | float:
    """Squared Euclidean distance in Lab space (broadcasts over leading axes)."""
    d = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    out = np.sum(d * d, axis=-1)
    return float(out) if np.ndim(out) == 0 else out


def lab_distance(a: ArrayLike, b: ArrayLike) -> NDArray[np.float64] | float:
    out = np.sqrt(lab_distance_sq(a, b))
    return float(out) if np.ndim(out) == 0 else out


def nearest_palette_index(
    lab: NDArray[np.float64],
    lab_palette: NDArray[np.float64],
    chunk_size: int = 4096,
) -> NDArray[np.intp]:
    """Index of the nearest palette entry (squared Lab distance) for each color.

    Ties resolve to the lowest palette index. Works in chunks so the
    (n, k, 3) difference tensor stays small for large palettes.
    """
    lab = np.asarray(lab, dtype=np.float64).reshape(-1, 3)
    lab_palette = np.asarray(lab_palette, dtype=np.float64).reshape(-1, 3)
    out = np.empty(len(lab), dtype=np.intp)
    for start in range(0, len(lab), chunk_size):
        block = lab[start : start + chunk_size]
        d = np.sum((block[:, None, :] - lab_palette[None, :, :]) ** 2, axis=-1)
        out[start : start + chunk_size] = np.argmin(d, axis=1)
    return out


def rgb_to_hex(rgb: ArrayLike) -> str:
    r, g, b = (int(c) for c in np.asarray(rgb).reshape(3))
    return f"#{r:02x}{g:02x}{b:02x}"
