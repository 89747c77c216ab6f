"""Palette builder: reduce every pixel to one of k palette colors.

Two clustering paths (k-means++/Lloyd and median cut) plus a fixed-palette
path share the same final step: a 32x32x32 sRGB lattice is mapped once to the
nearest palette entry in Lab, and every pixel is then resolved by an O(1)
table lookup instead of an O(pixels x k) scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from numberpaint.engine.kmeans import kmeans_palette
from numberpaint.engine.median_cut import median_cut_palette
from numberpaint.utils.color import lab_to_rgb, nearest_palette_index, rgb_to_lab
from numberpaint.utils.progress import ProgressCallback, ProgressReporter, as_reporter

logger = logging.getLogger(__name__)

LUT_SIZE = 32
MAX_SAMPLES = 50_000


@dataclass
class QuantizeResult:
    index_map: NDArray[np.uint8]  # (height, width)
    palette: NDArray[np.uint8]  # (k, 3) sRGB
    lab_palette: NDArray[np.float64]  # (k, 3) Lab

    @property
    def k(self) -> int:
        return len(self.palette)


def check_pixels(pixels: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Validate an RGBA buffer of shape (height, width, 4)."""
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected RGBA pixels of shape (height, width, 4), got {pixels.shape}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError("Image must have at least one pixel")
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)
    return pixels


def sample_pixels(pixels: NDArray[np.uint8], max_samples: int = MAX_SAMPLES) -> NDArray[np.uint8]:
    """Uniform stride sample of RGB triples (alpha dropped)."""
    flat = pixels.reshape(-1, 4)
    stride = max(1, len(flat) // max_samples)
    return flat[::stride, :3]


def build_lut(lab_palette: NDArray[np.float64], lut_size: int = LUT_SIZE) -> NDArray[np.uint8]:
    """Nearest-palette index for each cell of an sRGB lattice.

    Cell (ri, gi, bi) represents sRGB ``round(i / (lut_size - 1) * 255)``.
    """
    levels = np.rint(np.arange(lut_size) / (lut_size - 1) * 255.0)
    r, g, b = np.meshgrid(levels, levels, levels, indexing="ij")
    lattice = np.stack([r, g, b], axis=-1).reshape(-1, 3)
    nearest = nearest_palette_index(rgb_to_lab(lattice), lab_palette)
    return nearest.astype(np.uint8).reshape(lut_size, lut_size, lut_size)


def map_pixels(pixels: NDArray[np.uint8], lut: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Quantize each pixel into the lattice and look up its palette index."""
    lut_size = lut.shape[0]
    scale = (lut_size - 1) / 255.0
    cells = np.rint(pixels[..., :3].astype(np.float64) * scale).astype(np.intp)
    return lut[cells[..., 0], cells[..., 1], cells[..., 2]]


def _finish(
    pixels: NDArray[np.uint8],
    palette: NDArray[np.uint8],
    lab_palette: NDArray[np.float64],
    progress: ProgressReporter,
    lut_size: int,
) -> QuantizeResult:
    lut = build_lut(lab_palette, lut_size)
    progress(70)
    index_map = map_pixels(pixels, lut)
    progress(90)
    result = QuantizeResult(index_map=index_map, palette=palette, lab_palette=lab_palette)
    progress(100)
    return result


def quantize_fixed_palette(
    pixels: NDArray[np.uint8],
    fixed_palette: Sequence[Sequence[int]] | NDArray[np.uint8],
    on_progress: Optional[ProgressCallback] = None,
    lut_size: int = LUT_SIZE,
) -> QuantizeResult:
    """Map pixels onto an externally supplied palette; no clustering."""
    pixels = check_pixels(pixels)
    progress = as_reporter(on_progress)
    palette = np.asarray(fixed_palette, dtype=np.int64).reshape(-1, 3)
    if not 1 <= len(palette) <= 256:
        raise ValueError("fixed palette must hold 1..256 colors")
    palette = np.clip(palette, 0, 255).astype(np.uint8)
    lab_palette = rgb_to_lab(palette)
    progress(20)
    # The supplied RGB values are kept verbatim, not re-derived from Lab
    return _finish(pixels, palette.copy(), lab_palette, progress, lut_size)


def quantize(
    pixels: NDArray[np.uint8],
    algorithm: str,
    k: int,
    fixed_palette: Optional[Sequence[Sequence[int]]] = None,
    *,
    rng: Optional[np.random.Generator] = None,
    on_progress: Optional[ProgressCallback] = None,
    max_samples: int = MAX_SAMPLES,
    max_iterations: int = 20,
    convergence_threshold: float = 0.25,
    lut_size: int = LUT_SIZE,
) -> QuantizeResult:
    """Build a palette and per-pixel index map.

    ``algorithm`` is ``"kmeans"`` or ``"mediancut"``; a ``fixed_palette``
    bypasses clustering entirely.
    """
    pixels = check_pixels(pixels)
    progress = as_reporter(on_progress)

    if fixed_palette is not None:
        return quantize_fixed_palette(pixels, fixed_palette, progress, lut_size)

    if not 1 <= k <= 256:
        raise ValueError(f"k must be in 1..256, got {k}")

    samples = rgb_to_lab(sample_pixels(pixels, max_samples))
    logger.debug("Quantize: %s, k=%d, %d samples", algorithm, k, len(samples))

    if algorithm == "kmeans":
        lab_palette = kmeans_palette(
            samples,
            k,
            rng=rng if rng is not None else np.random.default_rng(),
            max_iterations=max_iterations,
            convergence_threshold=convergence_threshold,
            on_progress=progress.span(0, 50),
        )
    elif algorithm == "mediancut":
        progress(10)
        lab_palette = median_cut_palette(samples, k, on_progress=progress.span(20, 50))
    else:
        raise ValueError(f"Unknown quantization algorithm: {algorithm!r}")

    progress(50)
    palette = lab_to_rgb(lab_palette)
    return _finish(pixels, palette, lab_palette, progress, lut_size)
