"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest


RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
GREEN = (0, 160, 0)


def make_rgba(rows: list[list[tuple[int, int, int]]]) -> np.ndarray:
    """(height, width, 4) opaque RGBA image from nested RGB rows."""
    rgb = np.asarray(rows, dtype=np.uint8)
    alpha = np.full(rgb.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


def two_color_rgba() -> np.ndarray:
    """4x4: left two columns red, right two columns blue."""
    return make_rgba([[RED, RED, BLUE, BLUE] for _ in range(4)])


def ring_rgba(size: int = 9, hole: int = 3) -> np.ndarray:
    """White square with a centered blue square hole."""
    img = np.full((size, size, 3), WHITE, dtype=np.uint8)
    start = (size - hole) // 2
    img[start : start + hole, start : start + hole] = BLUE
    alpha = np.full((size, size, 1), 255, dtype=np.uint8)
    return np.concatenate([img, alpha], axis=-1)


# 3x3 checkerboard of palette indices: five 0-singletons, four 1-singletons
CHECKERBOARD = np.array(
    [
        [0, 1, 0],
        [1, 0, 1],
        [0, 1, 0],
    ],
    dtype=np.uint8,
)

# A U of index 2 around a stem of 0, next to a column of 1: three regions
U_SHAPE = np.array(
    [
        [2, 0, 2, 1],
        [2, 0, 2, 1],
        [2, 2, 2, 1],
    ],
    dtype=np.uint8,
)


def circle_polygon(radius: float = 10.0, n: int = 64, cx: float = 0.0, cy: float = 0.0) -> np.ndarray:
    t = np.linspace(0.0, 2.0 * np.pi, n, endpoint=False)
    return np.stack([cx + radius * np.cos(t), cy + radius * np.sin(t)], axis=1)


@pytest.fixture
def two_color_image() -> np.ndarray:
    return two_color_rgba()


@pytest.fixture
def ring_image() -> np.ndarray:
    return ring_rgba()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def noisy_image() -> np.ndarray:
    """32x32 photo-like gradient with noise, deterministic."""
    gen = np.random.default_rng(7)
    y, x = np.mgrid[0:32, 0:32]
    rgb = np.stack([x * 8, y * 8, (x + y) * 4], axis=-1).astype(np.float64)
    rgb += gen.normal(0, 6, size=rgb.shape)
    rgb = np.clip(rgb, 0, 255).astype(np.uint8)
    alpha = np.full((32, 32, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)
