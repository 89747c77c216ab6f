"""K-means++ seeding and Lloyd's iteration in CIELAB."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from numberpaint.utils.color import nearest_palette_index
from numberpaint.utils.progress import ProgressCallback, as_reporter

logger = logging.getLogger(__name__)


def _weighted_reservoir_pick(weights: NDArray[np.float64], rng: np.random.Generator) -> int:
    """Single-item weighted reservoir draw.

    Item i replaces the current pick with probability w_i / W_i, where W_i is
    the running total through i; the final pick is therefore the last item
    whose draw succeeded. Returns 0 when every weight is zero.
    """
    running = np.cumsum(weights)
    with np.errstate(divide="ignore", invalid="ignore"):
        accept = np.where(running > 0, weights / running, 0.0)
    hits = np.nonzero(rng.random(len(weights)) < accept)[0]
    return int(hits[-1]) if len(hits) else 0


def kmeans_plus_plus(
    samples: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
) -> NDArray[np.float64]:
    """Seed k centroids; each new one is drawn proportional to squared
    distance from the nearest centroid chosen so far."""
    n = len(samples)
    centroids = np.empty((k, 3), dtype=np.float64)
    centroids[0] = samples[int(rng.integers(n))]

    # Incremental: only the newest centroid can lower a sample's min distance
    min_dists = np.full(n, np.inf)
    for c in range(1, k):
        d = np.sum((samples - centroids[c - 1]) ** 2, axis=1)
        np.minimum(min_dists, d, out=min_dists)
        centroids[c] = samples[_weighted_reservoir_pick(min_dists, rng)]
    return centroids


def lloyd(
    samples: NDArray[np.float64],
    centroids: NDArray[np.float64],
    max_iterations: int = 20,
    convergence_threshold: float = 0.25,
    on_progress: Optional[ProgressCallback] = None,
) -> tuple[NDArray[np.float64], int]:
    """Assign-then-update until the largest squared centroid shift drops below
    ``convergence_threshold``. Empty clusters keep their previous centroid.

    Returns (centroids, iterations run).
    """
    progress = as_reporter(on_progress)
    centroids = centroids.copy()
    k = len(centroids)

    iterations = 0
    for it in range(max_iterations):
        iterations = it + 1
        assignments = nearest_palette_index(samples, centroids)

        counts = np.bincount(assignments, minlength=k)
        sums = np.stack(
            [np.bincount(assignments, weights=samples[:, ch], minlength=k) for ch in range(3)],
            axis=1,
        )
        filled = counts > 0
        updated = centroids.copy()
        updated[filled] = sums[filled] / counts[filled, None]

        max_shift = float(np.max(np.sum((updated - centroids) ** 2, axis=1)))
        centroids = updated

        progress(it / max_iterations * 100)
        if max_shift < convergence_threshold:
            break

    progress(100)
    return centroids, iterations


def kmeans_palette(
    samples: NDArray[np.float64],
    k: int,
    rng: np.random.Generator,
    max_iterations: int = 20,
    convergence_threshold: float = 0.25,
    on_progress: Optional[ProgressCallback] = None,
) -> NDArray[np.float64]:
    """Lab palette of k centroids for the given Lab samples."""
    progress = as_reporter(on_progress)
    centroids = kmeans_plus_plus(samples, k, rng)
    progress(20)
    centroids, iterations = lloyd(
        samples,
        centroids,
        max_iterations=max_iterations,
        convergence_threshold=convergence_threshold,
        on_progress=progress.span(20, 100),
    )
    logger.debug("k-means: %d centroids after %d iterations", k, iterations)
    return centroids
