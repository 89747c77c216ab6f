"""Median-cut palette construction in CIELAB."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from numberpaint.utils.progress import ProgressCallback, as_reporter


def largest_axis(box: NDArray[np.float64]) -> int:
    """Axis (0=L, 1=a, 2=b) with the widest range; ties prefer L, then a."""
    if len(box) == 0:
        return 0
    ranges = box.max(axis=0) - box.min(axis=0)
    return int(np.argmax(ranges))


def median_cut_palette(
    samples: NDArray[np.float64],
    k: int,
    on_progress: Optional[ProgressCallback] = None,
) -> NDArray[np.float64]:
    """Split the most populated box at its median along its widest axis until
    k boxes exist or no box holds more than one sample.

    Each box contributes its mean Lab color; the palette is padded with black
    (Lab 0,0,0) up to k entries.
    """
    progress = as_reporter(on_progress)
    boxes: list[NDArray[np.float64]] = [np.asarray(samples, dtype=np.float64)]

    while len(boxes) < k:
        # First box wins ties on size
        target = max(range(len(boxes)), key=lambda i: (len(boxes[i]), -i))
        box = boxes[target]
        if len(box) <= 1:
            break

        axis = largest_axis(box)
        ordered = box[np.argsort(box[:, axis], kind="stable")]
        median = len(ordered) // 2
        boxes[target] = ordered[:median]
        boxes.append(ordered[median:])

        progress(len(boxes) / k * 100)

    means = [box.mean(axis=0) for box in boxes if len(box) > 0]
    lab_palette = np.zeros((k, 3), dtype=np.float64)
    if means:
        lab_palette[: min(k, len(means))] = np.asarray(means[:k])
    progress(100)
    return lab_palette
