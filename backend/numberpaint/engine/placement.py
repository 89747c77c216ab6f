"""Label placer: anchor each region's number at its pole of inaccessibility."""

from __future__ import annotations

import logging
from typing import Optional

from numberpaint.engine.context import ContourData, LabelPlacement
from numberpaint.utils.polylabel import polylabel
from numberpaint.utils.progress import ProgressCallback, as_reporter

logger = logging.getLogger(__name__)


def place_labels(
    contours: list[ContourData],
    precision: float = 1.0,
    on_progress: Optional[ProgressCallback] = None,
) -> list[LabelPlacement]:
    progress = as_reporter(on_progress)
    labels: list[LabelPlacement] = []
    total = len(contours)

    for i, contour in enumerate(contours):
        if len(contour.outer_ring) >= 3:
            # Holes are ignored; the anchor is computed on the outer ring only
            x, y, radius = polylabel(contour.outer_ring, precision)
            labels.append(
                LabelPlacement(
                    region_id=contour.region_id,
                    color_index=contour.color_index,
                    x=x,
                    y=y,
                    max_inscribed_radius=radius,
                )
            )
        progress((i + 1) / total * 100)

    progress(100)
    logger.debug("Placed %d labels for %d contours", len(labels), total)
    return labels
