"""Region labeler: two-pass 4-connected component labeling over the index map.

Pass 1 works on horizontal runs rather than single pixels: every maximal run
of one palette index in a row gets a provisional label, and runs that touch a
same-index run in the row above are unioned. Pass 2 resolves each run to its
union-find root and gathers per-region metadata in one sweep.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import numpy as np
from numpy.typing import NDArray

from numberpaint.engine.context import BoundingBox, Region
from numberpaint.utils.progress import ProgressCallback, as_reporter
from numberpaint.utils.union_find import UnionFind

logger = logging.getLogger(__name__)


def _row_runs(index_map: NDArray[np.uint8]) -> NDArray[np.int64]:
    """Provisional run label for every pixel, shape (height, width)."""
    starts = np.ones(index_map.shape, dtype=bool)
    starts[:, 1:] = index_map[:, 1:] != index_map[:, :-1]
    return np.cumsum(starts.ravel()).reshape(index_map.shape) - 1


def regions_from_label_map(
    label_map: NDArray[np.int32],
    colors: NDArray[np.uint8] | Mapping[int, int],
) -> list[Region]:
    """Scan a label map once and build the region list in discovery order.

    ``colors`` is either the palette index map (a region takes the index of
    its first pixel) or an explicit ``{region_id: color_index}`` mapping.
    """
    flat = label_map.ravel()
    if flat.size == 0:
        return []
    width = label_map.shape[1]

    ids, first, inverse, counts = np.unique(
        flat, return_index=True, return_inverse=True, return_counts=True
    )
    inverse = inverse.ravel()
    pos = np.arange(flat.size)
    ys = pos // width
    xs = pos % width

    n = len(ids)
    min_x = np.full(n, np.iinfo(np.int64).max)
    min_y = np.full(n, np.iinfo(np.int64).max)
    max_x = np.full(n, -1)
    max_y = np.full(n, -1)
    np.minimum.at(min_x, inverse, xs)
    np.minimum.at(min_y, inverse, ys)
    np.maximum.at(max_x, inverse, xs)
    np.maximum.at(max_y, inverse, ys)

    if isinstance(colors, np.ndarray):
        color_index = colors.ravel()[first]
    else:
        color_index = np.array([colors[int(rid)] for rid in ids])

    regions = []
    for i in np.argsort(first, kind="stable"):
        regions.append(
            Region(
                id=int(ids[i]),
                color_index=int(color_index[i]),
                pixel_count=int(counts[i]),
                bbox=BoundingBox(
                    x=int(min_x[i]),
                    y=int(min_y[i]),
                    w=int(max_x[i] - min_x[i] + 1),
                    h=int(max_y[i] - min_y[i] + 1),
                ),
            )
        )
    return regions


def label_regions(
    index_map: NDArray[np.uint8],
    on_progress: Optional[ProgressCallback] = None,
) -> tuple[NDArray[np.int32], list[Region]]:
    """Label 4-connected same-index blobs.

    Returns ``(label_map, regions)``. Ids are the resolved union-find roots
    (offset by one so 0 never appears) and are not contiguous.
    """
    progress = as_reporter(on_progress)
    index_map = np.asarray(index_map)
    if index_map.size == 0:
        progress(100)
        return np.zeros(index_map.shape, dtype=np.int32), []

    runs = _row_runs(index_map)
    uf = UnionFind(int(runs[-1, -1]) + 1)

    # Vertical same-index neighbours join their runs
    same = index_map[1:, :] == index_map[:-1, :]
    pairs = np.stack([runs[1:, :][same], runs[:-1, :][same]], axis=1)
    if len(pairs):
        pairs = np.unique(pairs, axis=0)
        uf.union_many(pairs[:, 1], pairs[:, 0])
    progress(50)

    roots = uf.roots()
    label_map = (roots[runs] + 1).astype(np.int32)
    regions = regions_from_label_map(label_map, index_map)
    progress(100)

    logger.debug("Labeled %d regions from %d runs", len(regions), len(uf))
    return label_map, regions
