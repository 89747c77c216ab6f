"""Region merger: fold undersized regions into their closest-colored neighbour."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from numberpaint.engine.context import Region
from numberpaint.engine.labeling import regions_from_label_map
from numberpaint.utils.color import lab_distance_sq
from numberpaint.utils.progress import ProgressCallback, as_reporter

logger = logging.getLogger(__name__)


def neighbour_pairs(label_map: NDArray[np.int32]) -> NDArray[np.int64]:
    """Distinct (a, b) label pairs, a < b, for every 4-adjacent boundary."""
    right_a, right_b = label_map[:, :-1], label_map[:, 1:]
    down_a, down_b = label_map[:-1, :], label_map[1:, :]
    a = np.concatenate([right_a.ravel(), down_a.ravel()]).astype(np.int64)
    b = np.concatenate([right_b.ravel(), down_b.ravel()]).astype(np.int64)
    differ = a != b
    a, b = a[differ], b[differ]
    if len(a) == 0:
        return np.empty((0, 2), dtype=np.int64)
    pairs = np.stack([np.minimum(a, b), np.maximum(a, b)], axis=1)
    return np.unique(pairs, axis=0)


def build_adjacency(label_map: NDArray[np.int32]) -> dict[int, set[int]]:
    """Symmetric region id -> neighbour ids mapping."""
    adjacency: dict[int, set[int]] = {int(rid): set() for rid in np.unique(label_map)}
    for a, b in neighbour_pairs(label_map):
        adjacency[int(a)].add(int(b))
        adjacency[int(b)].add(int(a))
    return adjacency


class _Redirects:
    """Merge-target forest: each absorbed region points at its absorber."""

    def __init__(self, ids) -> None:
        self.target = {int(i): int(i) for i in ids}

    def resolve(self, rid: int) -> int:
        root = rid
        while self.target[root] != root:
            root = self.target[root]
        # Path compression
        while self.target[rid] != root:
            self.target[rid], rid = root, self.target[rid]
        return root


def merge_small_regions(
    label_map: NDArray[np.int32],
    index_map: NDArray[np.uint8],
    regions: list[Region],
    min_region_size: int,
    palette: NDArray[np.uint8],
    lab_palette: NDArray[np.float64],
    on_progress: Optional[ProgressCallback] = None,
) -> tuple[NDArray[np.int32], list[Region]]:
    """Merge every region smaller than ``min_region_size`` pixels, smallest first.

    ``label_map`` is relabeled in place and returned with the rebuilt region
    list. Surviving regions keep their own palette index. A region with no
    neighbour stays undersized.

    ``index_map`` and ``palette`` are accepted but not read; they keep the
    signature of the public merge operation. Colors come from each region's
    ``color_index`` looked up in ``lab_palette``.
    """
    progress = as_reporter(on_progress)
    undersized = sorted(
        (r for r in regions if r.pixel_count < min_region_size),
        key=lambda r: r.pixel_count,
    )
    if not undersized:
        progress(100)
        return label_map, regions

    adjacency = build_adjacency(label_map)
    progress(20)

    counts = {r.id: r.pixel_count for r in regions}
    colors = {r.id: r.color_index for r in regions}
    redirects = _Redirects(counts)

    merged = 0
    isolated = 0
    for n, region in enumerate(undersized):
        rid = region.id
        if redirects.resolve(rid) != rid or counts[rid] >= min_region_size:
            continue

        candidates = sorted({redirects.resolve(nb) for nb in adjacency[rid]} - {rid})
        if not candidates:
            isolated += 1
            continue

        own_lab = lab_palette[colors[rid]]
        best = min(candidates, key=lambda c: lab_distance_sq(own_lab, lab_palette[colors[c]]))

        redirects.target[rid] = best
        counts[best] += counts[rid]
        for nb in adjacency.pop(rid):
            neighbours = adjacency.get(nb)
            if neighbours is None:
                continue
            neighbours.discard(rid)
            if nb != best:
                neighbours.add(best)
                adjacency[best].add(nb)
        adjacency[best].discard(rid)
        merged += 1

        progress(20 + 70 * (n + 1) / len(undersized))

    # Flatten redirects and relabel in one pass
    lookup = np.arange(int(label_map.max()) + 1, dtype=np.int32)
    for rid in counts:
        lookup[rid] = redirects.resolve(rid)
    label_map[...] = lookup[label_map]

    surviving = {rid: colors[rid] for rid in counts if redirects.resolve(rid) == rid}
    result = regions_from_label_map(label_map, surviving)
    progress(100)

    logger.debug(
        "Merged %d small regions (%d isolated), %d -> %d regions",
        merged,
        isolated,
        len(regions),
        len(result),
    )
    return label_map, result
