"""Interactive region operations on a live label map.

These run outside the linear pipeline, one request at a time; callers
serialize them. Unknown ids and impossible requests return ``-1`` sentinels
instead of raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from numberpaint.engine.context import BoundingBox, Region
from numberpaint.utils.color import lab_distance

logger = logging.getLogger(__name__)

# Lab distances beyond this count as "completely different"
MAX_LAB_DISTANCE = 180.0
MAX_SPLIT_CANDIDATES = 5
VARIANCE_PAIRS = 100
SUBREGION_VARIANCE = 0.08

_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)


@dataclass
class MergeSuggestion:
    target_region_id: int
    color_distance: float
    edge_coherence: float
    size_ratio: float
    context_score: float
    is_adjacent: bool = True


@dataclass
class SplitCandidate:
    x: int
    y: int
    strength: float  # 0-1


@dataclass
class SplitAnalysis:
    region_id: int
    has_subregions: bool
    estimated_variance: float
    split_candidates: list[SplitCandidate] = field(default_factory=list)


def _find(regions: list[Region], region_id: int) -> Optional[Region]:
    for r in regions:
        if r.id == region_id:
            return r
    return None


def _boundary_pairs(label_map: NDArray[np.int32]):
    """(a, b) label arrays for every right and down neighbour pair."""
    a = np.concatenate([label_map[:, :-1].ravel(), label_map[:-1, :].ravel()])
    b = np.concatenate([label_map[:, 1:].ravel(), label_map[1:, :].ravel()])
    return a, b


def _mask_bbox(mask: NDArray[np.bool_]) -> BoundingBox:
    ys, xs = np.nonzero(mask)
    x, y = int(xs.min()), int(ys.min())
    return BoundingBox(x=x, y=y, w=int(xs.max()) - x + 1, h=int(ys.max()) - y + 1)


def find_adjacent_regions(source_id: int, label_map: NDArray[np.int32]) -> set[int]:
    """Distinct labels 4-adjacent to any pixel of ``source_id``."""
    a, b = _boundary_pairs(label_map)
    out = np.concatenate([b[a == source_id], a[b == source_id]])
    return {int(v) for v in np.unique(out) if v != source_id}


def count_shared_edge(a_id: int, b_id: int, label_map: NDArray[np.int32]) -> int:
    """Number of 4-adjacent pixel pairs with one pixel in each region."""
    a, b = _boundary_pairs(label_map)
    return int(np.count_nonzero(((a == a_id) & (b == b_id)) | ((a == b_id) & (b == a_id))))


def suggest_merge(
    source_id: int,
    regions: list[Region],
    label_map: NDArray[np.int32],
    palette: NDArray[np.uint8],
    lab_palette: NDArray[np.float64],
    top_n: int = 5,
) -> list[MergeSuggestion]:
    """Rank adjacent regions as merge partners for ``source_id``.

    score = 0.5 * (1 - color distance / 180) + 0.3 * edge coherence + 0.2 * size ratio
    """
    source = _find(regions, source_id)
    if source is None:
        return []

    source_lab = lab_palette[source.color_index]
    source_perimeter = max(1.0, 4.0 * math.sqrt(source.pixel_count))

    suggestions = []
    for target_id in sorted(find_adjacent_regions(source_id, label_map)):
        target = _find(regions, target_id)
        if target is None:
            continue

        color_distance = float(lab_distance(source_lab, lab_palette[target.color_index]))
        normalized = min(color_distance / MAX_LAB_DISTANCE, 1.0)

        target_perimeter = max(1.0, 4.0 * math.sqrt(target.pixel_count))
        shared = count_shared_edge(source_id, target_id, label_map)
        edge_coherence = min(shared / ((source_perimeter + target_perimeter) / 2.0), 1.0)

        size_ratio = min(source.pixel_count, target.pixel_count) / max(
            source.pixel_count, target.pixel_count
        )

        score = 0.5 * (1.0 - normalized) + 0.3 * edge_coherence + 0.2 * size_ratio
        suggestions.append(
            MergeSuggestion(
                target_region_id=target_id,
                color_distance=color_distance,
                edge_coherence=edge_coherence,
                size_ratio=size_ratio,
                context_score=score,
            )
        )

    suggestions.sort(key=lambda s: s.context_score, reverse=True)
    return suggestions[:top_n]


def perform_merge(
    a_id: int,
    b_id: int,
    label_map: NDArray[np.int32],
    regions: list[Region],
) -> tuple[NDArray[np.int32], list[Region], int]:
    """Fold region A into region B. Returns ``(label_map, regions, b_id)``.

    The input label map and region list are left untouched; the merged id is
    ``-1`` when either region is unknown or ``a_id == b_id``.
    """
    region_a = _find(regions, a_id)
    region_b = _find(regions, b_id)
    if region_a is None or region_b is None or a_id == b_id:
        return label_map, regions, -1

    new_map = label_map.copy()
    new_map[new_map == a_id] = b_id

    grown = Region(
        id=b_id,
        color_index=region_b.color_index,
        pixel_count=region_b.pixel_count + region_a.pixel_count,
        bbox=region_b.bbox.union(region_a.bbox),
    )
    new_regions = [grown if r.id == b_id else r for r in regions if r.id != a_id]
    logger.debug("Merged region %d into %d", a_id, b_id)
    return new_map, new_regions, b_id


def analyze_split(
    region_id: int,
    label_map: NDArray[np.int32],
    sampling_rate: int = 2,
    *,
    rng: Optional[np.random.Generator] = None,
) -> SplitAnalysis:
    """Suggest split points along a region's edge.

    Variance is estimated from the spread of randomly paired pixel positions
    inside the region (a position proxy, not a color measure). Edge pixels,
    taken every ``sampling_rate`` raster positions, are ranked by that
    estimate plus a small random jitter.
    """
    rng = rng if rng is not None else np.random.default_rng()
    flat = label_map.ravel()
    members = np.flatnonzero(flat == region_id)
    if len(members) == 0:
        return SplitAnalysis(region_id=region_id, has_subregions=False, estimated_variance=0.0)

    n_pairs = min(VARIANCE_PAIRS, len(members))
    i = members[rng.integers(len(members), size=n_pairs)]
    j = members[rng.integers(len(members), size=n_pairs)]
    variance = float(np.mean(np.abs(i - j)) / flat.size)

    w = label_map.shape[1]
    inside = label_map == region_id
    edge = np.zeros_like(inside)
    edge[:, 1:] |= inside[:, 1:] & (label_map[:, :-1] != region_id)
    edge[:, :-1] |= inside[:, :-1] & (label_map[:, 1:] != region_id)
    edge[1:, :] |= inside[1:, :] & (label_map[:-1, :] != region_id)
    edge[:-1, :] |= inside[:-1, :] & (label_map[1:, :] != region_id)

    step = max(1, int(sampling_rate))
    positions = np.flatnonzero(edge.ravel())
    positions = positions[positions % step == 0]

    strengths = np.minimum(1.0, variance + rng.uniform(0.0, 0.1, size=len(positions)))
    order = np.argsort(-strengths, kind="stable")[:MAX_SPLIT_CANDIDATES]
    candidates = [
        SplitCandidate(x=int(positions[k] % w), y=int(positions[k] // w), strength=float(strengths[k]))
        for k in order
    ]

    return SplitAnalysis(
        region_id=region_id,
        has_subregions=variance > SUBREGION_VARIANCE and len(candidates) > 1,
        estimated_variance=variance,
        split_candidates=candidates,
    )


def perform_split(
    region_id: int,
    seed_x: int,
    seed_y: int,
    label_map: NDArray[np.int32],
    regions: list[Region],
    rgba_pixels: NDArray[np.uint8],
    color_threshold: float = 30.0,
) -> tuple[NDArray[np.int32], list[Region], int]:
    """Flood-fill from a seed pixel, carving a new region out of ``region_id``.

    Pixels join the fill when they are 4-connected to the seed, belong to the
    region, and their source RGB lies within ``color_threshold`` of the seed's.
    The new region takes id ``max(id) + 1`` and inherits the color index.
    Returns ``(label_map, regions, new_region_id)`` with ``-1`` when nothing
    was split.
    """
    h, w = label_map.shape
    region = _find(regions, region_id)
    if region is None or not (0 <= seed_x < w and 0 <= seed_y < h):
        return label_map, regions, -1
    if label_map[seed_y, seed_x] != region_id:
        return label_map, regions, -1

    inside = label_map == region_id
    rgb = rgba_pixels[..., :3].astype(np.float64)
    seed = rgb[seed_y, seed_x]
    close = np.sqrt(np.sum((rgb - seed) ** 2, axis=-1)) < color_threshold
    candidates = inside & close
    candidates[seed_y, seed_x] = True

    components, _ = ndimage.label(candidates, structure=_FOUR_CONNECTED)
    fill = components == components[seed_y, seed_x]
    remaining = inside & ~fill
    if not remaining.any():
        return label_map, regions, -1

    new_id = max([r.id for r in regions] + [int(label_map.max())]) + 1
    new_map = label_map.copy()
    new_map[fill] = new_id

    shrunk = Region(
        id=region_id,
        color_index=region.color_index,
        pixel_count=int(np.count_nonzero(remaining)),
        bbox=_mask_bbox(remaining),
    )
    carved = Region(
        id=new_id,
        color_index=region.color_index,
        pixel_count=int(np.count_nonzero(fill)),
        bbox=_mask_bbox(fill),
    )
    new_regions = [shrunk if r.id == region_id else r for r in regions] + [carved]
    logger.debug("Split %d pixels of region %d into region %d", carved.pixel_count, region_id, new_id)
    return new_map, new_regions, new_id
