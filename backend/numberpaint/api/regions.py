"""Interactive region endpoints: merge suggestions, merge, split analysis, split.

No-op outcomes come back as 200 with ``region_id == -1``.
"""

from __future__ import annotations

import dataclasses

import numpy as np
from fastapi import APIRouter, HTTPException

from numberpaint.api.convert import model_to_region, region_to_model
from numberpaint.engine.region_ops import analyze_split, perform_merge, perform_split, suggest_merge
from numberpaint.models.requests import (
    MergeRequest,
    SplitAnalysisRequest,
    SplitRequest,
    SuggestMergeRequest,
)
from numberpaint.models.responses import (
    MergeSuggestionModel,
    RegionOpResponse,
    SplitAnalysisResponse,
    SplitCandidateModel,
    SuggestMergeResponse,
)
from numberpaint.utils.buffers import decode_label_map, decode_rgba, encode_array

router = APIRouter(prefix="/regions")


def _label_map(request) -> np.ndarray:
    try:
        return decode_label_map(request.label_map, request.width, request.height)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/suggest-merge", response_model=SuggestMergeResponse)
async def suggest_merge_targets(request: SuggestMergeRequest) -> SuggestMergeResponse:
    label_map = _label_map(request)
    suggestions = suggest_merge(
        request.source_id,
        [model_to_region(r) for r in request.regions],
        label_map,
        np.asarray(request.palette, dtype=np.uint8),
        np.asarray(request.lab_palette, dtype=np.float64),
        top_n=request.top_n,
    )
    return SuggestMergeResponse(
        source_id=request.source_id,
        suggestions=[MergeSuggestionModel(**dataclasses.asdict(s)) for s in suggestions],
    )


@router.post("/merge", response_model=RegionOpResponse)
async def merge_regions(request: MergeRequest) -> RegionOpResponse:
    label_map, regions, merged_id = perform_merge(
        request.a_id,
        request.b_id,
        _label_map(request),
        [model_to_region(r) for r in request.regions],
    )
    return RegionOpResponse(
        region_id=merged_id,
        label_map=encode_array(label_map),
        regions=[region_to_model(r) for r in regions],
    )


@router.post("/split-analysis", response_model=SplitAnalysisResponse)
async def split_analysis(request: SplitAnalysisRequest) -> SplitAnalysisResponse:
    analysis = analyze_split(
        request.region_id,
        _label_map(request),
        request.sampling_rate,
        rng=np.random.default_rng(request.seed),
    )
    return SplitAnalysisResponse(
        region_id=analysis.region_id,
        has_subregions=analysis.has_subregions,
        estimated_variance=analysis.estimated_variance,
        split_candidates=[
            SplitCandidateModel(**dataclasses.asdict(c)) for c in analysis.split_candidates
        ],
    )


@router.post("/split", response_model=RegionOpResponse)
async def split_region(request: SplitRequest) -> RegionOpResponse:
    label_map = _label_map(request)
    try:
        pixels = decode_rgba(request.pixels, request.width, request.height)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    label_map, regions, new_id = perform_split(
        request.region_id,
        request.seed_x,
        request.seed_y,
        label_map,
        [model_to_region(r) for r in request.regions],
        pixels,
        request.color_threshold,
    )
    return RegionOpResponse(
        region_id=new_id,
        label_map=encode_array(label_map),
        regions=[region_to_model(r) for r in regions],
    )
