"""Tests for the pipeline orchestrator."""

import threading

import numpy as np
import pytest

from numberpaint.engine.config import PipelineConfig
from numberpaint.engine.context import PipelineContext
from numberpaint.engine.pipeline import (
    Pipeline,
    PipelineCancelledError,
    StageFailedError,
    create_pipeline,
)
from numberpaint.engine.registry import Phase, StageRegistry, StageSpec
from tests.conftest import BLUE, RED, two_color_rgba


def _ctx(**config) -> PipelineContext:
    return PipelineContext(pixels=two_color_rgba(), config=PipelineConfig(**config))


def _registry(*specs: StageSpec) -> StageRegistry:
    reg = StageRegistry()
    for spec in specs:
        reg.register(spec)
    return reg


def test_pipeline_runs_stages_in_order():
    results = []

    def s1(ctx: PipelineContext) -> None:
        results.append("s1")

    def s2(ctx: PipelineContext) -> None:
        results.append("s2")

    reg = _registry(
        StageSpec(id="s2", phase=Phase.PREPARE, fn=s2, dependencies=["s1"]),
        StageSpec(id="s1", phase=Phase.PREPARE, fn=s1),
    )
    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["s1", "s2"]
    assert ctx.completed_stages == ["s1", "s2"]
    assert set(ctx.timings_ms) == {"s1", "s2"}


def test_failure_stops_the_run():
    ran = []

    def fail(ctx: PipelineContext) -> None:
        raise ValueError("test error")

    reg = _registry(
        StageSpec(id="a", phase=Phase.PREPARE, fn=fail),
        StageSpec(id="b", phase=Phase.PALETTE, fn=lambda ctx: ran.append("b"), dependencies=["a"]),
    )
    ctx = _ctx()
    with pytest.raises(StageFailedError) as info:
        Pipeline(registry=reg).run(ctx)

    assert info.value.stage_id == "a"
    assert isinstance(info.value.cause, ValueError)
    assert "test error" in ctx.errors["a"]
    assert ran == []
    assert ctx.completed_stages == []


def test_cancel_between_stages():
    cancel = threading.Event()
    reg = _registry(
        StageSpec(id="a", phase=Phase.PREPARE, fn=lambda ctx: cancel.set()),
        StageSpec(id="b", phase=Phase.PALETTE, fn=lambda ctx: None, dependencies=["a"]),
    )
    ctx = _ctx()
    with pytest.raises(PipelineCancelledError) as info:
        Pipeline(registry=reg).run(ctx, cancel_event=cancel)
    assert info.value.stage_id == "b"
    assert ctx.completed_stages == ["a"]


def test_invalid_config_rejected_before_stages():
    ran = []
    reg = _registry(StageSpec(id="a", phase=Phase.PREPARE, fn=lambda ctx: ran.append("a")))
    with pytest.raises(ValueError):
        Pipeline(registry=reg).run(_ctx(palette_size=0))
    assert ran == []


def test_streaming_events():
    def work(ctx: PipelineContext) -> None:
        ctx.progress_callback(40)
        ctx.progress_callback(30)
        ctx.progress_callback(100)

    reg = _registry(StageSpec(id="work", phase=Phase.PREPARE, fn=work))
    events = list(Pipeline(registry=reg).run_streaming(_ctx()))

    assert [e["status"] for e in events] == ["running", "progress", "progress", "ok"]
    assert [e["sub_progress"] for e in events if e["status"] == "progress"] == [40, 100]
    assert events[-1]["elapsed_ms"] >= 0


def test_streaming_progress_arrives_while_stage_runs():
    released = threading.Event()

    def slow(ctx: PipelineContext) -> None:
        ctx.progress_callback(50)
        # Only the consumer, having seen the 50% event, can let the stage finish
        if not released.wait(timeout=5):
            raise RuntimeError("progress was not delivered mid-stage")
        ctx.progress_callback(100)

    reg = _registry(StageSpec(id="slow", phase=Phase.PREPARE, fn=slow))
    events = []
    for e in Pipeline(registry=reg).run_streaming(_ctx()):
        events.append(e)
        if e["status"] == "progress" and e["sub_progress"] == 50:
            released.set()

    assert [e["status"] for e in events] == ["running", "progress", "progress", "ok"]
    assert [e["sub_progress"] for e in events if e["status"] == "progress"] == [50, 100]


def test_streaming_error_stops():
    def fail(ctx: PipelineContext) -> None:
        raise RuntimeError("boom")

    reg = _registry(
        StageSpec(id="a", phase=Phase.PREPARE, fn=fail),
        StageSpec(id="b", phase=Phase.PALETTE, fn=lambda ctx: None, dependencies=["a"]),
    )
    ctx = _ctx()
    events = list(Pipeline(registry=reg).run_streaming(ctx))
    assert [e["status"] for e in events] == ["running", "error"]
    assert events[-1]["error"] == "boom"
    assert "a" in ctx.errors


def test_two_color_end_to_end():
    ctx = _ctx(palette_size=2, min_region_size=0, simplification_epsilon=0.0, random_seed=1)
    seen: dict[str, list[int]] = {}
    create_pipeline().run(ctx, on_progress=lambda sid, pct: seen.setdefault(sid, []).append(pct))

    assert ctx.completed_stages == ["preprocess", "quantize", "segment", "merge", "contour", "label"]
    assert sorted(tuple(c) for c in ctx.palette.tolist()) == sorted([RED, BLUE])

    assert len(ctx.regions) == 2
    for region in ctx.regions:
        assert region.pixel_count == 8
        assert (region.bbox.w, region.bbox.h) == (2, 4)

    assert len(ctx.contours) == 2
    labels = sorted((lbl.x, lbl.y) for lbl in ctx.labels)
    assert labels[0] == pytest.approx((0.5, 1.5), abs=0.01)
    assert labels[1] == pytest.approx((2.5, 1.5), abs=0.01)

    assert ctx.statistics.total_regions == 2
    for values in seen.values():
        assert values == sorted(values)
        assert all(0 <= v <= 100 for v in values)
    assert seen["quantize"][-1] == 100


def test_preset_palette_run():
    ctx = _ctx(preset_palette_id="crayola-8", min_region_size=0)
    create_pipeline().run(ctx)
    assert len(ctx.palette) == 8
    red = ctx.palette[ctx.regions[0].color_index]
    assert red[0] > red[2]


def test_unknown_preset_fails_quantize():
    ctx = _ctx(preset_palette_id="no-such-palette")
    with pytest.raises(StageFailedError) as info:
        create_pipeline().run(ctx)
    assert info.value.stage_id == "quantize"


def test_preprocess_stage_adjusts_pixels():
    ctx = _ctx(palette_size=2, brightness=100, min_region_size=0)
    create_pipeline().run(ctx)
    assert np.all(ctx.pixels[..., :3] == 255)
    assert len(ctx.regions) == 1
