"""Tests for the stage registry."""

import pytest

from numberpaint.engine.context import PipelineContext
from numberpaint.engine.registry import Phase, StageRegistry, StageSpec, get_registry
from numberpaint.engine.stages import load_stages


def _noop(ctx: PipelineContext) -> None:
    pass


def test_register_and_get():
    reg = StageRegistry()
    spec = StageSpec(id="quantize", phase=Phase.PALETTE, fn=_noop)
    reg.register(spec)
    assert reg.get("quantize") is spec
    assert reg.count == 1


def test_duplicate_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="a", phase=Phase.PREPARE, fn=_noop))
    with pytest.raises(ValueError):
        reg.register(StageSpec(id="a", phase=Phase.PREPARE, fn=_noop))


def test_resolve_order_with_deps():
    reg = StageRegistry()
    reg.register(StageSpec(id="zeta", phase=Phase.PREPARE, fn=_noop))
    reg.register(StageSpec(id="alpha", phase=Phase.VECTORS, fn=_noop, dependencies=["zeta"]))
    ids = [s.id for s in reg.resolve_order({"alpha"})]
    assert ids == ["zeta", "alpha"]


def test_resolve_order_unknown_stage():
    reg = StageRegistry()
    with pytest.raises(KeyError):
        reg.resolve_order({"missing"})


def test_circular_dependency_detected():
    reg = StageRegistry()
    reg.register(StageSpec(id="a", phase=Phase.PREPARE, fn=_noop, dependencies=["b"]))
    reg.register(StageSpec(id="b", phase=Phase.PREPARE, fn=_noop, dependencies=["a"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_builtin_stages_in_pipeline_order():
    load_stages()
    ids = [s.id for s in get_registry().resolve_order()]
    assert ids == ["preprocess", "quantize", "segment", "merge", "contour", "label"]
