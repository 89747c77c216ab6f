"""Stage registry: every pipeline stage is a standalone function registered via decorator.

Usage:
    @stage(id="merge", phase=Phase.REGIONS, dependencies=["segment"])
    def merge_regions(ctx: PipelineContext) -> None:
        ctx.label_map, ctx.regions = merge_small_regions(...)

Adding a new stage = creating one module in ``engine/stages`` with the decorator.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from numberpaint.engine.context import PipelineContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    PREPARE = 0
    PALETTE = 1
    REGIONS = 2
    VECTORS = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["PipelineContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of pipeline stages keyed by id."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.phase, s.id))

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[StageSpec]:
        """Topological sort respecting dependencies. If requested_ids is None, run all."""
        pool = self._stages
        if requested_ids is not None:
            # Expand with transitive dependencies
            expanded: set[str] = set()
            stack = list(requested_ids)
            while stack:
                sid = stack.pop()
                if sid in expanded:
                    continue
                spec = pool.get(sid)
                if spec is None:
                    raise KeyError(f"Unknown stage: {sid}")
                expanded.add(sid)
                stack.extend(spec.dependencies)
            pool = {k: v for k, v in pool.items() if k in expanded}

        def rank(sid: str) -> tuple[int, str]:
            return (int(pool[sid].phase), sid)

        # Kahn's algorithm
        in_degree: dict[str, int] = {sid: 0 for sid in pool}
        for sid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[sid] += 1

        queue = sorted((sid for sid, d in in_degree.items() if d == 0), key=rank)
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(pool[sid])
            for other_id, other_spec in pool.items():
                if sid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort(key=rank)

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["PipelineContext"], None]):
        _registry.register(
            StageSpec(
                id=id,
                phase=phase,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
