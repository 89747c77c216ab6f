"""Pipeline orchestrator: runs stages strictly in dependency order.

A stage failure ends the run; every stage consumes the complete output of the
one before it, so there is nothing useful to salvage.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Generator
from typing import Any, Callable, Optional

from numberpaint.engine.config import PipelineConfig
from numberpaint.engine.context import PipelineContext
from numberpaint.engine.registry import StageRegistry, StageSpec, get_registry
from numberpaint.utils.progress import ProgressReporter

logger = logging.getLogger(__name__)

ProgressSink = Callable[[str, int], None]

_STAGE_DONE = object()  # worker finished; no more events for this stage


class StageFailedError(RuntimeError):
    """A stage raised; the run is abandoned."""

    def __init__(self, stage_id: str, cause: BaseException) -> None:
        super().__init__(f"Stage {stage_id!r} failed: {cause}")
        self.stage_id = stage_id
        self.cause = cause


class PipelineCancelledError(RuntimeError):
    def __init__(self, stage_id: str) -> None:
        super().__init__(f"Pipeline cancelled before stage {stage_id!r}")
        self.stage_id = stage_id


class Pipeline:
    """Orchestrates the stage pipeline."""

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config

    def _prepare(self, ctx: PipelineContext) -> list[StageSpec]:
        if self.config is not None:
            ctx.config = self.config
        ctx.config.validate()
        return self.registry.resolve_order()

    def _run_stage(self, spec: StageSpec, ctx: PipelineContext) -> float:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)
            raise StageFailedError(spec.id, e) from e
        finally:
            ctx.progress_callback = None
        elapsed = round((time.perf_counter() - t0) * 1000, 1)
        ctx.completed_stages.append(spec.id)
        ctx.timings_ms[spec.id] = elapsed
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)
        return elapsed

    def run(
        self,
        ctx: PipelineContext,
        on_progress: Optional[ProgressSink] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> PipelineContext:
        """Run every stage on ``ctx``.

        Raises StageFailedError on the first failing stage and
        PipelineCancelledError if ``cancel_event`` is set between stages.
        """
        start = time.perf_counter()
        ordered = self._prepare(ctx)
        logger.info("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            if cancel_event is not None and cancel_event.is_set():
                raise PipelineCancelledError(spec.id)

            if on_progress is not None:
                ctx.progress_callback = ProgressReporter(
                    lambda pct, _id=spec.id: on_progress(_id, pct)
                )
            self._run_stage(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d stages, %d regions in %.0fms",
            len(ctx.completed_stages),
            ctx.num_regions,
            total,
        )
        return ctx

    def run_streaming(
        self,
        ctx: PipelineContext,
        cancel_event: Optional[threading.Event] = None,
    ) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding progress dicts around each stage.

        Each stage runs on a worker thread so its sub-progress events are
        yielded while it is still working. The caller's ``ctx`` is mutated in
        place. On failure an ``"error"`` event is yielded and the generator
        stops; cancellation yields a ``"cancelled"`` event.
        """
        ordered = self._prepare(ctx)
        total = len(ordered)

        def event(spec: StageSpec, index: int, status: str, **extra: Any) -> dict[str, Any]:
            return {
                "stage_id": spec.id,
                "description": spec.description,
                "phase": spec.phase.name,
                "index": index,
                "total": total,
                "status": status,
                "elapsed_ms": 0.0,
                "error": "",
                **extra,
            }

        for i, spec in enumerate(ordered):
            if cancel_event is not None and cancel_event.is_set():
                yield event(spec, i, "cancelled")
                return

            yield event(spec, i, "running")

            events: queue.Queue = queue.Queue()
            outcome: dict[str, Any] = {}
            ctx.progress_callback = ProgressReporter(
                lambda pct, _spec=spec, _i=i: events.put(
                    event(_spec, _i, "progress", sub_progress=pct)
                )
            )

            def work(_spec: StageSpec = spec) -> None:
                try:
                    outcome["elapsed_ms"] = self._run_stage(_spec, ctx)
                except StageFailedError as e:
                    outcome["failure"] = e
                finally:
                    events.put(_STAGE_DONE)

            worker = threading.Thread(target=work, name=f"stage-{spec.id}", daemon=True)
            worker.start()
            yield from iter(events.get, _STAGE_DONE)
            worker.join()

            if "failure" in outcome:
                yield event(spec, i, "error", error=str(outcome["failure"].cause))
                return
            yield event(spec, i, "ok", elapsed_ms=outcome["elapsed_ms"])


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for a pipeline over the registered stages."""
    from numberpaint.engine.stages import load_stages

    load_stages()
    return Pipeline(config=config)
