"""POST /api/pipeline: full image -> regions, contours and labels."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from numberpaint.api.convert import context_to_response
from numberpaint.config import Settings
from numberpaint.dependencies import get_settings
from numberpaint.engine.context import PipelineContext
from numberpaint.engine.pipeline import StageFailedError, create_pipeline
from numberpaint.models.requests import PipelineRequest
from numberpaint.models.responses import PipelineResponse
from numberpaint.utils.buffers import decode_rgba

logger = logging.getLogger(__name__)

router = APIRouter()


_SENTINEL = object()  # marks end of queue


def _build_context(request: PipelineRequest, settings: Settings) -> PipelineContext:
    """Decode and validate the request; raises ValueError on bad input."""
    image = request.image
    if image.width * image.height > settings.max_image_pixels:
        raise ValueError(
            f"Image has {image.width * image.height} pixels; limit is {settings.max_image_pixels}"
        )
    pixels = decode_rgba(image.pixels, image.width, image.height)
    config = request.settings.to_config()
    # Service-level defaults for fields the client left out
    given = request.settings.model_fields_set
    if "palette_size" not in given:
        config.palette_size = settings.default_palette_size
    if "algorithm" not in given:
        config.algorithm = settings.default_algorithm
    config.validate()
    return PipelineContext(pixels=pixels, config=config)


@router.post("/pipeline", response_model=PipelineResponse)
async def run_pipeline(
    request: PipelineRequest,
    settings: Settings = Depends(get_settings),
) -> PipelineResponse:
    start = time.perf_counter()
    try:
        ctx = _build_context(request, settings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, pipeline.run, ctx)
    except StageFailedError as e:
        raise HTTPException(
            status_code=500,
            detail={"stage_id": e.stage_id, "error": str(e.cause)},
        ) from e

    elapsed = (time.perf_counter() - start) * 1000
    return context_to_response(ctx, request.include_maps, elapsed)


async def _stream_pipeline(ctx: PipelineContext, include_maps: bool) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    start = time.perf_counter()
    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        """Sync pipeline in thread; pushes progress dicts onto the async queue."""
        try:
            for progress in pipeline.run_streaming(ctx):
                loop.call_soon_threadsafe(queue.put_nowait, progress)
        except Exception as e:
            logger.exception("Streaming pipeline crashed")
            ctx.errors.setdefault("pipeline", str(e))
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    # Start pipeline in a thread so the event loop stays free to flush SSE
    loop.run_in_executor(None, _run_pipeline)

    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        yield f"event: progress\ndata: {json.dumps(item)}\n\n"

    if ctx.errors:
        stage_id, message = next(iter(ctx.errors.items()))
        data = json.dumps({"type": "error", "stage_id": stage_id, "message": message})
        yield f"event: error\ndata: {data}\n\n"
    else:
        elapsed = (time.perf_counter() - start) * 1000
        response = context_to_response(ctx, include_maps, elapsed)
        yield f"event: result\ndata: {response.model_dump_json()}\n\n"

    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/pipeline/stream")
async def run_pipeline_stream(
    request: PipelineRequest,
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    try:
        ctx = _build_context(request, settings)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    return StreamingResponse(
        _stream_pipeline(ctx, request.include_maps),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
