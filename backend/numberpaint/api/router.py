"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from numberpaint.api import health, palettes, pipeline, regions

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(palettes.router)
api_router.include_router(pipeline.router)
api_router.include_router(regions.router)
