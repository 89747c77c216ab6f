"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from numberpaint.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.numberpaint_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="NumberPaint",
        description="Paint-by-numbers engine: palette reduction, region segmentation and label placement",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    _register_stages()

    from numberpaint.api.router import api_router

    app.include_router(api_router)

    return app


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    from numberpaint.engine.stages import load_stages

    load_stages()


app = create_app()
