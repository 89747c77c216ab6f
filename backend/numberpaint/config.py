"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    numberpaint_env: str = "development"
    numberpaint_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Request guards and pipeline defaults
    max_image_pixels: int = 16_000_000
    default_palette_size: int = 16
    default_algorithm: str = "kmeans"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
