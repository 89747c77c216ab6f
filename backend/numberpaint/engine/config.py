"""Pipeline configuration: every per-run knob in one place."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

ALGORITHMS = ("kmeans", "mediancut")


@dataclass
class PipelineConfig:
    """Controls how a photo is reduced to numbered regions."""

    # Palette
    palette_size: int = 16
    algorithm: str = "kmeans"
    preset_palette_id: Optional[str] = None
    # Explicit RGB triples; wins over preset_palette_id when both are set
    fixed_palette: Optional[list[tuple[int, int, int]]] = None

    # Sampling / clustering
    max_samples: int = 50_000
    max_iterations: int = 20
    convergence_threshold: float = 0.25  # squared Lab shift (0.5 units)
    lut_size: int = 32
    random_seed: Optional[int] = None

    # Regions
    min_region_size: int = 20

    # Vectors
    simplification_epsilon: float = 1.0
    label_precision: float = 1.0

    # Preprocessing adjustments, each -100..100 (0 = untouched)
    brightness: int = 0
    contrast: int = 0
    saturation: int = 0

    @property
    def has_preprocessing(self) -> bool:
        return bool(self.brightness or self.contrast or self.saturation)

    def validate(self) -> None:
        """Raise ValueError on out-of-range settings."""
        if self.algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm {self.algorithm!r}; expected one of {ALGORITHMS}")
        if not 1 <= self.palette_size <= 256:
            raise ValueError(f"palette_size must be in 1..256, got {self.palette_size}")
        if self.fixed_palette is not None and not 1 <= len(self.fixed_palette) <= 256:
            raise ValueError("fixed_palette must hold 1..256 colors")
        if self.min_region_size < 0:
            raise ValueError("min_region_size must be >= 0")
        if self.simplification_epsilon < 0:
            raise ValueError("simplification_epsilon must be >= 0")
        if self.label_precision <= 0:
            raise ValueError("label_precision must be > 0")
        if self.max_samples < 1 or self.max_iterations < 1 or self.lut_size < 2:
            raise ValueError("max_samples, max_iterations must be >= 1 and lut_size >= 2")
        for name in ("brightness", "contrast", "saturation"):
            value = getattr(self, name)
            if not -100 <= value <= 100:
                raise ValueError(f"{name} must be in -100..100, got {value}")
