"""Run the paint-by-numbers pipeline on an image file and render a preview.

    python run_demo.py photo.jpg --colors 12 --min-region 40 --out preview.png
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

import matplotlib  # noqa: E402

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.patches import Polygon as PolygonPatch  # noqa: E402
from PIL import Image  # noqa: E402

from numberpaint.engine.config import PipelineConfig  # noqa: E402
from numberpaint.engine.context import PipelineContext  # noqa: E402
from numberpaint.engine.pipeline import create_pipeline  # noqa: E402
from numberpaint.utils.color import rgb_to_hex  # noqa: E402


def load_rgba(path: Path, max_side: int) -> np.ndarray:
    img = Image.open(path).convert("RGBA")
    img.thumbnail((max_side, max_side))
    return np.asarray(img, dtype=np.uint8)


def render_preview(ctx: PipelineContext, out: Path) -> None:
    """Filled regions, black outlines and a number per region."""
    fig, ax = plt.subplots(figsize=(ctx.width / 100, ctx.height / 100), dpi=150)
    ax.set_xlim(-0.5, ctx.width - 0.5)
    ax.set_ylim(ctx.height - 0.5, -0.5)
    ax.set_aspect("equal")
    ax.axis("off")

    for contour in ctx.contours:
        color = ctx.palette[contour.color_index] / 255.0
        ax.add_patch(PolygonPatch(contour.outer_ring, closed=True, facecolor=color, edgecolor="black", linewidth=0.3))

    for label in ctx.labels:
        size = max(2.0, min(8.0, label.max_inscribed_radius))
        ax.text(label.x, label.y, str(label.color_index + 1), ha="center", va="center", fontsize=size)

    fig.savefig(out, bbox_inches="tight", pad_inches=0)
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("image", type=Path)
    parser.add_argument("--colors", type=int, default=12)
    parser.add_argument("--algorithm", choices=["kmeans", "mediancut"], default="kmeans")
    parser.add_argument("--preset", default=None, help="Preset palette id, e.g. crayola-24")
    parser.add_argument("--min-region", type=int, default=40)
    parser.add_argument("--max-side", type=int, default=400)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out", type=Path, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pixels = load_rgba(args.image, args.max_side)
    config = PipelineConfig(
        palette_size=args.colors,
        algorithm=args.algorithm,
        preset_palette_id=args.preset,
        min_region_size=args.min_region,
        random_seed=args.seed,
    )
    ctx = PipelineContext(pixels=pixels, config=config)

    t0 = time.perf_counter()
    create_pipeline().run(ctx, on_progress=lambda stage_id, pct: print(f"  {stage_id:<10} {pct:3d}%", end="\r"))
    elapsed = (time.perf_counter() - t0) * 1000
    print()

    print(f"{args.image.name}: {ctx.width}x{ctx.height} in {elapsed:.0f}ms")
    for stage_id, ms in ctx.timings_ms.items():
        print(f"  {stage_id:<10} {ms:8.1f}ms")
    print(f"  palette:  {' '.join(rgb_to_hex(c) for c in ctx.palette)}")
    print(f"  regions:  {ctx.num_regions}  contours: {len(ctx.contours)}  labels: {len(ctx.labels)}")
    stats = ctx.statistics
    if stats is not None and stats.total_regions:
        print(f"  average region: {stats.average_region_size}px, largest: {stats.largest_region.pixel_count}px")

    if args.out is not None:
        render_preview(ctx, args.out)
        print(f"  preview -> {args.out}")


if __name__ == "__main__":
    main()
