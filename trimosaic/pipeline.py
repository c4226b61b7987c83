import os
import time
from typing import Optional

from omegaconf import DictConfig

from .approximate import Approximator, ApproximationResult
from .preprocess import load_target
from .renderer import load_vector, render_triangles, save_canvas, save_svg, save_json
from .utils import MetricsCalculator, save_comparison


def resolve_output(cfg: DictConfig, name: Optional[str]) -> Optional[str]:
    """Place an output file name under paths.output_dir."""
    if not name:
        return None
    return os.path.join(cfg.paths.output_dir, name)


def approximate_image(input_path: str, cfg: DictConfig) -> ApproximationResult:
    """
    Approximate a single image and write every configured output.

    Nothing is written unless the whole approximation succeeds.

    Args:
        input_path: Path to the image to approximate
        cfg: Configuration object

    Returns:
        The approximation result
    """
    print(f"Loading target image: {input_path}")
    target = load_target(input_path)
    print(f"Target: {target.width}x{target.height}, "
          f"{cfg.triangles_n} triangles, {cfg.search.candidates} candidates per round")

    approximator = Approximator.from_config(cfg)

    start_time = time.time()
    result = approximator.run(target)
    elapsed = time.time() - start_time
    print(f"Approximation completed in {elapsed:.2f} seconds")

    png_path = resolve_output(cfg, cfg.output.png)
    if png_path:
        print(f"Saving PNG to {png_path}")
        save_canvas(result.canvas, png_path)

    svg_path = resolve_output(cfg, cfg.output.svg)
    if svg_path:
        print(f"Saving SVG to {svg_path}")
        save_svg(result.vector, svg_path, scale=cfg.output.scale)

    json_path = resolve_output(cfg, cfg.output.json)
    if json_path:
        print(f"Saving triangle list to {json_path}")
        save_json(result.vector, json_path)

    compare_path = resolve_output(cfg, cfg.output.compare)
    if compare_path:
        print(f"Saving comparison to {compare_path}")
        save_comparison(target, result.canvas, compare_path)

    if cfg.metrics:
        metrics = MetricsCalculator().calculate_metrics(result.canvas, target, list(cfg.metrics))
        print("\nMetrics:")
        for name, value in metrics.items():
            print(f"{name.upper()}: {value:.4f}")

    return result


def replay_vector(vector_path: str, cfg: DictConfig) -> None:
    """Re-render a saved triangle list at output.scale and write it."""
    print(f"Loading triangle list: {vector_path}")
    vector = load_vector(vector_path)

    canvas = render_triangles(vector.background, vector.triangles,
                              vector.width, vector.height, scale=cfg.output.scale)
    print(f"Rendered {len(vector.triangles)} triangles at {canvas.width}x{canvas.height}")

    png_path = resolve_output(cfg, cfg.output.png)
    if png_path:
        print(f"Saving PNG to {png_path}")
        save_canvas(canvas, png_path)

    svg_path = resolve_output(cfg, cfg.output.svg)
    if svg_path:
        print(f"Saving SVG to {svg_path}")
        save_svg(vector, svg_path, scale=cfg.output.scale)
