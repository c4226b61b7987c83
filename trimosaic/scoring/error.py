import numpy as np

from ..canvas import Canvas, composite
from ..geometry import Color
from ..geometry.triangle import Box


SCORE_MODES = ('delta', 'full')


def squared_error(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Per-pixel squared error summed over the R, G, B channels."""
    diff = a[..., :3].astype(np.int64) - b[..., :3].astype(np.int64)
    return (diff * diff).sum(axis=-1)


def full_error(a: Canvas, b: Canvas) -> float:
    """
    Mean squared error between two equal-sized canvases.

    sum((a_i - b_i)^2) / (width * height) over the color channels of every
    pixel. Alpha is not compared.
    """
    if a.size != b.size:
        raise ValueError(f"Canvas sizes differ: {a.size} vs {b.size}")
    return float(squared_error(a.pixels, b.pixels).sum()) / (a.width * a.height)


def delta_error(target: Canvas, canvas: Canvas, box: Box,
                mask: np.ndarray, color: Color) -> int:
    """
    Change in summed squared error caused by compositing ``color`` over the
    covered pixels, restricted to the triangle footprint.

    The composite is computed into a local array; ``canvas`` is not modified.
    The result equals (full_error(after) - full_error(before)) * width * height,
    so negative values mean the triangle improves the approximation.

    Args:
        target: Image being approximated
        canvas: Current working canvas (read only)
        box: Bounding box of the triangle
        mask: Coverage mask of shape (y1 - y0, x1 - x0)
        color: Candidate fill color

    Returns:
        Integer error delta
    """
    if target.size != canvas.size:
        raise ValueError(f"Canvas sizes differ: {target.size} vs {canvas.size}")

    x0, y0, x1, y1 = box
    goal = target.pixels[y0:y1, x0:x1][mask]
    before = canvas.pixels[y0:y1, x0:x1][mask]
    after = composite(before, color)

    return int(squared_error(goal, after).sum() - squared_error(goal, before).sum())


def score_candidate(target: Canvas, canvas: Canvas, box: Box, mask: np.ndarray,
                    color: Color, mode: str = 'delta') -> float:
    """
    Score a candidate under the chosen metric; lower is better.

    ``delta`` only touches the footprint. ``full`` composites onto a private
    copy of the canvas and measures the whole image.
    """
    if mode == 'delta':
        return float(delta_error(target, canvas, box, mask, color))
    elif mode == 'full':
        scratch = canvas.copy()
        scratch.blend_mask(box, mask, color)
        return full_error(scratch, target)
    raise ValueError(f"Unknown score mode: {mode}")
