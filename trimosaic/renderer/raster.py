from pathlib import Path
from typing import Sequence, Union

from ..canvas import Canvas
from ..errors import WriteFailureError
from ..geometry import Color, ColoredTriangle, bounding_box, box_is_empty, coverage_mask, scaled


def draw_triangle(canvas: Canvas, colored: ColoredTriangle) -> int:
    """
    Blend a colored triangle onto ``canvas`` in place.

    Returns:
        Number of pixels covered
    """
    box = bounding_box(colored.triangle, canvas.width, canvas.height)
    if box_is_empty(box):
        return 0
    mask = coverage_mask(colored.triangle, box)
    canvas.blend_mask(box, mask, colored.color)
    return int(mask.sum())


def render_triangles(background: Color, triangles: Sequence[ColoredTriangle],
                     width: int, height: int, scale: float = 1.0) -> Canvas:
    """
    Replay an ordered triangle list onto a fresh canvas.

    Args:
        background: Fill color applied before any triangle
        triangles: Triangles in compositing order
        width: Width the coordinates refer to
        height: Height the coordinates refer to
        scale: Output scale factor

    Returns:
        Canvas of size (round(width * scale), round(height * scale))
    """
    out_w = max(1, int(round(width * scale)))
    out_h = max(1, int(round(height * scale)))
    sx, sy = out_w / width, out_h / height

    canvas = Canvas.new(out_w, out_h)
    canvas.fill(background)

    for colored in triangles:
        if (sx, sy) != (1.0, 1.0):
            colored = ColoredTriangle(scaled(colored.triangle, sx, sy), colored.color)
        draw_triangle(canvas, colored)

    return canvas


def save_canvas(canvas: Canvas, path: Union[str, Path]) -> None:
    """Save canvas as an opaque RGB image file."""
    try:
        canvas.to_image('RGB').save(path)
    except (OSError, ValueError) as e:
        raise WriteFailureError(str(path), str(e))
