import json
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Union

from ..errors import DecodeFailureError, WriteFailureError
from ..geometry import Point, Triangle, Color, ColoredTriangle


class VectorImage(NamedTuple):
    """Resolution-independent result: a background fill plus ordered triangles."""
    width: int
    height: int
    background: Color
    triangles: List[ColoredTriangle]


def triangles_to_svg(vector: VectorImage, scale: float = 1.0) -> str:
    """
    Convert a vector image to an SVG string.

    Triangles are emitted in compositing order; opacity is alpha / 255.
    """
    width = vector.width * scale
    height = vector.height * scale
    bg = vector.background

    svg_lines = [
        f'<svg width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {vector.width} {vector.height}" '
        f'xmlns="http://www.w3.org/2000/svg">',
        f'<rect width="100%" height="100%" fill="rgb({bg.r},{bg.g},{bg.b})"/>'
    ]

    for colored in vector.triangles:
        (x1, y1), (x2, y2), (x3, y3) = colored.triangle
        color = colored.color
        svg_lines.append(
            f'<polygon points="{x1},{y1} {x2},{y2} {x3},{y3}" '
            f'fill="rgb({color.r},{color.g},{color.b})" '
            f'fill-opacity="{color.a / 255:.3f}" />'
        )

    svg_lines.append('</svg>')

    return '\n'.join(svg_lines)


def vector_to_dict(vector: VectorImage) -> Dict[str, Any]:
    return {
        'width': vector.width,
        'height': vector.height,
        'background': list(vector.background),
        'triangles': [
            {
                'points': [list(p) for p in colored.triangle],
                'color': list(colored.color)
            }
            for colored in vector.triangles
        ]
    }


def vector_from_dict(data: Dict[str, Any]) -> VectorImage:
    triangles = [
        ColoredTriangle(
            Triangle(*(Point(int(x), int(y)) for x, y in item['points'])),
            Color(*(int(c) for c in item['color']))
        )
        for item in data['triangles']
    ]
    return VectorImage(
        width=int(data['width']),
        height=int(data['height']),
        background=Color(*(int(c) for c in data['background'])),
        triangles=triangles
    )


def _write_text(path: Union[str, Path], content: str) -> None:
    try:
        with open(path, 'w') as f:
            f.write(content)
    except OSError as e:
        raise WriteFailureError(str(path), str(e))


def save_svg(vector: VectorImage, path: Union[str, Path], scale: float = 1.0) -> None:
    _write_text(path, triangles_to_svg(vector, scale))


def save_json(vector: VectorImage, path: Union[str, Path]) -> None:
    _write_text(path, json.dumps(vector_to_dict(vector), indent=2))


def load_vector(path: Union[str, Path]) -> VectorImage:
    """Load a vector image written by ``save_json``."""
    try:
        with open(path) as f:
            data = json.load(f)
        return vector_from_dict(data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise DecodeFailureError(str(path), str(e))
