from .raster import draw_triangle, render_triangles, save_canvas
from .vector import (
    VectorImage, triangles_to_svg, vector_to_dict, vector_from_dict,
    save_svg, save_json, load_vector
)

__all__ = [
    'draw_triangle',
    'render_triangles',
    'save_canvas',
    'VectorImage',
    'triangles_to_svg',
    'vector_to_dict',
    'vector_from_dict',
    'save_svg',
    'save_json',
    'load_vector'
]
