from .triangle import (
    Point, Triangle, Color, ColoredTriangle,
    orient, signed_area2, contains, bounding_box, box_is_empty, coverage_mask, scaled
)

__all__ = [
    'Point',
    'Triangle',
    'Color',
    'ColoredTriangle',
    'orient',
    'signed_area2',
    'contains',
    'bounding_box',
    'box_is_empty',
    'coverage_mask',
    'scaled'
]
