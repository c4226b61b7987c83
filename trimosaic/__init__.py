"""
TriMosaic - Greedy image approximation with translucent triangles.

This package searches, one triangle at a time, for the semi-transparent
triangle that best reduces the squared error to a target image, and exports
the result both as a raster and as an ordered triangle list.
"""

__version__ = "1.0.0"

from .geometry import Point, Triangle, Color, ColoredTriangle
from .canvas import Canvas
from .search import CandidateSearch, SearchResult
from .approximate import Approximator, ApproximationResult
from .renderer import VectorImage, render_triangles
from .config import TriMosaicConfig, load_config, validate_config
from .errors import (
    TriMosaicError, MissingInputError, DecodeFailureError,
    SearchExhaustedError, WriteFailureError
)

__all__ = [
    'Point',
    'Triangle',
    'Color',
    'ColoredTriangle',
    'Canvas',
    'CandidateSearch',
    'SearchResult',
    'Approximator',
    'ApproximationResult',
    'VectorImage',
    'render_triangles',
    'TriMosaicConfig',
    'load_config',
    'validate_config',
    'TriMosaicError',
    'MissingInputError',
    'DecodeFailureError',
    'SearchExhaustedError',
    'WriteFailureError'
]
