from .metrics import MetricsCalculator
from .visualization import create_comparison_grid, save_comparison

__all__ = [
    'MetricsCalculator',
    'create_comparison_grid',
    'save_comparison'
]
