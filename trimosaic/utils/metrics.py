import numpy as np
from skimage.metrics import structural_similarity as ssim
from skimage.metrics import peak_signal_noise_ratio as psnr
from skimage.metrics import mean_squared_error as mse
from typing import Dict, List, Optional

from ..canvas import Canvas


class MetricsCalculator:
    """Calculate evaluation metrics between images."""

    SUPPORTED = ('mse', 'psnr', 'ssim')

    def calculate_metrics(self, rendered: Canvas, target: Canvas,
                          metrics: Optional[List[str]] = None) -> Dict[str, float]:
        """
        Calculate metrics between rendered and target canvases.

        Args:
            rendered: Approximation at the target's resolution
            target: Original image
            metrics: Subset of 'mse', 'psnr', 'ssim'

        Returns:
            Dictionary of metric values
        """
        if metrics is None:
            metrics = list(self.SUPPORTED)
        if rendered.size != target.size:
            raise ValueError(f"Canvas sizes differ: {rendered.size} vs {target.size}")

        results = {}

        rendered_np = rendered.pixels[:, :, :3]
        target_np = target.pixels[:, :, :3]

        if 'mse' in metrics:
            results['mse'] = float(mse(target_np, rendered_np))

        if 'psnr' in metrics:
            if np.array_equal(target_np, rendered_np):
                results['psnr'] = float('inf')
            else:
                results['psnr'] = float(psnr(target_np, rendered_np, data_range=255))

        if 'ssim' in metrics:
            # The default 7x7 window needs at least 7 pixels on each side
            win_size = min(7, target.width, target.height)
            if win_size % 2 == 0:
                win_size -= 1
            if win_size < 3:
                results['ssim'] = float('nan')
            else:
                results['ssim'] = float(ssim(target_np, rendered_np, channel_axis=2,
                                             data_range=255, win_size=win_size))

        return results
