import io
from typing import Optional, List

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from ..canvas import Canvas
from ..errors import WriteFailureError


def create_comparison_grid(original: Canvas,
                           rendered: Canvas,
                           titles: Optional[List[str]] = None) -> np.ndarray:
    """
    Create a side-by-side comparison of the target and its approximation.

    Args:
        original: Target image
        rendered: Approximation
        titles: Optional titles for the two panels

    Returns:
        Grid image as numpy array (H, W, 4)
    """
    if titles is None:
        titles = ['Original', 'Rendered']

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))

    for ax, canvas, title in zip(axes, (original, rendered), titles):
        ax.imshow(canvas.pixels[:, :, :3])
        ax.set_title(title)
        ax.axis('off')

    plt.tight_layout()

    # Convert figure to numpy array
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    img = Image.open(buf)
    img_array = np.array(img)
    plt.close(fig)

    return img_array


def save_comparison(original: Canvas, rendered: Canvas, path: str,
                    titles: Optional[List[str]] = None) -> None:
    """Write the comparison grid to an image file."""
    try:
        Image.fromarray(create_comparison_grid(original, rendered, titles)).save(path)
    except (OSError, ValueError) as e:
        raise WriteFailureError(str(path), str(e))
