import warnings
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .canvas import Canvas
from .errors import DecodeFailureError


def load_target(image_path: Union[str, Path]) -> Canvas:
    """
    Load an image file as an opaque RGBA target canvas.

    Transparency in the source is dropped; the approximation works on RGB.

    Raises:
        DecodeFailureError: the file is missing or not a decodable image
    """
    try:
        with Image.open(image_path) as image:
            image = image.convert('RGB')
    except FileNotFoundError:
        raise DecodeFailureError(str(image_path), "file not found")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise DecodeFailureError(str(image_path), str(e))

    if image.width == 0 or image.height == 0:
        raise DecodeFailureError(str(image_path), "image is empty")

    return Canvas.from_array(np.array(image))


def proxy_dimensions(target: Canvas, proxy_size: int) -> Optional[Tuple[int, int]]:
    """Size of the evaluation proxy, or None when the proxy is disabled."""
    if proxy_size <= 0 or (proxy_size, proxy_size) == target.size:
        return None
    if proxy_size > max(target.size):
        warnings.warn(f"proxy_size {proxy_size} is larger than the image "
                      f"{target.width}x{target.height}; evaluating on an upscaled copy")
    return proxy_size, proxy_size


def make_proxy(target: Canvas, proxy_size: int) -> Optional[Canvas]:
    """Nearest-neighbour downscaled copy of the target used for evaluation."""
    dims = proxy_dimensions(target, proxy_size)
    if dims is None:
        return None
    return target.resize(*dims)
