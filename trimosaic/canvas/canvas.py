import numpy as np
from PIL import Image
from typing import Tuple

from ..geometry import Color
from ..geometry.triangle import Box


def composite(dst: np.ndarray, color: Color) -> np.ndarray:
    """
    Alpha-composite ``color`` over an RGBA pixel array ("over" operator).

    out = src * a + dst * (1 - a), computed in integer arithmetic so that
    a == 0 leaves ``dst`` untouched and a == 255 reproduces ``color`` exactly.

    Args:
        dst: RGBA pixels (..., 4) uint8
        color: Source color; its alpha is the blend opacity

    Returns:
        Composited pixels with the same shape as ``dst`` (uint8)
    """
    alpha = int(color.a)
    src = np.array([color.r, color.g, color.b, 255], dtype=np.int32)
    out = (src * alpha + dst.astype(np.int32) * (255 - alpha) + 127) // 255
    return out.astype(np.uint8)


class Canvas:
    """Mutable RGBA pixel buffer, row-major with the origin at the top left."""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)

    @classmethod
    def new(cls, width: int, height: int) -> 'Canvas':
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Canvas':
        """Build a canvas from an (H, W, 3) or (H, W, 4) uint8 array."""
        array = np.asarray(array, dtype=np.uint8)
        if array.ndim == 3 and array.shape[2] == 3:
            alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, alpha], axis=2)
        return cls(array.copy())

    @classmethod
    def from_image(cls, image: Image.Image) -> 'Canvas':
        return cls.from_array(np.array(image.convert('RGBA')))

    def to_image(self, mode: str = 'RGB') -> Image.Image:
        return Image.fromarray(self.pixels).convert(mode)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def copy(self) -> 'Canvas':
        return Canvas(self.pixels.copy())

    def fill(self, color: Color) -> None:
        self.pixels[:, :] = color

    def get(self, x: int, y: int) -> Color:
        return Color(*(int(v) for v in self.pixels[y, x]))

    def set(self, x: int, y: int, color: Color) -> None:
        # Callers clamp coordinates.
        self.pixels[y, x] = color

    def blend_over(self, x: int, y: int, color: Color) -> None:
        self.pixels[y, x] = composite(self.pixels[y, x], color)

    def blend_mask(self, box: Box, mask: np.ndarray, color: Color) -> None:
        """Composite ``color`` over every pixel of ``box`` selected by ``mask``."""
        x0, y0, x1, y1 = box
        region = self.pixels[y0:y1, x0:x1]
        region[mask] = composite(region[mask], color)

    def resize(self, width: int, height: int) -> 'Canvas':
        """Nearest-neighbour resampling into a new canvas."""
        if (width, height) == self.size:
            return self.copy()
        image = Image.fromarray(self.pixels)
        image = image.resize((width, height), Image.Resampling.NEAREST)
        return Canvas(np.array(image))

    def average_color(self) -> Color:
        """Channel-wise mean RGB over all pixels (floored), fully opaque."""
        n = self.width * self.height
        sums = self.pixels[:, :, :3].reshape(-1, 3).astype(np.int64).sum(axis=0)
        r, g, b = (int(v) for v in sums // n)
        return Color(r, g, b, 255)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Canvas):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
