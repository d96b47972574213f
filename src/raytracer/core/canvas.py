"""Pixel buffer written by the render loop.

The canvas stores linear, unclamped RGB floats in a NumPy array of shape
(height, width, 3), the same (H, W, 3) layout the export and display helpers
consume. Pixel (0, 0) is the top-left corner.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from raytracer.core.tuples import Color


class Canvas:
    """A width x height grid of colors, initialised to black.

    Args:
        width: Number of pixel columns.
        height: Number of pixel rows.

    Raises:
        ValueError: If either dimension is not positive.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.float64)

    @classmethod
    def from_numpy(cls, image: npt.NDArray[np.floating]) -> Canvas:
        """Wrap a copy of an (H, W, 3) float array."""
        if image.ndim != 3 or image.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {image.shape}")
        canvas = cls(image.shape[1], image.shape[0])
        canvas._pixels[...] = image
        return canvas

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} canvas"
            )

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = (color.red, color.green, color.blue)

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b = self._pixels[y, x]
        return Color(float(r), float(g), float(b))

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the pixel data with shape (height, width, 3)."""
        return self._pixels.copy()
