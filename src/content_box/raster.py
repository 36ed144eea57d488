"""Binary raster used by the border scanner and corner refiner."""

from __future__ import annotations

import numpy as np

from .exceptions import ValidationError


class BinaryImage:
    """Two-color image; ``True`` pixels are black.

    Pixel access is by ``(x, y)`` with the origin at the top-left corner.
    """

    def __init__(self, black: np.ndarray) -> None:
        if black is None or black.ndim != 2:
            raise ValidationError("Binary image must be a 2-D array")
        self._black = black.astype(bool, copy=False)

    @classmethod
    def from_array(cls, array: np.ndarray) -> BinaryImage:
        """Nonzero entries become black."""
        return cls(np.asarray(array) != 0)

    @classmethod
    def from_thresholded(cls, binary: np.ndarray) -> BinaryImage:
        """Build from a 0/255 thresholded image, where 0 is black."""
        return cls(np.asarray(binary) == 0)

    @property
    def width(self) -> int:
        return self._black.shape[1]

    @property
    def height(self) -> int:
        return self._black.shape[0]

    def is_black(self, x: int, y: int) -> bool:
        return bool(self._black[y, x])

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def to_array(self) -> np.ndarray:
        """Render as a 0/255 ``uint8`` image (black is 0)."""
        return np.where(self._black, 0, 255).astype(np.uint8)

    def __repr__(self) -> str:
        return f"BinaryImage({self.width}x{self.height})"
