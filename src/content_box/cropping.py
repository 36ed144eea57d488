"""Cropping images to a detected content box."""

from typing import Optional

import cv2
import numpy as np

from .geometry import FloatRect


def crop_to_box(image: np.ndarray, box: FloatRect) -> Optional[np.ndarray]:
    """Return the part of ``image`` inside ``box``.

    The box is rounded to whole pixels and clamped to the image. Returns
    None when nothing of the image is left.
    """
    if box.is_empty:
        return None

    height, width = image.shape[:2]
    rect = box.to_rect()
    left = max(rect.left, 0)
    top = max(rect.top, 0)
    right = min(rect.right, width - 1)
    bottom = min(rect.bottom, height - 1)
    if left > right or top > bottom:
        return None
    return image[top:bottom + 1, left:right + 1]


def rotate_orthogonal(image: np.ndarray, degrees: float) -> np.ndarray:
    """Rotate clockwise by a multiple of 90 degrees.

    Raises:
        ValueError: If ``degrees`` is not a multiple of 90
    """
    if degrees % 90:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    quarter_turns = int(degrees // 90) % 4
    if quarter_turns == 0:
        return image
    codes = {
        1: cv2.ROTATE_90_CLOCKWISE,
        2: cv2.ROTATE_180,
        3: cv2.ROTATE_90_COUNTERCLOCKWISE,
    }
    return cv2.rotate(image, codes[quarter_turns])
