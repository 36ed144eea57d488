"""Corner refinement for a detected content rectangle."""

from typing import Tuple

from ..geometry import IntRect
from ..raster import BinaryImage


def fine_tune_corner(
    image: BinaryImage, x: int, y: int, inc_x: int, inc_y: int
) -> Tuple[int, int]:
    """Walk a corner diagonally until it leaves black pixels.

    The walk stops on the first non-black pixel, or when the next step
    would leave the image.

    Returns:
        The refined corner as ``(x, y)``
    """
    while image.is_black(x, y) and image.contains(x + inc_x, y + inc_y):
        x += inc_x
        y += inc_y
    return x, y


def fine_tune_corners(image: BinaryImage, rect: IntRect) -> IntRect:
    """Refine all four corners of ``rect`` in place.

    Corners are processed top-left, top-right, bottom-left, bottom-right.
    Each walk starts from the edges as left by the walks before it.
    """
    left, top, right, bottom = rect.as_tuple()

    left, top = fine_tune_corner(image, left, top, 1, 1)
    right, top = fine_tune_corner(image, right, top, -1, 1)
    left, bottom = fine_tune_corner(image, left, bottom, 1, -1)
    right, bottom = fine_tune_corner(image, right, bottom, -1, -1)

    rect.left = left
    rect.top = top
    rect.right = right
    rect.bottom = bottom
    return rect
