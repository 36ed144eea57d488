"""Image binarization for page box detection."""

from typing import Optional
import cv2
import numpy as np

from ..ports import StatusToken
from ..raster import BinaryImage
from .base import BaseProcessor


class OtsuBinarizer(BaseProcessor):
    """Processor for binarizing images with Otsu's global threshold."""

    def process(self, image: np.ndarray, **kwargs) -> BinaryImage:
        """Binarize an image.

        Args:
            image: Grayscale image to binarize
            **kwargs: ``status`` for cancellation

        Returns:
            BinaryImage: Dark pixels as black
        """
        self.validate_image(image)

        status = kwargs.get("status")
        if status is not None:
            status.throw_if_cancelled()

        return binarize_otsu(image)

    def binarize(
        self, gray: np.ndarray, status: Optional[StatusToken] = None
    ) -> BinaryImage:
        return self.process(gray, status=status)


def binarize_otsu(image: np.ndarray) -> BinaryImage:
    """Threshold ``image`` with Otsu's method.

    Otsu's method picks the global threshold that best separates the
    histogram into two classes; pixels at or below it become black.

    Args:
        image: ``uint8`` grayscale image

    Returns:
        BinaryImage: Thresholded image
    """
    _, binary = cv2.threshold(image, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return BinaryImage.from_thresholded(binary)
