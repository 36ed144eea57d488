"""Rendering a source scan at the reference resolution."""

from typing import Optional
import logging

import cv2
import numpy as np

from ..exceptions import ValidationError
from ..geometry import AffineTransform, IntRect
from ..ports import StatusToken
from ..transformation import ImageTransformation
from .base import BaseProcessor

logger = logging.getLogger(__name__)


class GrayNormalizer(BaseProcessor):
    """Processor rendering grayscale scans under an image transformation."""

    def process(
        self,
        image: np.ndarray,
        xform: Optional[ImageTransformation] = None,
        **kwargs
    ) -> np.ndarray:
        """Render ``image`` through ``xform``.

        Args:
            image: Grayscale source image
            xform: Transformation to render through
            **kwargs: ``status`` for cancellation

        Returns:
            np.ndarray: Grayscale image covering ``xform.resulting_rect``
        """
        self.validate_image(image)
        if xform is None:
            raise ValidationError("A transformation is required")

        status = kwargs.get("status")
        if status is not None:
            status.throw_if_cancelled()

        # Newly exposed areas get the darkest level rather than white, so
        # the shadow around the page stays dark.
        outside_value = darkest_gray_level(image)
        return transform_to_gray(
            image, xform.transform, xform.resulting_rect.to_rect(), outside_value
        )

    def to_reference_gray(
        self,
        gray: np.ndarray,
        xform: ImageTransformation,
        status: Optional[StatusToken] = None,
    ) -> np.ndarray:
        return self.process(gray, xform=xform, status=status)


def darkest_gray_level(image: np.ndarray) -> int:
    """Return the darkest gray level present in ``image``."""
    return int(image.min())


def transform_to_gray(
    image: np.ndarray,
    transform: AffineTransform,
    target_rect: IntRect,
    outside_value: int = 0,
) -> np.ndarray:
    """Warp ``image`` and return the part covered by ``target_rect``.

    Args:
        image: Grayscale source image
        transform: Source to destination transform
        target_rect: Destination area to render, in destination coordinates
        outside_value: Gray level for pixels the source does not cover

    Returns:
        np.ndarray: ``uint8`` image of ``target_rect``'s size
    """
    full = transform.then(
        AffineTransform.translation(-target_rect.left, -target_rect.top)
    )
    # warpAffine addresses pixel centres; the transform addresses pixel corners.
    full = (
        AffineTransform.translation(0.5, 0.5)
        .then(full)
        .then(AffineTransform.translation(-0.5, -0.5))
    )
    size = (target_rect.width, target_rect.height)
    logger.debug(f"Rendering {image.shape[1]}x{image.shape[0]} source to {size[0]}x{size[1]}")
    return cv2.warpAffine(
        image,
        full.to_cv2(),
        size,
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=int(outside_value),
    )
