"""Detection of the content box of a scanned page.

The page is rendered at a fixed reference density, binarized, and scanned
inward from each side until the dark scan border ends. The resulting
rectangle is corrected at its corners and mapped back to the caller's
logical coordinates.
"""

import logging
from typing import Optional

import numpy as np

from .geometry import AffineTransform, Dpi, FloatRect, IntRect
from .ports import Binarizer, DebugSink, Normalizer, StatusToken
from .processors.binarize import OtsuBinarizer
from .processors.border_scan import (
    DEFAULT_SCAN_PARAMETERS,
    ScanParameters,
    detect_borders,
)
from .processors.corner_refine import fine_tune_corners
from .processors.normalize import GrayNormalizer
from .transformation import ImageTransformation

logger = logging.getLogger(__name__)

REFERENCE_DPI = 150


def map_to_logical(
    rect: IntRect, normalization: AffineTransform, original: AffineTransform
) -> FloatRect:
    """Map a rectangle from reference-resolution pixels to logical space.

    Args:
        rect: Rectangle in the normalized image
        normalization: Source pixels to normalized pixels
        original: Source pixels to logical space

    Returns:
        Bounding rectangle of the mapped corners
    """
    combined = normalization.inverted().then(original)
    return combined.map_rect(rect.to_float())


class PageFinder:
    """Finds the content box of a page with pluggable collaborators."""

    def __init__(
        self,
        normalizer: Optional[Normalizer] = None,
        binarizer: Optional[Binarizer] = None,
        params: ScanParameters = DEFAULT_SCAN_PARAMETERS,
        reference_dpi: int = REFERENCE_DPI,
    ) -> None:
        self.normalizer = normalizer if normalizer is not None else GrayNormalizer()
        self.binarizer = binarizer if binarizer is not None else OtsuBinarizer()
        self.params = params
        self.reference_dpi = reference_dpi

    def find_page_box(
        self,
        gray: np.ndarray,
        xform: ImageTransformation,
        dbg: Optional[DebugSink] = None,
        status: Optional[StatusToken] = None,
    ) -> FloatRect:
        """Detect the content box of ``gray``.

        Args:
            gray: Grayscale source image
            xform: Source to logical transformation
            dbg: Optional receiver of the intermediate images
            status: Optional cancellation token, checked between stages

        Returns:
            Content box in logical coordinates; empty when the normalized
            page has no area.
        """
        xform_ref = xform.pre_scale_to_dpi(Dpi(self.reference_dpi, self.reference_dpi))
        if xform_ref.resulting_rect.to_rect().is_empty:
            logger.debug("Normalized page is empty, no content box")
            return FloatRect()

        gray_ref = self.normalizer.to_reference_gray(gray, xform_ref, status)
        if dbg is not None:
            dbg.add(gray_ref, f"gray{self.reference_dpi}")
        if status is not None:
            status.throw_if_cancelled()

        bw_ref = self.binarizer.binarize(gray_ref, status)
        if dbg is not None:
            dbg.add(bw_ref, f"bw{self.reference_dpi}")
        if status is not None:
            status.throw_if_cancelled()

        content_rect = detect_borders(bw_ref, self.params)
        fine_tune_corners(bw_ref, content_rect)
        logger.debug(f"Content rect at {self.reference_dpi} dpi: {content_rect.as_tuple()}")

        return map_to_logical(content_rect, xform_ref.transform, xform.transform)


def find_page_box(
    gray: np.ndarray,
    xform: ImageTransformation,
    dbg: Optional[DebugSink] = None,
    status: Optional[StatusToken] = None,
) -> FloatRect:
    """Detect the content box of ``gray`` with the default collaborators."""
    return PageFinder().find_page_box(gray, xform, dbg, status)
