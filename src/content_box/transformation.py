"""Source-to-logical image transformation.

An :class:`ImageTransformation` describes how the pixels of a source scan
map into the logical page space: an optional scale to a target density, a
rotation about the origin, and a translation that moves the transformed
source extent back to the origin.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .geometry import AffineTransform, Dpi, FloatRect


@dataclass(frozen=True)
class ImageTransformation:
    """Source pixel space to logical space."""
    orig_rect: FloatRect
    orig_dpi: Dpi
    rotation: float = 0.0
    target_dpi: Optional[Dpi] = None

    @classmethod
    def for_image(cls, image: np.ndarray, dpi: Dpi,
                  rotation: float = 0.0) -> ImageTransformation:
        height, width = image.shape[:2]
        return cls(FloatRect(0.0, 0.0, float(width), float(height)), dpi, rotation)

    @property
    def transform(self) -> AffineTransform:
        xform = AffineTransform.identity()
        if self.target_dpi is not None:
            # A null source density collapses the extent to nothing.
            if self.orig_dpi.is_null:
                sx = sy = 0.0
            else:
                sx = self.target_dpi.horizontal / self.orig_dpi.horizontal
                sy = self.target_dpi.vertical / self.orig_dpi.vertical
            xform = xform.then(AffineTransform.scaling(sx, sy))
        if self.rotation:
            xform = xform.then(AffineTransform.rotation(self.rotation))
        bounds = xform.map_rect(self.orig_rect)
        return xform.then(AffineTransform.translation(-bounds.x, -bounds.y))

    @property
    def resulting_rect(self) -> FloatRect:
        """The source extent in the transformed space."""
        return self.transform.map_rect(self.orig_rect)

    def pre_scale_to_dpi(self, dpi: Dpi) -> ImageTransformation:
        """Same transformation, but producing an image at ``dpi``."""
        return replace(self, target_dpi=dpi)

    def rotated(self, degrees: float) -> ImageTransformation:
        return replace(self, rotation=degrees)
