"""Capability interfaces for the collaborators of page box detection.

The detector only needs to render a reference-resolution grayscale image,
threshold it, optionally hand intermediate images to a debug sink and
check for cancellation. Anything satisfying these protocols can be plugged
in, which keeps the scan heuristic testable with in-memory fakes.
"""

from __future__ import annotations

from typing import Optional, Protocol, Union, runtime_checkable

import numpy as np

from .raster import BinaryImage
from .transformation import ImageTransformation


@runtime_checkable
class StatusToken(Protocol):
    """Cooperative cancellation handle."""

    def throw_if_cancelled(self) -> None:
        """Raise if the caller asked to abort."""
        ...


@runtime_checkable
class Normalizer(Protocol):
    """Renders a source image at reference resolution."""

    def to_reference_gray(
        self,
        gray: np.ndarray,
        xform: ImageTransformation,
        status: Optional[StatusToken] = None,
    ) -> np.ndarray:
        """Return ``gray`` rendered through ``xform.transform``.

        The output covers ``xform.resulting_rect``; areas not covered by the
        source are filled with the darkest gray level of the source.
        """
        ...


@runtime_checkable
class Binarizer(Protocol):
    """Turns a grayscale image into a two-color image."""

    def binarize(
        self, gray: np.ndarray, status: Optional[StatusToken] = None
    ) -> BinaryImage:
        ...


@runtime_checkable
class DebugSink(Protocol):
    """Write-only receiver of named intermediate images."""

    def add(self, image: Union[np.ndarray, BinaryImage], label: str) -> None:
        ...
