"""Base processor class and common utilities for image processors."""

from typing import Any
import numpy as np
from abc import ABC, abstractmethod

from ..exceptions import ValidationError


class BaseProcessor(ABC):
    """Base class for all image processors."""

    @abstractmethod
    def process(self, image: np.ndarray, **kwargs) -> Any:
        """Process an image. Must be implemented by subclasses."""
        pass

    def validate_image(self, image: np.ndarray) -> None:
        """Validate that the input is a non-empty single-channel image."""
        if image is None:
            raise ValidationError("Image cannot be None")
        if not isinstance(image, np.ndarray):
            raise ValidationError("Image must be a numpy array",
                                  type=type(image).__name__)
        if image.size == 0:
            raise ValidationError("Image cannot be empty")
        if image.ndim != 2:
            raise ValidationError("Image must be grayscale", shape=image.shape)
