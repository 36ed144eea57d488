"""In-memory collection of debug images."""

import logging
from pathlib import Path
from typing import Dict, List, Tuple, Union

import cv2
import numpy as np

from .exceptions import ImageSaveError
from .raster import BinaryImage

logger = logging.getLogger(__name__)


class DebugImages:
    """Debug sink that keeps labelled snapshots in insertion order."""

    def __init__(self) -> None:
        self._images: Dict[str, np.ndarray] = {}

    def add(self, image: Union[np.ndarray, BinaryImage], label: str) -> None:
        """Store a copy of ``image`` under ``label``."""
        if isinstance(image, BinaryImage):
            self._images[label] = image.to_array()
        else:
            self._images[label] = np.array(image, copy=True)

    @property
    def labels(self) -> List[str]:
        return list(self._images)

    def items(self) -> List[Tuple[str, np.ndarray]]:
        return list(self._images.items())

    def clear(self) -> None:
        self._images = {}

    def __len__(self) -> int:
        return len(self._images)

    def save_to_dir(
        self,
        debug_dir: Path,
        prefix: str = "",
        image_format: str = "png",
        quality: int = 95,
    ) -> List[Path]:
        """Save all stored images to ``debug_dir``.

        Returns:
            Paths of the written files
        """
        if not self._images:
            return []

        debug_dir = Path(debug_dir)
        debug_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for name, image in self._images.items():
            filename = f"{prefix}_{name}.{image_format}" if prefix else f"{name}.{image_format}"
            filepath = debug_dir / filename

            if image_format in ("jpg", "jpeg"):
                ok = cv2.imwrite(str(filepath), image, [cv2.IMWRITE_JPEG_QUALITY, quality])
            else:
                ok = cv2.imwrite(str(filepath), image)
            if not ok:
                raise ImageSaveError("Could not write debug image", image_path=str(filepath))
            written.append(filepath)

        logger.debug(f"Saved {len(written)} debug images to {debug_dir}")
        return written
