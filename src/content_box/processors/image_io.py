"""Image I/O utilities for loading and saving images."""

import logging
from pathlib import Path
from typing import List, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageLoadError, ImageSaveError
from ..geometry import Dpi

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".tif", ".tiff", ".bmp"]


def load_image(image_path: PathLike) -> np.ndarray:
    """Load a color image from file.

    Raises:
        ImageLoadError: If image cannot be loaded
    """
    return _read(image_path, cv2.IMREAD_COLOR)


def load_grayscale_image(image_path: PathLike) -> np.ndarray:
    """Load an image from file as 8-bit grayscale.

    Raises:
        ImageLoadError: If image cannot be loaded
    """
    return _read(image_path, cv2.IMREAD_GRAYSCALE)


def _read(image_path: PathLike, flags: int) -> np.ndarray:
    path = Path(image_path)
    if not path.exists():
        raise ImageLoadError("Image file not found", image_path=str(path))

    image = cv2.imread(str(path), flags)
    if image is None:
        raise ImageLoadError("Could not load image", image_path=str(path))

    logger.debug(f"Loaded image: {path} ({image.shape}, dtype={image.dtype})")
    return image


def save_image(image: np.ndarray, output_path: PathLike) -> None:
    """Save image to file.

    Args:
        image: Image array to save
        output_path: Path where to save the image

    Raises:
        ImageSaveError: If image is None or empty, or writing fails
    """
    output_path = Path(output_path)
    if image is None:
        raise ImageSaveError("Cannot save None as image", image_path=str(output_path))

    if image.size == 0:
        raise ImageSaveError("Cannot save empty image", image_path=str(output_path))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), image):
        raise ImageSaveError("Could not write image", image_path=str(output_path))


def read_image_dpi(image_path: PathLike, default: float) -> Dpi:
    """Read the pixel density stored in an image file.

    Falls back to ``default`` on both axes when the file carries no usable
    density.
    """
    try:
        with Image.open(image_path) as img:
            dpi = img.info.get("dpi")
    except (OSError, UnidentifiedImageError) as e:
        logger.debug(f"Could not read DPI from {image_path}: {e}")
        dpi = None

    if dpi and len(dpi) == 2:
        x_dpi, y_dpi = float(dpi[0]), float(dpi[1])
        if x_dpi > 1 and y_dpi > 1:
            return Dpi(x_dpi, y_dpi)
    return Dpi(default, default)


def get_image_files(directory: PathLike) -> List[Path]:
    """Get all image files from directory.

    Args:
        directory: Directory to search for images

    Returns:
        List of paths to image files, sorted
    """
    directory = Path(directory)
    image_files = set()  # Use set to avoid duplicates on case-insensitive filesystems

    for ext in IMAGE_EXTENSIONS:
        image_files.update(directory.glob(f"*{ext}"))
        image_files.update(directory.glob(f"*{ext.upper()}"))

    return sorted(image_files)
