"""Content Box Processors Module.

This module provides the image processing components used by page box
detection: rendering at reference resolution, binarization, border
scanning and corner refinement.
"""

# Base processor
from .base import BaseProcessor

# Image I/O
from .image_io import (
    load_image,
    load_grayscale_image,
    save_image,
    read_image_dpi,
    get_image_files,
)

# Normalization
from .normalize import (
    GrayNormalizer,
    darkest_gray_level,
    transform_to_gray,
)

# Binarization
from .binarize import (
    OtsuBinarizer,
    binarize_otsu,
)

# Border scanning
from .border_scan import (
    Axis,
    ScanSpec,
    ScanParameters,
    DEFAULT_SCAN_PARAMETERS,
    scan_specs,
    detect_edge,
    detect_borders,
)

# Corner refinement
from .corner_refine import (
    fine_tune_corner,
    fine_tune_corners,
)

__all__ = [
    # Base
    "BaseProcessor",

    # Image I/O
    "load_image",
    "load_grayscale_image",
    "save_image",
    "read_image_dpi",
    "get_image_files",

    # Normalization
    "GrayNormalizer",
    "darkest_gray_level",
    "transform_to_gray",

    # Binarization
    "OtsuBinarizer",
    "binarize_otsu",

    # Border scanning
    "Axis",
    "ScanSpec",
    "ScanParameters",
    "DEFAULT_SCAN_PARAMETERS",
    "scan_specs",
    "detect_edge",
    "detect_borders",

    # Corner refinement
    "fine_tune_corner",
    "fine_tune_corners",
]
