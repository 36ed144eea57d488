"""Content box detection for scanned pages."""

__version__ = "1.0.0"
__author__ = "Content Box Team"

from .geometry import AffineTransform, Dpi, FloatRect, IntRect
from .page_finder import PageFinder, find_page_box
from .transformation import ImageTransformation

__all__ = [
    "AffineTransform",
    "Dpi",
    "FloatRect",
    "IntRect",
    "ImageTransformation",
    "PageFinder",
    "find_page_box",
]
