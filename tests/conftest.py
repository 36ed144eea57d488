"""
Pytest configuration and shared fixtures for content box tests.

Provides synthetic scans, in-memory collaborators and logging setup for
all test modules.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Generator, List
import numpy as np

from content_box.raster import BinaryImage
from content_box.utils.logging_utils import setup_logging


class CountingBinaryImage(BinaryImage):
    """Binary image that counts pixel reads."""

    def __init__(self, black: np.ndarray) -> None:
        super().__init__(black)
        self.reads = 0

    def is_black(self, x: int, y: int) -> bool:
        self.reads += 1
        return super().is_black(x, y)


class FakeNormalizer:
    """Normalizer returning a prepared reference image."""

    def __init__(self, reference: np.ndarray) -> None:
        self.reference = reference
        self.calls: List[tuple] = []

    def to_reference_gray(self, gray, xform, status=None):
        self.calls.append((gray, xform))
        return self.reference


class FakeBinarizer:
    """Binarizer returning a prepared binary image."""

    def __init__(self, binary: BinaryImage) -> None:
        self.binary = binary
        self.calls = 0

    def binarize(self, gray, status=None):
        self.calls += 1
        return self.binary


def make_framed_page(
    width: int = 400, height: int = 300, frame: int = 50,
    page_value: int = 255, frame_value: int = 0
) -> np.ndarray:
    """Gray page surrounded by a dark scan border ``frame`` pixels wide."""
    image = np.full((height, width), frame_value, dtype=np.uint8)
    image[frame:height - frame, frame:width - frame] = page_value
    return image


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def framed_page() -> np.ndarray:
    """400x300 white page at 150 dpi with a 50 pixel black border."""
    return make_framed_page()


@pytest.fixture
def framed_binary(framed_page: np.ndarray) -> CountingBinaryImage:
    """Binarized version of ``framed_page``."""
    return CountingBinaryImage(framed_page == 0)


@pytest.fixture
def black_rect_on_white() -> CountingBinaryImage:
    """400x300 white image with a black rectangle from (50,50) to (349,249)."""
    black = np.zeros((300, 400), dtype=bool)
    black[50:250, 50:350] = True
    return CountingBinaryImage(black)


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Plain console logging for tests."""
    setup_logging(level="DEBUG", use_rich=False, format_style="simple")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (deselect with '-m \"not unit\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if item.path.parent.name == "unit":
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)
