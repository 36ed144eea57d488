"""Border scanning: locate the dark scan border on each side of a page."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from ..exceptions import ValidationError
from ..geometry import IntRect
from ..raster import BinaryImage

GOLDEN_RATIO = 0.382
BAND_DIVISOR = 4
MIN_GAP = 20


class Axis(Enum):
    """Orientation of the sampling band.

    ``HORIZONTAL`` scans advance along x and sample a band of rows;
    ``VERTICAL`` scans advance along y and sample a band of columns.
    """
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class ScanParameters:
    """Tunables of the border scan heuristic."""
    golden_ratio: float = GOLDEN_RATIO
    band_divisor: int = BAND_DIVISOR
    min_gap: int = MIN_GAP


DEFAULT_SCAN_PARAMETERS = ScanParameters()


@dataclass(frozen=True)
class ScanSpec:
    """One directional edge scan, from ``start`` towards ``end`` (exclusive)."""
    start: int
    end: int
    increment: int
    mid: int
    axis: Axis


def scan_specs(
    width: int, height: int, params: ScanParameters = DEFAULT_SCAN_PARAMETERS
) -> List[ScanSpec]:
    """Return the left, top, right and bottom scans for an image.

    The bottom scan's ``end`` is a placeholder: :func:`detect_borders`
    replaces it with the detected top edge.
    """
    right = width - 1
    bottom = height - 1
    xmid = int(right * params.golden_ratio)
    ymid = int(bottom * params.golden_ratio)
    return [
        ScanSpec(0, right, 1, ymid, Axis.HORIZONTAL),
        ScanSpec(0, bottom, 1, xmid, Axis.VERTICAL),
        ScanSpec(right, 0, -1, ymid, Axis.HORIZONTAL),
        ScanSpec(bottom, 0, -1, xmid, Axis.VERTICAL),
    ]


def detect_edge(
    image: BinaryImage,
    spec: ScanSpec,
    params: ScanParameters = DEFAULT_SCAN_PARAMETERS,
) -> int:
    """Shift an edge inward while the band around ``spec.mid`` is black.

    Every scan line samples the band ``[mid - mid/d, mid + mid/d)``. A black
    sample moves the edge to the current line and clears the gap counter. A
    line without black samples grows the gap by one; once the gap exceeds
    ``params.min_gap`` the scan has left the border and stops.

    Args:
        image: Binarized page
        spec: Direction, range and band position of the scan
        params: Scan tunables

    Returns:
        Position of the last scan line that still touched black, or
        ``spec.start`` if none did.
    """
    half_band = int(spec.mid / params.band_divisor)
    band_start = spec.mid - half_band
    band_end = spec.mid + half_band

    gap = 0
    edge = spec.start
    i = spec.start
    while i != spec.end:
        old_gap = gap
        for j in range(band_start, band_end):
            if spec.axis is Axis.HORIZONTAL:
                black = image.is_black(i, j)
            else:
                black = image.is_black(j, i)
            if black:
                edge = i
                gap = 0
                break
            if gap == old_gap:
                gap += 1
        if gap > params.min_gap:
            break
        i += spec.increment

    return edge


def detect_borders(
    image: BinaryImage, params: ScanParameters = DEFAULT_SCAN_PARAMETERS
) -> IntRect:
    """Scan all four sides of ``image`` and return the enclosed rectangle.

    Args:
        image: Binarized page at reference resolution
        params: Scan tunables

    Returns:
        Rectangle between the detected left, top, right and bottom edges

    Raises:
        ValidationError: If the image has no pixels
    """
    if image.width == 0 or image.height == 0:
        raise ValidationError("Cannot scan borders of an empty image",
                              width=image.width, height=image.height)

    left_spec, top_spec, right_spec, bottom_spec = scan_specs(
        image.width, image.height, params
    )
    left = detect_edge(image, left_spec, params)
    top = detect_edge(image, top_spec, params)
    right = detect_edge(image, right_spec, params)
    bottom = detect_edge(
        image,
        ScanSpec(bottom_spec.start, top, bottom_spec.increment,
                 bottom_spec.mid, bottom_spec.axis),
        params,
    )
    return IntRect(left, top, right, bottom)
