"""Geometry value objects: rectangles, densities and affine transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

import numpy as np

from .exceptions import ValidationError


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class IntRect:
    """Integer rectangle with inclusive pixel bounds.

    The bounds are stored as given: border scanning on an all-black image
    legitimately produces ``left > right``, so no ordering is enforced.
    """
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def is_empty(self) -> bool:
        return self.left > self.right or self.top > self.bottom

    def to_float(self) -> FloatRect:
        """Return the same area as a floating rectangle (right edge exclusive)."""
        return FloatRect(float(self.left), float(self.top),
                         float(self.width), float(self.height))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.left, self.top, self.right, self.bottom)


@dataclass(frozen=True)
class FloatRect:
    """Floating-point rectangle; the default instance is the empty rectangle."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def corners(self) -> Tuple[Tuple[float, float], ...]:
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        )

    def to_rect(self) -> IntRect:
        """Round to the nearest integer rectangle."""
        left = _round_half_up(self.x)
        top = _round_half_up(self.y)
        return IntRect(
            left,
            top,
            _round_half_up(self.x + self.width) - 1,
            _round_half_up(self.y + self.height) - 1,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def bounding(cls, points: Iterable[Tuple[float, float]]) -> FloatRect:
        """Axis-aligned bounding rectangle of the given points."""
        pts = list(points)
        if not pts:
            return cls()
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


@dataclass(frozen=True)
class Dpi:
    """Pixel density along each axis."""
    horizontal: float
    vertical: float

    @property
    def is_null(self) -> bool:
        return self.horizontal <= 0 or self.vertical <= 0


class AffineTransform:
    """2-D affine transform over a 3x3 matrix, column-vector convention.

    ``a.then(b)`` maps a point through ``a`` first and ``b`` second.
    """

    def __init__(self, matrix: np.ndarray) -> None:
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape == (2, 3):
            matrix = np.vstack([matrix, [0.0, 0.0, 1.0]])
        if matrix.shape != (3, 3):
            raise ValidationError(
                "Affine matrix must be 2x3 or 3x3", shape=matrix.shape
            )
        self.matrix = matrix

    @classmethod
    def identity(cls) -> AffineTransform:
        return cls(np.eye(3))

    @classmethod
    def scaling(cls, sx: float, sy: float) -> AffineTransform:
        return cls(np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]]))

    @classmethod
    def translation(cls, dx: float, dy: float) -> AffineTransform:
        return cls(np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]]))

    @classmethod
    def rotation(cls, degrees: float) -> AffineTransform:
        """Clockwise rotation about the origin in image coordinates (y down)."""
        # Exact values for right angles keep orthogonal rotations pixel-exact.
        quarter_turns = degrees / 90.0
        if quarter_turns == int(quarter_turns):
            cos, sin = [(1, 0), (0, 1), (-1, 0), (0, -1)][int(quarter_turns) % 4]
        else:
            rad = math.radians(degrees)
            cos, sin = math.cos(rad), math.sin(rad)
        return cls(np.array([[cos, -sin, 0.0], [sin, cos, 0.0], [0.0, 0.0, 1.0]]))

    def then(self, other: AffineTransform) -> AffineTransform:
        return AffineTransform(other.matrix @ self.matrix)

    @property
    def determinant(self) -> float:
        return float(np.linalg.det(self.matrix[:2, :2]))

    @property
    def is_invertible(self) -> bool:
        return abs(self.determinant) > 1e-12

    def inverted(self) -> AffineTransform:
        if not self.is_invertible:
            raise ValidationError("Transform is not invertible",
                                  determinant=self.determinant)
        return AffineTransform(np.linalg.inv(self.matrix))

    def map_point(self, x: float, y: float) -> Tuple[float, float]:
        px, py, _ = self.matrix @ np.array([x, y, 1.0])
        return float(px), float(py)

    def map_rect(self, rect: FloatRect) -> FloatRect:
        """Map the four corners of ``rect`` and return their bounding box."""
        return FloatRect.bounding(self.map_point(x, y) for x, y in rect.corners())

    def to_cv2(self) -> np.ndarray:
        """2x3 matrix in the layout ``cv2.warpAffine`` expects."""
        return self.matrix[:2, :].copy()

    def is_identity(self, tol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, np.eye(3), atol=tol))

    def __repr__(self) -> str:
        return f"AffineTransform({self.matrix[:2].tolist()})"
