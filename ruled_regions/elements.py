"""Value types for ruling segments and rectangles in page coordinates.

Coordinates are in points with y growing downwards. All types are frozen:
merging or clipping a segment always yields a new value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from .geometry_utils import (
    is_valid_rectangle,
    pymupdf_rect_to_tuple,
    tuple_to_pymupdf_rect,
)


class InvalidGeometryError(ValueError):
    """Raised when a caller asks for geometry that an object cannot provide."""


@dataclass(frozen=True, slots=True)
class HorizontalLine:
    """Horizontal ruling segment starting at (left, top) and ``stretch`` long."""

    top: float
    left: float
    stretch: float

    @property
    def right(self) -> float:
        return self.left + self.stretch


@dataclass(frozen=True, slots=True)
class VerticalLine:
    """Vertical ruling segment starting at (left, top) and ``stretch`` long."""

    top: float
    left: float
    stretch: float

    @property
    def bottom(self) -> float:
        return self.top + self.stretch


Line = Union[HorizontalLine, VerticalLine]


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Axis-aligned rectangle given by its top-left corner and size."""

    min_x: float
    min_y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, x0: float, y0: float, x1: float, y1: float) -> "Rectangle":
        return cls(x0, y0, x1 - x0, y1 - y0)

    @classmethod
    def from_pymupdf(cls, rect: Any) -> "Rectangle":
        """Build a rectangle from a ``pymupdf.Rect`` or an (x0, y0, x1, y1) tuple."""
        return cls.from_bounds(*pymupdf_rect_to_tuple(rect))

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    def is_valid(self) -> bool:
        """True when both sides are longer than the separation epsilon."""
        return is_valid_rectangle(self.width, self.height)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return (x0, y0, x1, y1)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def to_pymupdf(self) -> Any:
        return tuple_to_pymupdf_rect(self.as_tuple())

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.min_x,
            "y": self.min_y,
            "width": self.width,
            "height": self.height,
        }


__all__ = [
    "HorizontalLine",
    "InvalidGeometryError",
    "Line",
    "Rectangle",
    "VerticalLine",
]
