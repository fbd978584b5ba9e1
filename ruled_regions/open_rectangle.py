"""Rectangles missing one border, and the repair of broken vertical rules.

Scanned or exported tables often have vertical rules that break between
rows, so the sweep only sees a BOTTOM-open rectangle above the break and a
TOP-open rectangle below it. ``combine_horizontally_open_rectangles`` splices
such collinear verticals back together (when the caller allows it) and sweeps
again to recover the closed rectangles.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from .config import CONTEXT_LIMIT, SEPARATION_EPSILON
from .elements import HorizontalLine, InvalidGeometryError, Line, Rectangle, VerticalLine
from .geometry_utils import filter_valid_rectangles, is_close
from .logging_config import get_logger
from .sorted_lines import SortedLineMap

logger = get_logger(__name__)

CombineCondition = Callable[[VerticalLine, VerticalLine], bool]


class OpenSide(Enum):
    """The border an open rectangle is missing."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def complementary(self) -> "OpenSide":
        return _COMPLEMENTARY[self]

    @property
    def is_horizontal(self) -> bool:
        """True for the sides drawn by a horizontal line."""
        return self in (OpenSide.TOP, OpenSide.BOTTOM)

    def find_closing_border(self, open_rectangle: "OpenRectangle") -> Line:
        """Synthesize the missing border from the three known ones.

        The closing border never overshoots: TOP starts at the lower of the two
        vertical tops, BOTTOM at the higher of the two vertical bottoms, and
        LEFT/RIGHT mirror that on the x axis.
        """
        left = open_rectangle.left_border
        right = open_rectangle.right_border
        top = open_rectangle.top_border
        bottom = open_rectangle.bottom_border
        if self is OpenSide.TOP:
            top_y = max(left.top, right.top)  # type: ignore[union-attr]
            return HorizontalLine(top_y, left.left, open_rectangle.find_width())  # type: ignore[union-attr]
        if self is OpenSide.BOTTOM:
            bottom_y = min(left.bottom, right.bottom)  # type: ignore[union-attr]
            return HorizontalLine(bottom_y, left.left, open_rectangle.find_width())  # type: ignore[union-attr]
        if self is OpenSide.LEFT:
            left_x = max(top.left, bottom.left)  # type: ignore[union-attr]
            return VerticalLine(top.top, left_x, open_rectangle.find_height())  # type: ignore[union-attr]
        right_x = min(top.right, bottom.right)  # type: ignore[union-attr]
        return VerticalLine(top.top, right_x, open_rectangle.find_height())  # type: ignore[union-attr]

    def combine_rectangles(
        self, open_rectangle: "OpenRectangle", opposite: "OpenRectangle"
    ) -> List[Rectangle]:
        """Combine ``open_rectangle`` with one open on the complementary side."""
        if self is OpenSide.BOTTOM:
            return combine_open_rectangle_pair(open_rectangle, opposite)
        if self is OpenSide.TOP:
            return combine_open_rectangle_pair(opposite, open_rectangle)
        return []


_COMPLEMENTARY: Dict[OpenSide, OpenSide] = {
    OpenSide.TOP: OpenSide.BOTTOM,
    OpenSide.BOTTOM: OpenSide.TOP,
    OpenSide.LEFT: OpenSide.RIGHT,
    OpenSide.RIGHT: OpenSide.LEFT,
}


class OpenRectangle:
    """A rectangle known by three of its borders.

    The borders are references to swept lines; the missing one is computed by
    ``find_closing_border`` and never stored.
    """

    __slots__ = ("open_side", "left_border", "right_border", "top_border", "bottom_border")

    def __init__(self, open_side: OpenSide) -> None:
        self.open_side = open_side
        self.left_border: Optional[VerticalLine] = None
        self.right_border: Optional[VerticalLine] = None
        self.top_border: Optional[HorizontalLine] = None
        self.bottom_border: Optional[HorizontalLine] = None

    def _check_not_open(self, side: OpenSide) -> None:
        if self.open_side is side:
            raise InvalidGeometryError(
                f"{side.name.title()} border can not be set for OpenSide.{side.name} OpenRectangle"
            )

    def fix_left_border(self, left_border: VerticalLine) -> "OpenRectangle":
        self._check_not_open(OpenSide.LEFT)
        self.left_border = left_border
        return self

    def fix_right_border(self, right_border: VerticalLine) -> "OpenRectangle":
        self._check_not_open(OpenSide.RIGHT)
        self.right_border = right_border
        return self

    def fix_top_border(self, top_border: HorizontalLine) -> "OpenRectangle":
        self._check_not_open(OpenSide.TOP)
        self.top_border = top_border
        return self

    def fix_bottom_border(self, bottom_border: HorizontalLine) -> "OpenRectangle":
        self._check_not_open(OpenSide.BOTTOM)
        self.bottom_border = bottom_border
        return self

    def find_width(self) -> float:
        """Distance between the vertical borders.

        Raises:
            InvalidGeometryError: If a vertical border is the open side.
        """
        if not self.open_side.is_horizontal:
            raise InvalidGeometryError(
                f"Width can not be calculated for OpenSide.{self.open_side.name} OpenRectangle"
            )
        return self.right_border.left - self.left_border.left  # type: ignore[union-attr]

    def find_height(self) -> float:
        """Distance between the horizontal borders.

        Raises:
            InvalidGeometryError: If a horizontal border is the open side.
        """
        if self.open_side.is_horizontal:
            raise InvalidGeometryError(
                f"Height can not be calculated for OpenSide.{self.open_side.name} OpenRectangle"
            )
        return self.bottom_border.top - self.top_border.top  # type: ignore[union-attr]

    def find_closing_border(self) -> Line:
        return self.open_side.find_closing_border(self)

    def create_closed_rectangle(self) -> Rectangle:
        """Materialize the rectangle using the synthesized closing border."""
        borders: Dict[OpenSide, Optional[Line]] = {
            OpenSide.LEFT: self.left_border,
            OpenSide.RIGHT: self.right_border,
            OpenSide.TOP: self.top_border,
            OpenSide.BOTTOM: self.bottom_border,
        }
        borders[self.open_side] = self.find_closing_border()
        left_x = borders[OpenSide.LEFT].left  # type: ignore[union-attr]
        right_x = borders[OpenSide.RIGHT].left  # type: ignore[union-attr]
        top_y = borders[OpenSide.TOP].top  # type: ignore[union-attr]
        bottom_y = borders[OpenSide.BOTTOM].top  # type: ignore[union-attr]
        return Rectangle(left_x, top_y, right_x - left_x, bottom_y - top_y)

    @property
    def vertical_borders(self) -> List[VerticalLine]:
        return [line for line in (self.left_border, self.right_border) if line is not None]

    @property
    def horizontal_borders(self) -> List[HorizontalLine]:
        return [line for line in (self.top_border, self.bottom_border) if line is not None]

    def __repr__(self) -> str:
        return (
            f"OpenRectangle({self.open_side.name}, left={self.left_border!r}, "
            f"right={self.right_border!r}, top={self.top_border!r}, "
            f"bottom={self.bottom_border!r})"
        )


def combine_open_rectangle_pair(
    bottom_open: OpenRectangle, top_open: OpenRectangle
) -> List[Rectangle]:
    """Close a BOTTOM-open rectangle and the TOP-open one below it.

    Returns the valid ones among (above, middle splice, below) when both
    rectangles share their vertical borders' x within epsilon, else nothing.
    """
    if not (
        is_close(bottom_open.left_border.left, top_open.left_border.left)  # type: ignore[union-attr]
        and is_close(bottom_open.right_border.left, top_open.right_border.left)  # type: ignore[union-attr]
    ):
        return []
    above = bottom_open.create_closed_rectangle()
    below = top_open.create_closed_rectangle()
    middle = Rectangle.from_bounds(above.min_x, above.max_y, above.max_x, below.min_y)
    return filter_valid_rectangles([above, middle, below])


def _collect_vertical_borders(open_rectangles: Sequence[OpenRectangle]) -> List[VerticalLine]:
    return [line for rectangle in open_rectangles for line in rectangle.vertical_borders]


def _sorted_by_x_then_y(lines: Sequence[VerticalLine]) -> SortedLineMap:
    sorted_lines: SortedLineMap = SortedLineMap()
    for line in lines:
        sorted_lines.add((line.left, line.top), line)
    return sorted_lines


def combine_horizontally_open_rectangles(
    horizontally_open_rectangles: Sequence[OpenRectangle],
    combine_condition: CombineCondition,
) -> List[Rectangle]:
    """Repair rectangles split by broken vertical rules.

    Every vertical border of a BOTTOM-open rectangle is a pivot. TOP-open
    vertical borders on the same x that start below the pivot's end are
    spliced with it when ``combine_condition(pivot, candidate)`` holds. The
    spliced verticals and all horizontal borders are swept again; the result
    is the rectangles found by that sweep followed by the internal rectangles
    recovered from the broken pieces themselves.

    Args:
        horizontally_open_rectangles: TOP- and BOTTOM-open rectangles, as
            returned by a ``RectangleFinder``.
        combine_condition: Predicate deciding whether an upper and a lower
            vertical segment are one physical rule.

    Returns:
        Combined rectangles followed by their internal rectangles.
    """
    from .rectangle_finder import RectangleFinder

    bottom_open = [r for r in horizontally_open_rectangles if r.open_side is OpenSide.BOTTOM]
    top_open = [r for r in horizontally_open_rectangles if r.open_side is OpenSide.TOP]
    pivot_lines = _collect_vertical_borders(bottom_open)
    top_open_lines = _sorted_by_x_then_y(_collect_vertical_borders(top_open))

    all_vertical_borders = _collect_vertical_borders(horizontally_open_rectangles)
    # insertion-ordered set
    combined_vertical_lines: Dict[VerticalLine, None] = dict.fromkeys(all_vertical_borders)

    if top_open_lines:
        left_most_x = top_open_lines.first().left
        right_most_x = top_open_lines.last().left
        for pivot in pivot_lines:
            pivot_x = pivot.left
            if not (
                pivot_x + SEPARATION_EPSILON >= left_most_x
                and pivot_x - SEPARATION_EPSILON < right_most_x
            ):
                continue
            lower_bound = (pivot_x - SEPARATION_EPSILON, pivot.top - CONTEXT_LIMIT)
            upper_bound = (pivot_x + SEPARATION_EPSILON, pivot.bottom)
            for collinear in top_open_lines.sub_map(lower_bound, upper_bound):
                if collinear.top + SEPARATION_EPSILON > pivot.bottom and combine_condition(
                    pivot, collinear
                ):
                    combined_vertical_lines.pop(pivot, None)
                    combined_vertical_lines.pop(collinear, None)
                    spliced = VerticalLine(pivot.top, pivot_x, collinear.bottom - pivot.top)
                    combined_vertical_lines[spliced] = None
                    logger.debug("Spliced %r with %r", pivot, collinear)

    horizontal_lines = list(
        dict.fromkeys(
            line for rectangle in horizontally_open_rectangles for line in rectangle.horizontal_borders
        )
    )
    combined_rectangles = RectangleFinder(horizontal_lines, combined_vertical_lines).found_rectangles
    internal_rectangles = find_internal_rectangles(combined_rectangles, all_vertical_borders)
    return combined_rectangles + internal_rectangles


def find_internal_rectangles(
    combined_rectangles: Sequence[Rectangle],
    broken_lines: Sequence[VerticalLine],
) -> List[Rectangle]:
    """Recover the row pieces swallowed when broken verticals were spliced.

    For each combined rectangle, every broken line lying inside its
    footprint and shorter than its full height yields the sub-rectangle
    spanning the rectangle's width over that line's extent. Pieces repeated
    by the left and right borders are reported once.
    """
    sorted_broken_lines = _sorted_by_x_then_y(broken_lines)
    internal_rectangles: List[Rectangle] = []
    for rectangle in combined_rectangles:
        pieces: List[Rectangle] = []
        window = sorted_broken_lines.sub_map(
            (rectangle.min_x - SEPARATION_EPSILON, float("-inf")),
            (rectangle.max_x + SEPARATION_EPSILON, float("inf")),
        )
        for line in window:
            if (
                line.top < rectangle.min_y - SEPARATION_EPSILON
                or line.bottom > rectangle.max_y + SEPARATION_EPSILON
            ):
                continue
            if is_close(line.top, rectangle.min_y) and is_close(line.bottom, rectangle.max_y):
                continue
            piece = Rectangle(rectangle.min_x, line.top, rectangle.width, line.stretch)
            if any(
                is_close(piece.min_y, seen.min_y) and is_close(piece.height, seen.height)
                for seen in pieces
            ):
                continue
            pieces.append(piece)
        internal_rectangles.extend(filter_valid_rectangles(pieces))
    return internal_rectangles


__all__ = [
    "CombineCondition",
    "OpenRectangle",
    "OpenSide",
    "combine_horizontally_open_rectangles",
    "combine_open_rectangle_pair",
    "find_internal_rectangles",
]
