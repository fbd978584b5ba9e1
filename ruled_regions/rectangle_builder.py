"""Rectangles sharing one candidate left border."""

from __future__ import annotations

from typing import Iterable, List

from .config import SEPARATION_EPSILON
from .elements import HorizontalLine, Rectangle, VerticalLine
from .geometry_utils import filter_valid_rectangles, is_close
from .open_rectangle import OpenRectangle, OpenSide
from .sorted_lines import SortedLineMap


def _vertical_bounds(line: VerticalLine) -> tuple[float, float]:
    lower = line.top - SEPARATION_EPSILON
    upper = lower + line.stretch + 2 * SEPARATION_EPSILON
    return lower, upper


class RectangleBuilder:
    """Collects the horizontals crossing a left border and closes rectangles on it.

    The builder keeps a snapshot of the horizontal lines that were open when
    its left border was swept, keyed by y. Later verticals are offered to it
    as right borders.
    """

    def __init__(
        self,
        left_border: VerticalLine,
        horizontal_lines: SortedLineMap[float, HorizontalLine],
    ) -> None:
        self.left_border = left_border
        self.intersecting_lines: SortedLineMap[float, HorizontalLine] = SortedLineMap()
        self.left_side_open_candidates: SortedLineMap[float, HorizontalLine] = SortedLineMap()
        self.right_side_open_candidates: SortedLineMap[float, HorizontalLine] = SortedLineMap()
        if not horizontal_lines:
            return

        lower, upper = _vertical_bounds(left_border)
        if horizontal_lines.first_key() < upper and horizontal_lines.last_key() > lower:
            valid_lines = horizontal_lines.sub_map(lower, upper)
            self.intersecting_lines.update(valid_lines)
            left_x = left_border.left
            for y, line in valid_lines.items():
                if line.right > left_x + SEPARATION_EPSILON:
                    self.right_side_open_candidates.add(y, line)
                if line.left < left_x - SEPARATION_EPSILON:
                    self.left_side_open_candidates.add(y, line)

    def _shares_left_border_x(self, right_border: VerticalLine) -> bool:
        return is_close(right_border.left, self.left_border.left)

    def find_intersecting_borders(self, right_border: VerticalLine) -> List[HorizontalLine]:
        """Return, top to bottom, the snapshot lines that reach ``right_border``."""
        borders: List[HorizontalLine] = []
        if self._shares_left_border_x(right_border) or not self.intersecting_lines:
            return borders

        lower, upper = _vertical_bounds(right_border)
        top_y = self.intersecting_lines.first_key()
        bottom_y = self.intersecting_lines.last_key()
        if top_y < upper and bottom_y > lower:
            right_x = right_border.left
            for line in self.intersecting_lines.sub_map(lower, upper):
                if line.left - SEPARATION_EPSILON <= right_x <= line.right + SEPARATION_EPSILON:
                    borders.append(line)
        return borders

    def create_rectangles_with_right_border(
        self,
        right_border: VerticalLine,
        intersecting_borders: List[HorizontalLine],
    ) -> List[Rectangle]:
        """Build one rectangle per consecutive pair of intersecting borders."""
        if self._shares_left_border_x(right_border):
            return []
        left_x = self.left_border.left
        width = right_border.left - left_x
        candidates = [
            Rectangle(left_x, top.top, width, bottom.top - top.top)
            for top, bottom in zip(intersecting_borders, intersecting_borders[1:])
        ]
        return filter_valid_rectangles(candidates)

    def get_horizontally_open_rectangles(
        self,
        right_border: VerticalLine,
        intersecting_borders: List[HorizontalLine],
    ) -> List[OpenRectangle]:
        """Open rectangles left above the first or below the last intersecting border.

        A TOP-open rectangle appears when both verticals rise more than epsilon
        above the topmost border; BOTTOM-open when both descend more than
        epsilon below the bottommost one.
        """
        open_rectangles: List[OpenRectangle] = []
        if self._shares_left_border_x(right_border) or not intersecting_borders:
            return open_rectangles

        left_border = self.left_border
        top_most = intersecting_borders[0]
        if (
            top_most.top > left_border.top + SEPARATION_EPSILON
            and top_most.top > right_border.top + SEPARATION_EPSILON
        ):
            open_rectangles.append(
                OpenRectangle(OpenSide.TOP)
                .fix_left_border(left_border)
                .fix_right_border(right_border)
                .fix_bottom_border(top_most)
            )
        bottom_most = intersecting_borders[-1]
        if (
            bottom_most.top < left_border.bottom - SEPARATION_EPSILON
            and bottom_most.top < right_border.bottom - SEPARATION_EPSILON
        ):
            open_rectangles.append(
                OpenRectangle(OpenSide.BOTTOM)
                .fix_left_border(left_border)
                .fix_right_border(right_border)
                .fix_top_border(bottom_most)
            )
        return open_rectangles

    def remove_right_side_closed_lines(self, lines: Iterable[HorizontalLine]) -> None:
        for line in lines:
            self.right_side_open_candidates.discard(line.top)

    def remove_left_side_closed_lines(self, lines: Iterable[HorizontalLine]) -> None:
        for line in lines:
            self.left_side_open_candidates.discard(line.top)

    def get_right_side_open_rectangles(self) -> List[OpenRectangle]:
        """Return the largest RIGHT-open rectangle hanging off the left border, if any."""
        if not self.right_side_open_candidates:
            return []
        top_border = self.right_side_open_candidates.first()
        bottom_border = self.right_side_open_candidates.last()
        if abs(top_border.top - bottom_border.top) <= SEPARATION_EPSILON:
            return []
        return [
            OpenRectangle(OpenSide.RIGHT)
            .fix_left_border(self.left_border)
            .fix_top_border(top_border)
            .fix_bottom_border(bottom_border)
        ]

    def __repr__(self) -> str:
        return (
            f"RectangleBuilder(left_border={self.left_border!r}, "
            f"lines={len(self.intersecting_lines)})"
        )


__all__ = ["RectangleBuilder"]
