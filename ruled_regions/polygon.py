"""Grouping of adjacent rectangles into rectilinear polygons.

A rectilinear polygon here is the union of rectangles whose borders touch;
its outline is kept as two sorted border collections, horizontal borders by
(y, x) and vertical borders by (x, y). Polygons only grow.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .config import SEPARATION_EPSILON
from .elements import HorizontalLine, Rectangle, VerticalLine
from .geometry_utils import count_distinct, spans_overlap
from .logging_config import get_logger
from .sorted_lines import SortedLineMap

logger = get_logger(__name__)


class RectilinearPolygon:
    """Outline and member rectangles of one group of adjacent rectangles."""

    def __init__(self, seed_rectangle: Rectangle) -> None:
        self.horizontal_borders: SortedLineMap = SortedLineMap()
        self.vertical_borders: SortedLineMap = SortedLineMap()
        self.enclosed_rectangles: List[Rectangle] = [seed_rectangle]

        self._add_vertical_border(
            VerticalLine(seed_rectangle.min_y, seed_rectangle.min_x, seed_rectangle.height)
        )
        self._add_vertical_border(
            VerticalLine(seed_rectangle.min_y, seed_rectangle.max_x, seed_rectangle.height)
        )
        self._add_horizontal_border(
            HorizontalLine(seed_rectangle.min_y, seed_rectangle.min_x, seed_rectangle.width)
        )
        self._add_horizontal_border(
            HorizontalLine(seed_rectangle.max_y, seed_rectangle.min_x, seed_rectangle.width)
        )

    def _add_horizontal_border(self, line: HorizontalLine) -> None:
        self.horizontal_borders.add((line.top, line.left), line)

    def _add_vertical_border(self, line: VerticalLine) -> None:
        self.vertical_borders.add((line.left, line.top), line)

    def is_rectangle_vertically_overlapping(self, candidate: Rectangle) -> bool:
        """True when ``candidate`` overlaps the polygon's y-range within epsilon."""
        top_most_y = self.horizontal_borders.first().top
        bottom_most_y = self.horizontal_borders.last().top
        return (
            candidate.min_y < bottom_most_y + SEPARATION_EPSILON
            and candidate.max_y > top_most_y - SEPARATION_EPSILON
        )

    def include_rectangle_if_possible(self, candidate: Rectangle) -> bool:
        """Absorb ``candidate`` when any of its borders is adjacent to the outline.

        All four borders are tested and every adjacent one is added to the
        outline, so a rectangle may attach through several borders at once.
        """
        if not self.is_rectangle_vertically_overlapping(candidate):
            return False
        top_included = self._include_horizontal_border_if_adjacent(
            candidate, border_y=candidate.min_y, opposite_y=candidate.max_y
        )
        bottom_included = self._include_horizontal_border_if_adjacent(
            candidate, border_y=candidate.max_y, opposite_y=candidate.min_y
        )
        left_included = self._include_vertical_border_if_adjacent(
            candidate, border_x=candidate.min_x, opposite_x=candidate.max_x
        )
        right_included = self._include_vertical_border_if_adjacent(
            candidate, border_x=candidate.max_x, opposite_x=candidate.min_x
        )
        if top_included or bottom_included or left_included or right_included:
            self.enclosed_rectangles.append(candidate)
            return True
        return False

    def _include_horizontal_border_if_adjacent(
        self, candidate: Rectangle, border_y: float, opposite_y: float
    ) -> bool:
        lower = opposite_y - SEPARATION_EPSILON
        upper = opposite_y + SEPARATION_EPSILON
        if not self.horizontal_borders:
            return False
        if not (self.horizontal_borders.first().top < upper and self.horizontal_borders.last().top > lower):
            return False

        collinear_borders = self.horizontal_borders.sub_map(
            (lower, candidate.min_x), (upper, candidate.min_x)
        )
        is_adjacent = any(
            spans_overlap(border.left, border.right, candidate.min_x, candidate.max_x)
            for border in collinear_borders
        )
        if is_adjacent:
            self._add_horizontal_border(HorizontalLine(border_y, candidate.min_x, candidate.width))
        return is_adjacent

    def _include_vertical_border_if_adjacent(
        self, candidate: Rectangle, border_x: float, opposite_x: float
    ) -> bool:
        lower = opposite_x - SEPARATION_EPSILON
        upper = opposite_x + SEPARATION_EPSILON
        if not self.vertical_borders:
            return False
        if not (self.vertical_borders.first().left < upper and self.vertical_borders.last().left > lower):
            return False

        collinear_borders = self.vertical_borders.sub_map(
            (lower, candidate.min_y), (upper, candidate.min_y)
        )
        is_adjacent = any(
            spans_overlap(border.top, border.bottom, candidate.min_y, candidate.max_y)
            for border in collinear_borders
        )
        if is_adjacent:
            self._add_vertical_border(VerticalLine(candidate.min_y, border_x, candidate.height))
        return is_adjacent

    @property
    def bounding_rectangle(self) -> Optional[Rectangle]:
        if not self.enclosed_rectangles:
            return None
        return Rectangle.from_bounds(
            self.vertical_borders.first().left,
            self.horizontal_borders.first().top,
            self.vertical_borders.last().left,
            self.horizontal_borders.last().top,
        )

    @property
    def number_of_rows(self) -> int:
        """Distinct horizontal border ordinates minus one."""
        return count_distinct(line.top for line in self.horizontal_borders) - 1

    @property
    def number_of_columns(self) -> int:
        """Distinct vertical border abscissas minus one."""
        return count_distinct(line.left for line in self.vertical_borders) - 1

    def to_dict(self) -> dict:
        bounding = self.bounding_rectangle
        return {
            "bbox": bounding.to_dict() if bounding else None,
            "rows": self.number_of_rows,
            "columns": self.number_of_columns,
            "rectangles": [r.to_dict() for r in self.enclosed_rectangles],
        }

    def __repr__(self) -> str:
        return (
            f"RectilinearPolygon(rectangles={len(self.enclosed_rectangles)}, "
            f"rows={self.number_of_rows}, columns={self.number_of_columns})"
        )


def build_rectilinear_polygons(rectangles: Iterable[Rectangle]) -> List[RectilinearPolygon]:
    """Group rectangles into polygons, top to bottom then left to right.

    A rectangle is offered to every existing polygon and may be absorbed by
    more than one of them; it seeds a new polygon only when none takes it.
    """
    polygons: List[RectilinearPolygon] = []
    for rectangle in sorted(rectangles, key=lambda r: (r.min_y, r.min_x)):
        is_included = False
        for polygon in polygons:
            is_included = polygon.include_rectangle_if_possible(rectangle) or is_included
        if not is_included:
            polygons.append(RectilinearPolygon(rectangle))
    logger.debug("Built %d rectilinear polygon(s)", len(polygons))
    return polygons


__all__ = ["RectilinearPolygon", "build_rectilinear_polygons"]
