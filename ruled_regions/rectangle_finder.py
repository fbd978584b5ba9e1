"""Sweep-line search for rectangles formed by ruling segments."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, TypeVar

from .abscissa import AbscissaType, build_abscissas
from .elements import HorizontalLine, Line, Rectangle, VerticalLine
from .geometry_utils import finite_mask
from .logging_config import get_logger
from .open_rectangle import OpenRectangle
from .rectangle_builder import RectangleBuilder
from .sorted_lines import SortedLineMap

logger = get_logger(__name__)

L = TypeVar("L", HorizontalLine, VerticalLine)


def _finite_lines(lines: Iterable[L], kind: str) -> List[L]:
    """Drop segments carrying NaN or infinite coordinates."""
    lines = list(lines)
    mask = finite_mask([(line.top, line.left, line.stretch) for line in lines])
    kept = [line for line, keep in zip(lines, mask) if keep]
    if len(kept) != len(lines):
        logger.warning(
            "Ignoring %d %s line(s) with non-finite coordinates",
            len(lines) - len(kept),
            kind,
        )
    return kept


class RectangleFinder:
    """Sweep a page's ruling segments from left to right.

    Every vertical line is first tried as the right border of each builder
    created so far, then becomes the left border of a new builder. The sweep
    runs on construction; afterwards ``found_rectangles`` holds the closed
    rectangles, ``horizontally_open_rectangles`` those missing their top or
    bottom, and ``created_rectangle_builders`` the builders in sweep order.
    """

    def __init__(
        self,
        horizontal_lines: Iterable[HorizontalLine],
        vertical_lines: Iterable[VerticalLine],
    ) -> None:
        self.found_rectangles: List[Rectangle] = []
        self.horizontally_open_rectangles: List[OpenRectangle] = []
        self.created_rectangle_builders: List[RectangleBuilder] = []

        horizontals = _finite_lines(horizontal_lines, "horizontal")
        verticals = _finite_lines(vertical_lines, "vertical")
        current_horizontal_lines: SortedLineMap[float, HorizontalLine] = SortedLineMap()

        for event in build_abscissas(horizontals, verticals):
            line: Line = event.line
            if event.abscissa_type is AbscissaType.HORIZONTAL_LEFT:
                current_horizontal_lines.put(line.top, line)  # type: ignore[arg-type]
            elif event.abscissa_type is AbscissaType.HORIZONTAL_RIGHT:
                current_horizontal_lines.discard(line.top)
            else:
                self._sweep_vertical(line, current_horizontal_lines)  # type: ignore[arg-type]

        logger.debug(
            "Swept %d horizontal and %d vertical lines: %d rectangles, %d open",
            len(horizontals),
            len(verticals),
            len(self.found_rectangles),
            len(self.horizontally_open_rectangles),
        )

    def _sweep_vertical(
        self,
        vertical_line: VerticalLine,
        current_horizontal_lines: SortedLineMap[float, HorizontalLine],
    ) -> None:
        closed_on_left_side: List[HorizontalLine] = []
        for builder in self.created_rectangle_builders:
            # vertical line as right border
            borders = builder.find_intersecting_borders(vertical_line)
            self.horizontally_open_rectangles.extend(
                builder.get_horizontally_open_rectangles(vertical_line, borders)
            )
            self.found_rectangles.extend(
                builder.create_rectangles_with_right_border(vertical_line, borders)
            )
            builder.remove_right_side_closed_lines(borders)
            closed_on_left_side.extend(borders)

        # vertical line as left border
        builder = RectangleBuilder(vertical_line, current_horizontal_lines)
        builder.remove_left_side_closed_lines(closed_on_left_side)
        self.created_rectangle_builders.append(builder)

    def get_right_side_open_rectangles(self) -> List[OpenRectangle]:
        """RIGHT-open rectangles of every builder, in sweep order."""
        return [
            open_rectangle
            for builder in self.created_rectangle_builders
            for open_rectangle in builder.get_right_side_open_rectangles()
        ]

    def as_tuple(
        self,
    ) -> Tuple[List[Rectangle], List[OpenRectangle], List[RectangleBuilder]]:
        return (
            self.found_rectangles,
            self.horizontally_open_rectangles,
            self.created_rectangle_builders,
        )


def find_rectangles(
    horizontal_lines: Sequence[HorizontalLine],
    vertical_lines: Sequence[VerticalLine],
) -> Tuple[List[Rectangle], List[OpenRectangle], List[RectangleBuilder]]:
    """Run one sweep and return (found, horizontally open, builders)."""
    return RectangleFinder(horizontal_lines, vertical_lines).as_tuple()


__all__ = ["RectangleFinder", "find_rectangles"]
