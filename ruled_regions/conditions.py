"""Predicates deciding when broken rules may be joined or open rectangles closed."""

from __future__ import annotations

from typing import Callable, Iterable, List

from .config import SEPARATION_EPSILON
from .elements import Rectangle, VerticalLine
from .open_rectangle import CombineCondition, OpenRectangle

OpenRectangleCondition = Callable[[OpenRectangle], bool]


def proximity_condition(above: VerticalLine, below: VerticalLine) -> bool:
    """Join two vertical pieces when the gap between them is below epsilon."""
    return below.top - above.bottom < SEPARATION_EPSILON


def no_obstacle_condition(obstacles: Iterable[Rectangle]) -> CombineCondition:
    """Join two vertical pieces when no obstacle starts in the gap between them.

    ``obstacles`` are usually the text boxes of the page: a caption or a
    paragraph sitting between two ruled blocks means they are separate grids.
    The gap is widened by epsilon on both ends.
    """
    obstacle_tops = sorted(obstacle.min_y for obstacle in obstacles)

    def condition(above: VerticalLine, below: VerticalLine) -> bool:
        lower = above.bottom - SEPARATION_EPSILON
        upper = below.top + SEPARATION_EPSILON
        return not any(lower < top < upper for top in obstacle_tops)

    return condition


def any_condition(*conditions: CombineCondition) -> CombineCondition:
    """Combine predicates so that the first one accepting a pair wins."""

    def condition(above: VerticalLine, below: VerticalLine) -> bool:
        return any(c(above, below) for c in conditions)

    return condition


def clear_closing_border_condition(obstacles: Iterable[Rectangle]) -> OpenRectangleCondition:
    """Accept an open rectangle when nothing overlaps its synthesized border."""
    boxes: List[Rectangle] = list(obstacles)

    def condition(open_rectangle: OpenRectangle) -> bool:
        border = open_rectangle.find_closing_border()
        if isinstance(border, VerticalLine):
            top, bottom = border.top, border.bottom
            left = right = border.left
        else:
            top = bottom = border.top
            left, right = border.left, border.right
        for box in boxes:
            if (
                box.max_y > top - SEPARATION_EPSILON
                and box.min_y < bottom + SEPARATION_EPSILON
                and box.max_x > left - SEPARATION_EPSILON
                and box.min_x < right + SEPARATION_EPSILON
            ):
                return False
        return True

    return condition


def accept_all(open_rectangle: OpenRectangle) -> bool:
    return True


__all__ = [
    "OpenRectangleCondition",
    "accept_all",
    "any_condition",
    "clear_closing_border_condition",
    "no_obstacle_condition",
    "proximity_condition",
]
