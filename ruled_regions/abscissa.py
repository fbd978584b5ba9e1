"""Sweep events along the x axis."""

from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Iterable, List

from .config import SEPARATION_EPSILON
from .elements import HorizontalLine, InvalidGeometryError, Line, VerticalLine


class AbscissaType(Enum):
    """Kind of sweep event; the value is its tie-breaking priority."""

    HORIZONTAL_LEFT = 0
    VERTICAL = 1
    HORIZONTAL_RIGHT = 2

    @property
    def priority(self) -> int:
        return self.value

    def abscissa_value(self, line: Line) -> float:
        """Return the x coordinate of ``line`` at this event.

        Raises:
            InvalidGeometryError: If the line orientation does not match the
                event type.
        """
        if self is AbscissaType.VERTICAL:
            if not isinstance(line, VerticalLine):
                raise InvalidGeometryError(f"{self.name} event needs a VerticalLine, got {line!r}")
            return line.left
        if not isinstance(line, HorizontalLine):
            raise InvalidGeometryError(f"{self.name} event needs a HorizontalLine, got {line!r}")
        if self is AbscissaType.HORIZONTAL_LEFT:
            return line.left
        return line.right


class LineAbscissa:
    """One sweep event: a line seen at one of its x coordinates."""

    __slots__ = ("abscissa_type", "line", "value")

    def __init__(self, abscissa_type: AbscissaType, line: Line) -> None:
        self.abscissa_type = abscissa_type
        self.line = line
        # fails fast on a mismatched line
        self.value = abscissa_type.abscissa_value(line)

    def __repr__(self) -> str:
        return f"LineAbscissa({self.abscissa_type.name}, x={self.value}, {self.line!r})"


def compare_abscissas(first: LineAbscissa, second: LineAbscissa) -> int:
    """Order events by x; near-equal x of different kinds fall back to priority.

    At a shared corner a horizontal's left end sorts before the vertical, which
    sorts before any horizontal's right end, so rounding jitter cannot close a
    line before a vertical at the same x has seen it.
    """
    if (
        abs(first.value - second.value) > SEPARATION_EPSILON
        or first.abscissa_type is second.abscissa_type
    ):
        return (first.value > second.value) - (first.value < second.value)
    return first.abscissa_type.priority - second.abscissa_type.priority


abscissa_sort_key = cmp_to_key(compare_abscissas)


def build_abscissas(
    horizontal_lines: Iterable[HorizontalLine],
    vertical_lines: Iterable[VerticalLine],
) -> List[LineAbscissa]:
    """Create the sorted event list for one sweep."""
    events: List[LineAbscissa] = []
    for line in horizontal_lines:
        events.append(LineAbscissa(AbscissaType.HORIZONTAL_LEFT, line))
        events.append(LineAbscissa(AbscissaType.HORIZONTAL_RIGHT, line))
    for line in vertical_lines:
        events.append(LineAbscissa(AbscissaType.VERTICAL, line))
    events.sort(key=abscissa_sort_key)
    return events


__all__ = [
    "AbscissaType",
    "LineAbscissa",
    "abscissa_sort_key",
    "build_abscissas",
    "compare_abscissas",
]
