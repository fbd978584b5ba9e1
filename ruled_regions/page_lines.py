"""Ruling segments read from the vector drawings of a PyMuPDF page."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterator, List, Sequence, Tuple

import numpy as np
import pymupdf  # type: ignore

from .config import (
    MAX_RULE_THICKNESS,
    MAX_SLOPE_HORIZONTAL,
    MIN_RULING_LENGTH,
    MIN_SLOPE_VERTICAL,
    SEPARATION_EPSILON,
)
from .elements import HorizontalLine, Rectangle, VerticalLine
from .geometry_utils import compare_with_tolerance, merge_collinear_numba
from .logging_config import get_logger

logger = get_logger(__name__)

# (orientation, position, start, end); orientation is "h" or "v"
Stroke = Tuple[str, float, float, float]


def classify_stroke(x0: float, y0: float, x1: float, y1: float) -> Iterator[Stroke]:
    """Yield the stroke as a horizontal or vertical piece, or nothing if skewed."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    if dx == 0 and dy == 0:
        return
    if dx == 0 or dy / dx >= MIN_SLOPE_VERTICAL:
        yield ("v", (x0 + x1) / 2, min(y0, y1), max(y0, y1))
    elif dy / dx <= MAX_SLOPE_HORIZONTAL:
        yield ("h", (y0 + y1) / 2, min(x0, x1), max(x0, x1))


def rect_strokes(rect: Any) -> Iterator[Stroke]:
    """Yield a thin rectangle as one rule, any other rectangle as its four edges."""
    x0, y0, x1, y1 = rect.x0, rect.y0, rect.x1, rect.y1
    width = x1 - x0
    height = y1 - y0
    if height <= MAX_RULE_THICKNESS and width > height:
        yield ("h", (y0 + y1) / 2, x0, x1)
    elif width <= MAX_RULE_THICKNESS and height > width:
        yield ("v", (x0 + x1) / 2, y0, y1)
    else:
        yield ("h", y0, x0, x1)
        yield ("h", y1, x0, x1)
        yield ("v", x0, y0, y1)
        yield ("v", x1, y0, y1)


def drawing_strokes(drawing: dict[str, Any]) -> Iterator[Stroke]:
    """Yield the axis-aligned strokes of one ``page.get_drawings()`` entry."""
    for item in drawing.get("items", ()):
        kind = item[0]
        if kind == "l":
            start, end = item[1], item[2]
            yield from classify_stroke(start.x, start.y, end.x, end.y)
        elif kind == "re":
            yield from rect_strokes(item[1])
        elif kind == "qu":
            yield from rect_strokes(item[1].rect)


def merge_strokes(
    pieces: Sequence[Tuple[float, float, float]],
    min_length: float = MIN_RULING_LENGTH,
) -> np.ndarray[Any, np.dtype[np.float64]]:
    """Merge collinear (position, start, end) pieces and drop short results."""
    if not pieces:
        return np.empty((0, 3), dtype=np.float64)
    ordered = sorted(pieces, key=cmp_to_key(compare_with_tolerance))
    array = np.array(ordered, dtype=np.float64)
    merged = merge_collinear_numba(
        array[:, 0].copy(), array[:, 1].copy(), array[:, 2].copy(), SEPARATION_EPSILON
    )
    return merged[(merged[:, 2] - merged[:, 1]) > min_length]


def lines_from_strokes(
    strokes: Sequence[Stroke],
    min_length: float = MIN_RULING_LENGTH,
) -> Tuple[List[HorizontalLine], List[VerticalLine]]:
    """Turn raw strokes into merged horizontal and vertical lines."""
    horizontal_pieces = [(pos, start, end) for kind, pos, start, end in strokes if kind == "h"]
    vertical_pieces = [(pos, start, end) for kind, pos, start, end in strokes if kind == "v"]
    horizontal_lines = [
        HorizontalLine(float(y), float(x0), float(x1 - x0))
        for y, x0, x1 in merge_strokes(horizontal_pieces, min_length)
    ]
    vertical_lines = [
        VerticalLine(float(y0), float(x), float(y1 - y0))
        for x, y0, y1 in merge_strokes(vertical_pieces, min_length)
    ]
    return horizontal_lines, vertical_lines


def extract_ruling_lines(
    page: "pymupdf.Page",
    min_length: float = MIN_RULING_LENGTH,
) -> Tuple[List[HorizontalLine], List[VerticalLine]]:
    """Read the ruling lines drawn on ``page``.

    Args:
        page: The PyMuPDF page to inspect.
        min_length: Merged lines not longer than this are dropped.

    Returns:
        A tuple of (horizontal lines, vertical lines) in page coordinates.
    """
    strokes: List[Stroke] = []
    for drawing in page.get_drawings():
        strokes.extend(drawing_strokes(drawing))
    horizontal_lines, vertical_lines = lines_from_strokes(strokes, min_length)
    logger.debug(
        "Page %s: %d strokes -> %d horizontal, %d vertical lines",
        page.number,
        len(strokes),
        len(horizontal_lines),
        len(vertical_lines),
    )
    return horizontal_lines, vertical_lines


def extract_text_boxes(page: "pymupdf.Page") -> List[Rectangle]:
    """Bounding boxes of the words on ``page``, used as obstacles."""
    return [
        Rectangle.from_bounds(x0, y0, x1, y1)
        for x0, y0, x1, y1, *_ in page.get_text("words")
    ]


__all__ = [
    "classify_stroke",
    "drawing_strokes",
    "extract_ruling_lines",
    "extract_text_boxes",
    "lines_from_strokes",
    "merge_strokes",
    "rect_strokes",
]
