"""Epsilon-aware comparisons and array kernels shared by the sweep components."""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple, TypeVar

# the below ignores are due to `numba` constraints
# pyright: reportUnknownMemberType=false
# pyright: reportUntypedFunctionDecorator=false
import numba  # type: ignore
import numpy as np
import pymupdf  # type: ignore

from .config import SEPARATION_EPSILON

T = TypeVar("T")


def is_close(a: float, b: float, epsilon: float = SEPARATION_EPSILON) -> bool:
    """Return True when two coordinates are the same within ``epsilon``."""
    return abs(a - b) < epsilon


def spans_overlap(
    start_1: float,
    end_1: float,
    start_2: float,
    end_2: float,
    epsilon: float = SEPARATION_EPSILON,
) -> bool:
    """Return True when two 1-D spans overlap once widened by ``epsilon``."""
    return start_1 <= end_2 + epsilon and end_1 >= start_2 - epsilon


def is_valid_rectangle(width: float, height: float) -> bool:
    """A rectangle is valid when both dimensions exceed the separation epsilon."""
    return width > SEPARATION_EPSILON and height > SEPARATION_EPSILON


@numba.jit(nopython=True, cache=True)
def valid_rectangle_mask_numba(
    dimensions: np.ndarray[Any, np.dtype[np.float64]], epsilon: float
) -> np.ndarray[Any, np.dtype[np.bool_]]:  # type: ignore
    """Flag the rows of an (n, 2) width/height array that form valid rectangles."""
    n = dimensions.shape[0]
    mask = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        mask[i] = dimensions[i, 0] > epsilon and dimensions[i, 1] > epsilon
    return mask


def filter_valid_rectangles(rectangles: Sequence[T]) -> List[T]:
    """Keep the rectangles whose width and height exceed the separation epsilon.

    Works on anything exposing ``width`` and ``height``; order is preserved.
    """
    if not rectangles:
        return []
    dimensions: np.ndarray[Any, np.dtype[np.float64]] = np.array(
        [(r.width, r.height) for r in rectangles], dtype=np.float64  # type: ignore[attr-defined]
    )
    mask = valid_rectangle_mask_numba(dimensions, SEPARATION_EPSILON)
    return [r for r, keep in zip(rectangles, mask) if keep]


def finite_mask(values: Sequence[Tuple[float, ...]]) -> np.ndarray[Any, np.dtype[np.bool_]]:
    """Return a row mask that is True where every coordinate is finite."""
    if not values:
        return np.zeros(0, dtype=np.bool_)
    array = np.asarray(values, dtype=np.float64)
    return np.isfinite(array).all(axis=1)


def count_distinct(values: Iterable[float]) -> int:
    """Number of exactly distinct coordinates."""
    array = np.fromiter(values, dtype=np.float64)
    return int(np.unique(array).size)


@numba.jit(nopython=True, cache=True)
def merge_collinear_numba(
    positions: np.ndarray[Any, np.dtype[np.float64]],
    starts: np.ndarray[Any, np.dtype[np.float64]],
    ends: np.ndarray[Any, np.dtype[np.float64]],
    epsilon: float,
) -> np.ndarray[Any, np.dtype[np.float64]]:  # type: ignore
    """Merge sorted collinear pieces into (position, start, end) rows.

    Input must be sorted by position, then start. A piece joins the running
    segment while its position stays within ``epsilon`` of the running
    position and it starts no later than ``epsilon`` past the running end.
    """
    n = len(positions)
    merged = np.empty((n, 3), dtype=np.float64)
    if n == 0:
        return merged

    count = 0
    current_pos = positions[0]
    current_start = starts[0]
    current_end = ends[0]
    for i in range(1, n):
        if positions[i] > current_pos + epsilon or starts[i] > current_end + epsilon:
            merged[count, 0] = current_pos
            merged[count, 1] = current_start
            merged[count, 2] = current_end
            count += 1
            current_pos = positions[i]
            current_start = starts[i]
            current_end = ends[i]
        else:
            current_pos = (current_pos + positions[i]) / 2.0
            current_start = min(current_start, starts[i])
            current_end = max(current_end, ends[i])

    merged[count, 0] = current_pos
    merged[count, 1] = current_start
    merged[count, 2] = current_end
    count += 1
    return merged[:count]


def compare_with_tolerance(
    first: Tuple[float, float, float],
    second: Tuple[float, float, float],
    epsilon: float = SEPARATION_EPSILON,
) -> int:
    """Order (position, start, end) triples, treating near positions as equal."""
    if abs(first[0] - second[0]) > epsilon:
        return -1 if first[0] < second[0] else 1
    if abs(first[1] - second[1]) > epsilon:
        return -1 if first[1] < second[1] else 1
    if first[2] == second[2]:
        return 0
    return -1 if first[2] < second[2] else 1


def pymupdf_rect_to_tuple(
    rect: Any,
) -> Tuple[float, float, float, float]:
    """Convert PyMuPDF Rect or tuple to a tuple of floats."""
    if isinstance(rect, tuple):
        return rect  # type: ignore
    return (rect.x0, rect.y0, rect.x1, rect.y1)  # type: ignore[attr-defined]


def tuple_to_pymupdf_rect(
    rect_tuple: Tuple[float, float, float, float],
) -> Any:
    """Convert tuple back to PyMuPDF Rect."""
    return pymupdf.Rect(*rect_tuple)  # type: ignore[attr-defined]


__all__ = [
    "compare_with_tolerance",
    "count_distinct",
    "filter_valid_rectangles",
    "finite_mask",
    "is_close",
    "is_valid_rectangle",
    "merge_collinear_numba",
    "pymupdf_rect_to_tuple",
    "spans_overlap",
    "tuple_to_pymupdf_rect",
]
