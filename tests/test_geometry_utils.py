"""Tests for the epsilon helpers, array kernels and the sorted line map."""

from __future__ import annotations

import numpy as np
import pytest

from ruled_regions.elements import Rectangle
from ruled_regions.geometry_utils import (
    compare_with_tolerance,
    count_distinct,
    filter_valid_rectangles,
    finite_mask,
    is_close,
    spans_overlap,
)
from ruled_regions.sorted_lines import SortedLineMap


@pytest.mark.smoke
def test_epsilon_helpers():
    assert is_close(10.0, 10.9)
    assert not is_close(10.0, 11.0)
    assert spans_overlap(0.0, 10.0, 10.5, 20.0)
    assert not spans_overlap(0.0, 10.0, 11.5, 20.0)


@pytest.mark.smoke
def test_filter_valid_rectangles_preserves_order():
    rectangles = [
        Rectangle(0.0, 0.0, 5.0, 5.0),
        Rectangle(0.0, 0.0, 1.0, 5.0),
        Rectangle(10.0, 0.0, 2.0, 1.5),
        Rectangle(0.0, 0.0, 5.0, 0.5),
    ]

    accepted = filter_valid_rectangles(rectangles)

    assert accepted == [rectangles[0], rectangles[2]]
    assert filter_valid_rectangles(accepted) == accepted
    assert filter_valid_rectangles([]) == []


@pytest.mark.smoke
def test_finite_mask_and_distinct_count():
    mask = finite_mask([(0.0, 1.0), (float("nan"), 1.0), (2.0, float("-inf"))])

    np.testing.assert_array_equal(mask, [True, False, False])
    assert finite_mask([]).size == 0
    assert count_distinct([1.0, 2.0, 1.0, 3.0]) == 3


@pytest.mark.smoke
def test_compare_with_tolerance_groups_near_positions():
    assert compare_with_tolerance((10.0, 5.0, 9.0), (10.5, 0.0, 9.0)) > 0
    assert compare_with_tolerance((10.0, 5.0, 9.0), (12.0, 0.0, 9.0)) < 0
    assert compare_with_tolerance((10.0, 5.0, 9.0), (10.2, 5.5, 9.0)) == 0


@pytest.mark.smoke
def test_sorted_line_map_put_replaces_and_add_keeps():
    lines: SortedLineMap[float, str] = SortedLineMap()
    lines.put(10.0, "a")
    lines.put(0.0, "b")
    lines.put(10.0, "c")

    assert lines.items() == [(0.0, "b"), (10.0, "c")]
    assert lines.add(10.0, "d") is False
    assert lines.add(5.0, "e") is True
    assert list(lines) == ["b", "e", "c"]
    assert (lines.first(), lines.last()) == ("b", "c")


@pytest.mark.smoke
def test_sorted_line_map_sub_map_is_half_open():
    lines = SortedLineMap((float(y), y) for y in range(5))

    assert lines.sub_map(1.0, 3.0).values() == [1, 2]
    assert lines.sub_map(0.5, 10.0).keys() == [1.0, 2.0, 3.0, 4.0]

    lines.discard(2.0)
    lines.discard(42.0)
    assert 2.0 not in lines
    assert len(lines) == 4


@pytest.mark.smoke
def test_sorted_line_map_tuple_keys_are_lexicographic():
    lines = SortedLineMap([((0.0, 5.0), "a"), ((0.0, 50.0), "b"), ((20.0, 0.0), "c")])

    assert lines.sub_map((0.0, 10.0), (1.0, 10.0)).values() == ["b"]
    assert lines.sub_map((-1.0, -1000.0), (1.0, 0.0)).values() == ["a", "b"]


@pytest.mark.smoke
def test_rectangle_round_trips_through_pymupdf():
    rectangle = Rectangle(72.0, 100.0, 300.0, 90.0)

    rect = rectangle.to_pymupdf()

    assert (rect.x0, rect.y0, rect.x1, rect.y1) == (72.0, 100.0, 372.0, 190.0)
    assert Rectangle.from_pymupdf(rect) == rectangle
    assert Rectangle.from_pymupdf((72.0, 100.0, 372.0, 190.0)) == rectangle
