"""Tests for sweep event ordering."""

from __future__ import annotations

import pytest

from ruled_regions.abscissa import (
    AbscissaType,
    LineAbscissa,
    abscissa_sort_key,
    build_abscissas,
    compare_abscissas,
)
from ruled_regions.elements import HorizontalLine, InvalidGeometryError, VerticalLine


@pytest.mark.smoke
def test_abscissa_values_follow_event_type():
    line = HorizontalLine(top=5.0, left=2.0, stretch=10.0)

    assert LineAbscissa(AbscissaType.HORIZONTAL_LEFT, line).value == 2.0
    assert LineAbscissa(AbscissaType.HORIZONTAL_RIGHT, line).value == 12.0
    assert LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, 7.0, 3.0)).value == 7.0


@pytest.mark.smoke
@pytest.mark.parametrize(
    "abscissa_type, line",
    [
        (AbscissaType.VERTICAL, HorizontalLine(0.0, 0.0, 10.0)),
        (AbscissaType.HORIZONTAL_LEFT, VerticalLine(0.0, 0.0, 10.0)),
        (AbscissaType.HORIZONTAL_RIGHT, VerticalLine(0.0, 0.0, 10.0)),
    ],
)
def test_mismatched_line_fails_fast(abscissa_type, line):
    with pytest.raises(InvalidGeometryError):
        LineAbscissa(abscissa_type, line)


@pytest.mark.smoke
def test_near_equal_x_orders_by_priority():
    """Left end < vertical < right end when their x are within epsilon."""
    horizontal = HorizontalLine(top=5.0, left=0.0, stretch=10.0)
    left = LineAbscissa(AbscissaType.HORIZONTAL_LEFT, horizontal)
    right = LineAbscissa(AbscissaType.HORIZONTAL_RIGHT, horizontal)
    vertical_near_left = LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, -0.5, 10.0))
    vertical_near_right = LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, 10.5, 10.0))

    assert compare_abscissas(left, vertical_near_left) < 0
    assert compare_abscissas(vertical_near_right, right) < 0
    assert compare_abscissas(right, vertical_near_right) > 0


@pytest.mark.smoke
def test_distant_events_order_by_x():
    early_vertical = LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, 3.0, 10.0))
    late_left = LineAbscissa(AbscissaType.HORIZONTAL_LEFT, HorizontalLine(0.0, 8.0, 4.0))

    assert compare_abscissas(early_vertical, late_left) < 0
    assert sorted([late_left, early_vertical], key=abscissa_sort_key) == [
        early_vertical,
        late_left,
    ]


@pytest.mark.smoke
def test_same_type_within_epsilon_compares_by_value():
    first = LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, 1.0, 5.0))
    second = LineAbscissa(AbscissaType.VERTICAL, VerticalLine(0.0, 1.5, 5.0))

    assert compare_abscissas(first, second) < 0
    assert compare_abscissas(first, first) == 0


@pytest.mark.smoke
def test_build_abscissas_emits_two_events_per_horizontal():
    horizontals = [HorizontalLine(0.0, 0.0, 20.0), HorizontalLine(10.0, 0.0, 20.0)]
    verticals = [VerticalLine(0.0, 0.0, 10.0), VerticalLine(0.0, 20.0, 10.0)]

    events = build_abscissas(horizontals, verticals)

    assert len(events) == 6
    assert [e.abscissa_type for e in events] == [
        AbscissaType.HORIZONTAL_LEFT,
        AbscissaType.HORIZONTAL_LEFT,
        AbscissaType.VERTICAL,
        AbscissaType.VERTICAL,
        AbscissaType.HORIZONTAL_RIGHT,
        AbscissaType.HORIZONTAL_RIGHT,
    ]
