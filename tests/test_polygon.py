"""Tests for grouping rectangles into rectilinear polygons."""

from __future__ import annotations

import pytest

from ruled_regions.elements import Rectangle
from ruled_regions.polygon import RectilinearPolygon, build_rectilinear_polygons


@pytest.mark.smoke
def test_l_shaped_unit_squares_form_one_polygon():
    squares = [
        Rectangle(0.0, 0.0, 1.0, 1.0),
        Rectangle(1.0, 0.0, 1.0, 1.0),
        Rectangle(0.0, 1.0, 1.0, 1.0),
    ]

    polygons = build_rectilinear_polygons(squares)

    assert len(polygons) == 1
    polygon = polygons[0]
    assert polygon.enclosed_rectangles == squares
    assert polygon.number_of_rows == 2
    assert polygon.number_of_columns == 2
    assert polygon.bounding_rectangle == Rectangle(0.0, 0.0, 2.0, 2.0)


@pytest.mark.smoke
def test_distant_rectangles_form_separate_polygons():
    polygons = build_rectilinear_polygons(
        [Rectangle(100.0, 100.0, 10.0, 10.0), Rectangle(0.0, 0.0, 10.0, 10.0)]
    )

    assert [p.enclosed_rectangles for p in polygons] == [
        [Rectangle(0.0, 0.0, 10.0, 10.0)],
        [Rectangle(100.0, 100.0, 10.0, 10.0)],
    ]


@pytest.mark.smoke
def test_bridging_rectangle_joins_every_adjacent_polygon():
    """A rectangle touching two polygons is absorbed by both of them."""
    left = Rectangle(0.0, 0.0, 10.0, 10.0)
    right = Rectangle(20.0, 0.0, 10.0, 10.0)
    bridge = Rectangle(0.0, 10.0, 30.0, 10.0)

    polygons = build_rectilinear_polygons([bridge, right, left])

    assert len(polygons) == 2
    assert polygons[0].enclosed_rectangles == [left, bridge]
    assert polygons[1].enclosed_rectangles == [right, bridge]


@pytest.mark.smoke
def test_vertically_distant_rectangle_is_not_absorbed():
    polygon = RectilinearPolygon(Rectangle(0.0, 0.0, 10.0, 10.0))

    assert not polygon.is_rectangle_vertically_overlapping(Rectangle(0.0, 12.0, 10.0, 10.0))
    assert not polygon.include_rectangle_if_possible(Rectangle(0.0, 12.0, 10.0, 10.0))
    assert polygon.enclosed_rectangles == [Rectangle(0.0, 0.0, 10.0, 10.0)]


@pytest.mark.smoke
def test_polygon_grows_monotonically():
    polygon = RectilinearPolygon(Rectangle(0.0, 0.0, 10.0, 10.0))
    cells = [
        Rectangle(10.0, 0.0, 10.0, 10.0),
        Rectangle(0.0, 10.0, 10.0, 10.0),
        Rectangle(10.0, 10.0, 10.0, 10.0),
        Rectangle(20.0, 0.0, 10.0, 20.0),
    ]

    previous = (1, polygon.number_of_rows, polygon.number_of_columns)
    for cell in cells:
        assert polygon.include_rectangle_if_possible(cell)
        current = (
            len(polygon.enclosed_rectangles),
            polygon.number_of_rows,
            polygon.number_of_columns,
        )
        assert all(after >= before for after, before in zip(current, previous))
        previous = current

    assert previous == (5, 2, 3)


@pytest.mark.smoke
def test_to_dict_describes_outline():
    polygon = build_rectilinear_polygons(
        [Rectangle(0.0, 0.0, 10.0, 5.0), Rectangle(10.0, 0.0, 10.0, 5.0)]
    )[0]

    assert polygon.to_dict() == {
        "bbox": {"x": 0.0, "y": 0.0, "width": 20.0, "height": 5.0},
        "rows": 1,
        "columns": 2,
        "rectangles": [
            {"x": 0.0, "y": 0.0, "width": 10.0, "height": 5.0},
            {"x": 10.0, "y": 0.0, "width": 10.0, "height": 5.0},
        ],
    }


@pytest.mark.smoke
def test_validity_is_idempotent():
    accepted = [r for r in (Rectangle(0, 0, 2, 2), Rectangle(0, 0, 1, 5)) if r.is_valid()]

    assert accepted == [Rectangle(0, 0, 2, 2)]
    assert all(r.is_valid() for r in accepted)
