import math

import pytest
from PySide6.QtCore import QPointF

from symbol_editor.core.geometry import Circle, intersect_lines, line_through, perpendicular_distance
from symbol_editor.core.snap import SnapEngine


def _engine(**overrides):
    options = dict(size=4.0, grid_elements=4, grid_tolerance=0.25, guide_tolerance=0.05)
    options.update(overrides)
    return SnapEngine(**options)


def _assert_point(actual, x, y):
    assert actual.x() == pytest.approx(x)
    assert actual.y() == pytest.approx(y)


def test_line_through_and_distance():
    horizontal = line_through(QPointF(0, 1), 0)
    vertical = line_through(QPointF(2, 0), 90)

    assert perpendicular_distance(horizontal, QPointF(5, 1.5)) == pytest.approx(0.5)
    _assert_point(intersect_lines(horizontal, vertical), 2, 1)
    assert intersect_lines(horizontal, line_through(QPointF(0, 3), 0)) is None


def test_circle_line_intersections():
    circle = Circle(QPointF(2, 2), 1)

    crossings = circle.intersect_line(line_through(QPointF(0, 2), 0))

    assert sorted(round(p.x(), 6) for p in crossings) == [1, 3]
    assert circle.intersect_line(line_through(QPointF(0, 5), 0)) == []
    assert circle.distance_to(QPointF(2, 4)) == pytest.approx(1)


def test_grid_snap_to_nearest_intersection():
    engine = _engine()

    snapped, point = engine.snap_to_grid(QPointF(0.96, 2.03))

    assert snapped
    _assert_point(point, 1, 2)


def test_grid_snap_outside_tolerance():
    engine = _engine()

    snapped, point = engine.snap_to_grid(QPointF(0.5, 2.5))

    assert not snapped
    _assert_point(point, 0.5, 2.5)


def test_snap_to_nearest_point_on_guide():
    engine = _engine()
    engine.grid_enabled = False
    points = [QPointF(0, 0), QPointF(2, 0)]

    result, guides = engine.snap(QPointF(1, 0.02), points)

    _assert_point(result, 1, 0)
    assert len(guides.lines) == 2
    assert guides.circles == []


def test_snap_to_guide_intersection():
    engine = _engine(guide_tolerance=0.1, angles=(0.0, 90.0))
    engine.grid_enabled = False
    points = [QPointF(1, 0), QPointF(0, 1)]

    result, guides = engine.snap(QPointF(1.05, 0.96), points)

    _assert_point(result, 1, 1)
    assert any(p.x() == pytest.approx(1) and p.y() == pytest.approx(1) for p in guides.snap_points)


def test_snap_to_guide_circle():
    engine = _engine(angles=(0.0, 90.0))
    engine.grid_enabled = False
    angle = math.radians(30)
    pos = QPointF(2 + 2.02 * math.cos(angle), 2 - 2.02 * math.sin(angle))

    result, guides = engine.snap(pos, [QPointF(2, 0)])

    assert len(guides.circles) == 1
    assert guides.circles[0].radius == pytest.approx(2)
    _assert_point(result, 2 + 2 * math.cos(angle), 2 - 2 * math.sin(angle))


def test_snap_leaves_position_alone_without_guides():
    engine = _engine()
    engine.grid_enabled = False

    result, guides = engine.snap(QPointF(1.5, 1.3), [QPointF(3.2, 3.7)])

    _assert_point(result, 1.5, 1.3)
    assert guides.is_empty()


def test_grid_snap_wins_over_guides():
    engine = _engine(guide_tolerance=0.3)
    points = [QPointF(0, 1.1)]

    result, guides = engine.snap(QPointF(1.05, 1.0), points)

    _assert_point(result, 1, 1)
    assert guides.is_empty()


def test_guides_disabled():
    engine = _engine()
    engine.grid_enabled = False
    engine.guides_enabled = False

    result, guides = engine.snap(QPointF(1, 0.02), [QPointF(0, 0), QPointF(2, 0)])

    _assert_point(result, 1, 0.02)
    assert guides.is_empty()


def test_snap_is_repeatable():
    engine = _engine()
    engine.grid_enabled = False
    points = [QPointF(0, 0), QPointF(2, 0), QPointF(1.3, 2.2), QPointF(3.1, 0.7)]

    first, first_guides = engine.snap(QPointF(1.21, 0.03), points)
    second, second_guides = engine.snap(QPointF(1.21, 0.03), points)

    assert first == second
    assert first_guides.snap_points == second_guides.snap_points


def test_snap_points_stay_inside_the_visible_area():
    engine = _engine(guide_tolerance=0.2)
    engine.grid_enabled = False

    guides = engine.construct_guides(QPointF(0.1, 0.1), [QPointF(0.2, 0.2), QPointF(3, 0.1)])

    assert guides.snap_points
    for point in guides.snap_points:
        assert -1e-6 <= point.x() <= 4 + 1e-6
        assert -1e-6 <= point.y() <= 4 + 1e-6


def test_display_lines_span_the_visible_area():
    engine = _engine()
    engine.grid_enabled = False

    guides = engine.construct_guides(QPointF(1, 0.02), [QPointF(2, 0)])

    horizontal = guides.display_lines[0]
    assert {round(horizontal.x1(), 6), round(horizontal.x2(), 6)} == {0, 4}


def test_equally_near_candidates_prefer_the_first():
    nearest = SnapEngine._nearest(QPointF(1, 1), [QPointF(0, 1), QPointF(2, 1)])

    _assert_point(nearest, 0, 1)


def test_guides_of_earlier_points_win_ties():
    engine = SnapEngine(size=1.0, grid_elements=16, guide_tolerance=0.05, angles=(0.0,))
    engine.grid_enabled = False
    # A circle through the first point and a line through the second, both
    # 1/32 away from the pointer.
    points = [QPointF(0.5, 0.125), QPointF(0.25, 0.9375)]

    snapped, guides = engine.snap(QPointF(0.5, 0.90625), points)

    assert len(guides.circles) == 1
    assert len(guides.lines) == 1
    _assert_point(snapped, 0.5, 0.875)
