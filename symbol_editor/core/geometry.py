from __future__ import annotations

import math
from dataclasses import dataclass

from PySide6.QtCore import QLineF, QPointF

EPSILON = 1e-9


def distance(a: QPointF, b: QPointF) -> float:
    return math.hypot(a.x() - b.x(), a.y() - b.y())


def contains(point: QPointF, size: float, tolerance: float = EPSILON) -> bool:
    """Return ``True`` if *point* lies inside the closed square ``[0, size]``."""

    return (
        -tolerance <= point.x() <= size + tolerance
        and -tolerance <= point.y() <= size + tolerance
    )


def line_through(point: QPointF, angle: float) -> QLineF:
    """Return a unit length line starting at *point* pointing at *angle* degrees.

    The line is treated as infinite by the other helpers, only its direction
    matters.
    """

    radians = math.radians(angle)
    return QLineF(
        point,
        QPointF(point.x() + math.cos(radians), point.y() - math.sin(radians)),
    )


def _direction(line: QLineF) -> tuple[float, float]:
    dx = line.dx()
    dy = line.dy()
    length = math.hypot(dx, dy)
    if length < EPSILON:
        return 0.0, 0.0
    return dx / length, dy / length


def project(line: QLineF, point: QPointF) -> QPointF:
    """Closest point to *point* on the infinite extension of *line*."""

    ux, uy = _direction(line)
    origin = line.p1()
    t = (point.x() - origin.x()) * ux + (point.y() - origin.y()) * uy
    return QPointF(origin.x() + t * ux, origin.y() + t * uy)


def perpendicular_distance(line: QLineF, point: QPointF) -> float:
    return distance(project(line, point), point)


def intersect_lines(a: QLineF, b: QLineF) -> QPointF | None:
    """Intersection of two infinite lines, ``None`` when they are parallel."""

    denominator = a.dx() * b.dy() - a.dy() * b.dx()
    if abs(denominator) < EPSILON:
        return None
    ox = b.x1() - a.x1()
    oy = b.y1() - a.y1()
    t = (ox * b.dy() - oy * b.dx()) / denominator
    return QPointF(a.x1() + t * a.dx(), a.y1() + t * a.dy())


@dataclass(frozen=True)
class Circle:
    center: QPointF
    radius: float

    def distance_to(self, point: QPointF) -> float:
        return abs(distance(self.center, point) - self.radius)

    def closest_point(self, point: QPointF) -> QPointF:
        dx = point.x() - self.center.x()
        dy = point.y() - self.center.y()
        length = math.hypot(dx, dy)
        if length < EPSILON:
            return QPointF(self.center.x() + self.radius, self.center.y())
        return QPointF(
            self.center.x() + dx / length * self.radius,
            self.center.y() + dy / length * self.radius,
        )

    def intersect_line(self, line: QLineF) -> list[QPointF]:
        """Points where the infinite extension of *line* crosses the circle."""

        foot = project(line, self.center)
        offset = distance(foot, self.center)
        if offset > self.radius + EPSILON:
            return []
        half_chord = math.sqrt(max(0.0, self.radius * self.radius - offset * offset))
        if half_chord < EPSILON:
            return [foot]
        ux, uy = _direction(line)
        return [
            QPointF(foot.x() - ux * half_chord, foot.y() - uy * half_chord),
            QPointF(foot.x() + ux * half_chord, foot.y() + uy * half_chord),
        ]
