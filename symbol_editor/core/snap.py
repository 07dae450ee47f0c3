from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from PySide6.QtCore import QLineF, QPointF

from symbol_editor.core.geometry import (
    EPSILON,
    Circle,
    contains,
    distance,
    intersect_lines,
    line_through,
    perpendicular_distance,
    project,
)

DEFAULT_ANGLES = tuple(float(angle) for angle in range(0, 180, 15))


@dataclass
class GuideState:
    """Guides found for one pointer position.

    ``lines`` are the infinite guide lines, ``display_lines`` the same lines
    clipped to the visible square for drawing. ``ordered`` holds the lines and
    circles together in the order of the points they were built from.
    """

    lines: list[QLineF] = field(default_factory=list)
    display_lines: list[QLineF] = field(default_factory=list)
    circles: list[Circle] = field(default_factory=list)
    snap_points: list[QPointF] = field(default_factory=list)
    ordered: list = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.lines and not self.circles


class SnapEngine:
    """Grid and guide snapping in symbol coordinates.

    The visible area is the square ``[0, size]`` divided into
    ``grid_elements`` cells per side. The engine keeps no state between calls,
    the same inputs always give the same result.
    """

    def __init__(
        self,
        size: float = 1.0,
        grid_elements: int = 16,
        grid_tolerance: float = 0.02,
        guide_tolerance: float = 0.01,
        angles: Iterable[float] = DEFAULT_ANGLES,
    ):
        self.size = float(size)
        self.grid_elements = max(1, int(grid_elements))
        self.grid_tolerance = grid_tolerance
        self.guide_tolerance = guide_tolerance
        self.angles = tuple(angles)
        self.grid_enabled = True
        self.guides_enabled = True

    @property
    def spacing(self) -> float:
        return self.size / self.grid_elements

    @property
    def center(self) -> QPointF:
        return QPointF(self.size / 2, self.size / 2)

    @property
    def edges(self) -> tuple[QLineF, QLineF, QLineF, QLineF]:
        size = self.size
        return (
            QLineF(0, 0, size, 0),
            QLineF(0, size, size, size),
            QLineF(0, 0, 0, size),
            QLineF(size, 0, size, size),
        )

    # Grid ---------------------------------------------------------------
    def snap_to_grid(self, pos: QPointF) -> tuple[bool, QPointF]:
        spacing = self.spacing
        column = min(self.grid_elements, max(0, math.floor(pos.x() / spacing + 0.5)))
        row = min(self.grid_elements, max(0, math.floor(pos.y() / spacing + 0.5)))
        intersection = QPointF(column * spacing, row * spacing)
        if distance(intersection, pos) <= self.grid_tolerance:
            return True, intersection
        return False, QPointF(pos)

    # Guides -------------------------------------------------------------
    def construct_guides(self, pos: QPointF, points: Sequence[QPointF]) -> GuideState:
        """Find the guides through *points* passing within tolerance of *pos*."""

        tolerance = self.guide_tolerance
        center = self.center
        state = GuideState()

        pos_radius = distance(center, pos)
        for point in points:
            for angle in self.angles:
                line = line_through(point, angle)
                if perpendicular_distance(line, pos) <= tolerance:
                    state.lines.append(line)
                    state.ordered.append(line)

            radius = distance(center, point)
            if radius >= EPSILON and abs(pos_radius - radius) <= tolerance:
                circle = Circle(QPointF(center), radius)
                state.circles.append(circle)
                state.ordered.append(circle)

        state.display_lines = [self._clip(line) for line in state.lines]
        state.snap_points = [
            point for point in self._intersections(state) if contains(point, self.size)
        ]
        return state

    def snap_to_guide(self, pos: QPointF, guides: GuideState) -> tuple[bool, QPointF]:
        nearest = self._nearest(pos, guides.snap_points)
        if nearest is not None and distance(nearest, pos) <= self.guide_tolerance:
            return True, nearest

        # Earlier source points win ties.
        on_guides = [
            guide.closest_point(pos) if isinstance(guide, Circle) else project(guide, pos)
            for guide in guides.ordered
        ]
        nearest = self._nearest(pos, on_guides)
        if nearest is not None:
            return True, nearest
        return False, QPointF(pos)

    def snap(self, pos: QPointF, points: Sequence[QPointF]) -> tuple[QPointF, GuideState]:
        """Return the snapped position for *pos* and the guides used to find it.

        A grid intersection in range always wins over guides.
        """

        if self.grid_enabled:
            snapped, grid_point = self.snap_to_grid(pos)
            if snapped:
                return grid_point, GuideState()

        if not self.guides_enabled:
            return QPointF(pos), GuideState()

        guides = self.construct_guides(pos, points)
        snapped, guide_point = self.snap_to_guide(pos, guides)
        if snapped:
            return guide_point, guides
        return QPointF(pos), guides

    # Helpers ------------------------------------------------------------
    def _intersections(self, guides: GuideState) -> list[QPointF]:
        found: list[QPointF] = []
        lines = guides.lines
        for i, first in enumerate(lines):
            for second in lines[i + 1:]:
                point = intersect_lines(first, second)
                if point is not None:
                    found.append(point)
        for line in lines:
            for edge in self.edges:
                point = intersect_lines(line, edge)
                if point is not None:
                    found.append(point)
        for circle in guides.circles:
            for line in lines:
                found.extend(circle.intersect_line(line))
            for edge in self.edges:
                found.extend(circle.intersect_line(edge))
        return found

    def _clip(self, line: QLineF) -> QLineF:
        """Extend *line* across the visible square for drawing."""

        crossings = [
            point
            for point in (intersect_lines(line, edge) for edge in self.edges)
            if point is not None and contains(point, self.size)
        ]
        if len(crossings) < 2:
            return QLineF(line)
        start = crossings[0]
        end = max(crossings, key=lambda point: distance(start, point))
        return QLineF(start, end)

    @staticmethod
    def _nearest(pos: QPointF, candidates: Sequence[QPointF]) -> QPointF | None:
        nearest = None
        nearest_distance = math.inf
        for candidate in candidates:
            candidate_distance = distance(candidate, pos)
            if candidate_distance < nearest_distance:
                nearest = candidate
                nearest_distance = candidate_distance
        return QPointF(nearest) if nearest is not None else None
