from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QPainterPath


class PathElement(Enum):
    MOVE_TO = "move_to"
    LINE_TO = "line_to"
    CUBIC_TO = "cubic_to"

    @property
    def points_required(self) -> int:
        return 3 if self is PathElement.CUBIC_TO else 1


def points_required(elements: Iterable[PathElement]) -> int:
    return sum(element.points_required for element in elements)


@dataclass(frozen=True)
class PathData:
    """Immutable pair of co-indexed element and point sequences."""

    elements: tuple[PathElement, ...] = ()
    points: tuple[QPointF, ...] = ()

    def is_valid(self) -> bool:
        return points_required(self.elements) == len(self.points)

    def is_empty(self) -> bool:
        return not self.elements

    def with_point(self, index: int, point: QPointF) -> "PathData":
        points = list(self.points)
        points[index] = QPointF(point)
        return PathData(self.elements, tuple(points))

    def without_last(self) -> "PathData":
        if not self.elements:
            return self
        dropped = self.elements[-1].points_required
        return PathData(self.elements[:-1], self.points[:-dropped])

    def __eq__(self, other):
        if not isinstance(other, PathData):
            return NotImplemented
        return self.elements == other.elements and self.points == other.points

    def __hash__(self):
        return hash((self.elements, tuple((p.x(), p.y()) for p in self.points)))


def construct_path(data: PathData, fill_rule: Qt.FillRule = Qt.WindingFill) -> QPainterPath:
    """Build a renderable path by replaying the elements over the points.

    The caller guarantees ``data.is_valid()``.
    """

    path = QPainterPath()
    points = iter(data.points)
    for element in data.elements:
        if element is PathElement.MOVE_TO:
            path.moveTo(next(points))
        elif element is PathElement.LINE_TO:
            path.lineTo(next(points))
        else:
            control1 = next(points)
            control2 = next(points)
            path.cubicTo(control1, control2, next(points))
    # Setting the fill rule on an empty path would give it a MoveTo(0, 0).
    if data.elements:
        path.setFillRule(fill_rule)
    return path


def deconstruct_path(path: QPainterPath) -> PathData:
    """Split a renderable path back into its elements and points."""

    elements: list[PathElement] = []
    points: list[QPointF] = []
    count = path.elementCount()
    index = 0
    while index < count:
        element = path.elementAt(index)
        if element.isMoveTo():
            elements.append(PathElement.MOVE_TO)
            points.append(QPointF(element.x, element.y))
        elif element.isLineTo():
            elements.append(PathElement.LINE_TO)
            points.append(QPointF(element.x, element.y))
        elif element.isCurveTo():
            elements.append(PathElement.CUBIC_TO)
            points.append(QPointF(element.x, element.y))
            for offset in (1, 2):
                data = path.elementAt(index + offset)
                points.append(QPointF(data.x, data.y))
            index += 2
        index += 1
    return PathData(tuple(elements), tuple(points))


class PathModel:
    """The symbol being edited: its path sequences and rendering attributes.

    The element and point sequences can only be changed together, either by
    replacing the whole :class:`PathData` or by handing over a renderable path
    that gets deconstructed.
    """

    DEFAULT_ATTRIBUTES = {
        "filled": False,
        "fill_rule": Qt.WindingFill,
        "cap_style": Qt.RoundCap,
        "join_style": Qt.RoundJoin,
        "line_width": 0.01,
    }

    def __init__(self, default_line_width: float | None = None):
        self._defaults = dict(self.DEFAULT_ATTRIBUTES)
        if default_line_width is not None:
            self._defaults["line_width"] = float(default_line_width)
        self._data = PathData()
        self.filled = self._defaults["filled"]
        self.fill_rule = self._defaults["fill_rule"]
        self.cap_style = self._defaults["cap_style"]
        self.join_style = self._defaults["join_style"]
        self.line_width = self._defaults["line_width"]

    @property
    def elements(self) -> tuple[PathElement, ...]:
        return self._data.elements

    @property
    def points(self) -> tuple[QPointF, ...]:
        return tuple(QPointF(point) for point in self._data.points)

    def snapshot(self) -> PathData:
        return self._data

    def is_empty(self) -> bool:
        return self._data.is_empty()

    def replace(self, data: PathData):
        if not data.is_valid():
            raise ValueError(
                f"{len(data.points)} points can not be consumed by "
                f"{len(data.elements)} elements"
            )
        self._data = PathData(
            tuple(data.elements), tuple(QPointF(point) for point in data.points)
        )

    def set_path(self, path: QPainterPath):
        self.replace(deconstruct_path(path))

    def construct(self, data: PathData | None = None) -> QPainterPath:
        return construct_path(self._data if data is None else data, self.fill_rule)

    def attributes(self) -> dict:
        return {name: getattr(self, name) for name in self.DEFAULT_ATTRIBUTES}

    def set_attribute(self, name: str, value):
        if name not in self.DEFAULT_ATTRIBUTES:
            raise AttributeError(f"unknown symbol attribute {name!r}")
        setattr(self, name, value)

    def set_attributes(self, attributes: dict):
        for name, value in attributes.items():
            self.set_attribute(name, value)

    def clear(self):
        self._data = PathData()
        self.set_attributes(self._defaults)

