from enum import Enum
from typing import Sequence

from PySide6.QtCore import QPointF, QRectF
from PySide6.QtGui import QPainterPath


class ToolMode(Enum):
    MOVE_TO = "move_to"
    LINE_TO = "line_to"
    CUBIC_TO = "cubic_to"
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"


class BaseTool:
    """Abstract base class for all path tools.

    A tool collects ``points_required`` points and then appends its geometry
    to the symbol path in :meth:`build`.
    """

    name = None
    mode = None
    shortcut = None
    points_required = 1
    # LineTo and CubicTo need somewhere to start from.
    needs_start_point = False
    # The first point is taken on press and the second on release.
    rubber_band = False
    prompts: tuple[str, ...] = ()

    def build(self, path: QPainterPath, points: Sequence[QPointF]) -> QPainterPath:
        raise NotImplementedError

    def prompt(self, entered: int) -> str:
        """Status text asking for the next point once *entered* points exist."""
        if not self.prompts:
            return self.name or ""
        return f"{self.name}: {self.prompts[min(entered, len(self.prompts) - 1)]}"

    # Geometry helpers ----------------------------------------------------
    @staticmethod
    def _rect_from_points(p1: QPointF, p2: QPointF) -> QRectF:
        """Return a :class:`QRectF` spanning *p1* and *p2* in either drag direction."""

        left = min(p1.x(), p2.x())
        right = max(p1.x(), p2.x())
        top = min(p1.y(), p2.y())
        bottom = max(p1.y(), p2.y())
        return QRectF(QPointF(left, top), QPointF(right, bottom))

    @staticmethod
    def _extend(path: QPainterPath) -> QPainterPath:
        return QPainterPath(path)
