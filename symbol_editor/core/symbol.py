from __future__ import annotations

from dataclasses import dataclass, field

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor, QPainterPath, QPen


@dataclass
class Symbol:
    """A path plus the attributes used to draw it.

    This is the unit exchanged with the symbol library. The library refers to
    symbols by index; index 0 is a symbol that has not been saved yet.
    """

    path: QPainterPath = field(default_factory=QPainterPath)
    filled: bool = False
    fill_rule: Qt.FillRule = Qt.WindingFill
    cap_style: Qt.PenCapStyle = Qt.RoundCap
    join_style: Qt.PenJoinStyle = Qt.RoundJoin
    line_width: float = 0.01

    def pen(self, color: QColor | None = None) -> QPen:
        pen = QPen(color if color is not None else QColor(Qt.black))
        pen.setWidthF(self.line_width)
        pen.setCapStyle(self.cap_style)
        pen.setJoinStyle(self.join_style)
        return pen

    def brush(self, color: QColor | None = None) -> QBrush:
        if not self.filled:
            return QBrush(Qt.NoBrush)
        return QBrush(color if color is not None else QColor(Qt.black))
