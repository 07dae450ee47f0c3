from PySide6.QtCore import QPoint, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QTransform
from PySide6.QtWidgets import QWidget

from symbol_editor.core.editor import Editor
from symbol_editor.tools import registry


class EditorWidget(QWidget):
    """Draws the editor's symbol on a square grid and feeds it pointer input."""

    cursor_pos_changed = Signal(QPointF)

    GRID_MINOR_COLOR = QColor("#64808080")
    GRID_MAJOR_COLOR = QColor("#64000000")
    PATH_COLOR = QColor(Qt.black)
    NODE_COLOR = QColor(Qt.darkBlue)
    ACTIVE_NODE_COLOR = QColor(Qt.red)
    GUIDE_COLOR = QColor("#8000a000")
    SNAP_POINT_COLOR = QColor(Qt.darkGreen)
    NODE_RADIUS = 4

    def __init__(self, editor: Editor, parent=None):
        super().__init__(parent)
        self.editor = editor
        settings = editor.settings_controller
        self.grid_elements = settings.grid_elements
        self.grid_group = settings.grid_group
        self.setFixedSize(settings.grid_size, settings.grid_size)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.editor.path_changed.connect(self.update)

    # Coordinate mapping -------------------------------------------------
    @property
    def scale(self) -> float:
        return float(min(self.width(), self.height()))

    def to_symbol(self, pos) -> QPointF:
        return QPointF(pos.x() / self.scale, pos.y() / self.scale)

    def to_screen(self, point: QPointF) -> QPoint:
        return QPoint(round(point.x() * self.scale), round(point.y() * self.scale))

    # Input --------------------------------------------------------------
    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.editor.press(self.to_symbol(event.position()))

    def mouseMoveEvent(self, event):
        pos = self.to_symbol(event.position())
        self.cursor_pos_changed.emit(pos)
        self.editor.move(pos)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.editor.release(self.to_symbol(event.position()))

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape:
            self.editor.cancel()
            return
        tool = registry.tool_for_shortcut(event.text())
        if tool is not None:
            self.editor.select_tool(tool.mode)
            return
        super().keyPressEvent(event)

    # Painting -----------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), Qt.white)
        self.draw_grid(painter)
        self.draw_symbol(painter)
        self.draw_guides(painter)
        self.draw_nodes(painter)
        self.draw_rubber_band(painter)
        painter.end()

    def draw_grid(self, painter):
        size = self.scale
        minor_pen = QPen(self.GRID_MINOR_COLOR)
        major_pen = QPen(self.GRID_MAJOR_COLOR)
        for line in range(self.grid_elements + 1):
            offset = round(line * size / self.grid_elements)
            painter.setPen(major_pen if line % self.grid_group == 0 else minor_pen)
            painter.drawLine(offset, 0, offset, round(size))
            painter.drawLine(0, offset, round(size), offset)

    def draw_symbol(self, painter):
        _, symbol = self.editor.symbol()
        painter.save()
        painter.setTransform(QTransform.fromScale(self.scale, self.scale))
        painter.setPen(symbol.pen(self.PATH_COLOR))
        painter.setBrush(symbol.brush(self.PATH_COLOR))
        painter.drawPath(self.editor.painter_path())
        painter.restore()

    def draw_guides(self, painter):
        guides = self.editor.guides
        pen = QPen(self.GUIDE_COLOR)
        pen.setStyle(Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        for line in guides.display_lines:
            painter.drawLine(self.to_screen(line.p1()), self.to_screen(line.p2()))
        for circle in guides.circles:
            radius = circle.radius * self.scale
            painter.drawEllipse(QPointF(self.to_screen(circle.center)), radius, radius)
        painter.setPen(QPen(self.SNAP_POINT_COLOR))
        for point in guides.snap_points:
            painter.drawEllipse(self.to_screen(point), 2, 2)

    def draw_nodes(self, painter):
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(self.NODE_COLOR))
        for point in self.editor.model.points:
            painter.drawEllipse(self.to_screen(point), self.NODE_RADIUS, self.NODE_RADIUS)
        painter.setPen(QPen(self.ACTIVE_NODE_COLOR))
        for point in self.editor.active_points:
            painter.drawEllipse(self.to_screen(point), self.NODE_RADIUS, self.NODE_RADIUS)

    def draw_rubber_band(self, painter):
        rubber_band = self.editor.rubber_band
        if rubber_band is None:
            return
        pen = QPen(self.PATH_COLOR)
        pen.setStyle(Qt.DotLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(
            QRectF(
                QPointF(self.to_screen(rubber_band.topLeft())),
                QPointF(self.to_screen(rubber_band.bottomRight())),
            )
        )
