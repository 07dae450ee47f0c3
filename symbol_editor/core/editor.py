from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional, Sequence

from loguru import logger
from PySide6.QtCore import QObject, QPointF, QRectF, Qt, Signal, Slot
from PySide6.QtGui import QPainterPath

from symbol_editor.core import interaction, transform
from symbol_editor.core.command import (
    Command,
    MovePointCommand,
    ReplacePathCommand,
    SetAttributeCommand,
    TransformCommand,
)
from symbol_editor.core.geometry import distance
from symbol_editor.core.interaction import (
    ActivePoint,
    CommitPoints,
    CommittedPoint,
    DragTarget,
    InteractionState,
    MovePoint,
    PointerEvent,
    ShowMessage,
)
from symbol_editor.core.path_model import PathModel, construct_path, deconstruct_path
from symbol_editor.core.settings_controller import SettingsController
from symbol_editor.core.snap import GuideState, SnapEngine
from symbol_editor.core.symbol import Symbol
from symbol_editor.core.undo import UndoManager
from symbol_editor.tools import ToolMode, get_tool

# Line widths are stepped in hundredths, rounding stops float drift.
LINE_WIDTH_DECIMALS = 6


class Editor(QObject):
    """Edits one symbol at a time in symbol space, the unit square.

    Pointer input arrives through :meth:`press`, :meth:`move` and
    :meth:`release` in symbol coordinates. Every change to the symbol goes
    through :meth:`execute_command` so it can be undone.
    """

    message = Signal(str)
    min_line_width = Signal(bool)
    max_line_width = Signal(bool)
    path_changed = Signal()
    undo_stack_changed = Signal()
    clean_changed = Signal(bool)

    def __init__(self, settings_controller: SettingsController | None = None):
        super().__init__()
        self.settings_controller = settings_controller or SettingsController()
        settings = self.settings_controller

        self.model = PathModel(default_line_width=settings.line_width)
        self.undo_manager = UndoManager()
        self.snap_engine = SnapEngine(
            size=1.0,
            grid_elements=settings.grid_elements,
            grid_tolerance=settings.grid_tolerance,
            guide_tolerance=settings.guide_tolerance,
            angles=settings.angles,
        )
        self.snap_engine.grid_enabled = settings.snap_enabled
        self.snap_engine.guides_enabled = settings.guides_enabled
        self.node_tolerance = settings.node_tolerance

        self.index = 0
        self.state = InteractionState()
        self.guides = GuideState()
        self._was_clean = True

    # Symbol exchange ----------------------------------------------------
    def symbol(self) -> tuple[int, Symbol]:
        attributes = self.model.attributes()
        return self.index, Symbol(path=self.model.construct(), **attributes)

    def set_symbol(self, pair: tuple[int, Symbol]):
        index, symbol = pair
        self.model.clear()
        self.model.set_path(symbol.path)
        self.model.set_attributes(
            {
                "filled": symbol.filled,
                "fill_rule": symbol.fill_rule,
                "cap_style": symbol.cap_style,
                "join_style": symbol.join_style,
                "line_width": symbol.line_width,
            }
        )
        self.index = index
        self._reset_session()
        logger.debug("Loaded symbol {} with {} elements", index, len(self.model.elements))

    def clear(self):
        """Start a fresh symbol. This is not an undoable step."""
        self.model.clear()
        self.index = 0
        self._reset_session()
        logger.debug("Editor cleared")

    def _reset_session(self):
        self.undo_manager.clear()
        self.state = InteractionState(tool=self.state.tool)
        self.guides = GuideState()
        self._history_changed()
        self._emit_line_width_limits()
        self.path_changed.emit()

    # History ------------------------------------------------------------
    def execute_command(self, command: Command):
        command.execute()
        self.undo_manager.add_command(command)
        self._history_changed()
        self.path_changed.emit()

    @Slot()
    def undo(self):
        if not self.undo_manager.can_undo():
            return
        self._discard_input()
        self.undo_manager.undo()
        self._history_changed()
        self._emit_line_width_limits()
        self.path_changed.emit()

    @Slot()
    def redo(self):
        if not self.undo_manager.can_redo():
            return
        self._discard_input()
        self.undo_manager.redo()
        self._history_changed()
        self._emit_line_width_limits()
        self.path_changed.emit()

    def set_clean(self):
        self.undo_manager.set_clean()
        self._history_changed()

    def is_clean(self) -> bool:
        return self.undo_manager.is_clean()

    def undo_text(self) -> str:
        return self.undo_manager.undo_text()

    def redo_text(self) -> str:
        return self.undo_manager.redo_text()

    def _history_changed(self):
        self.undo_stack_changed.emit()
        clean = self.undo_manager.is_clean()
        if clean != self._was_clean:
            self._was_clean = clean
            self.clean_changed.emit(clean)

    # Path building ------------------------------------------------------
    def commit(self, mode: ToolMode, points: Sequence[QPointF]) -> QPainterPath:
        tool = get_tool(mode)
        path = tool.build(self.model.construct(), list(points))
        after = deconstruct_path(path)
        if after == self.model.snapshot():
            self.message.emit(f"{tool.name}: nothing to add")
            return self.model.construct()
        logger.debug("{} committed {} points", tool.name, len(points))
        self.execute_command(ReplacePathCommand(self.model, after, tool.name))
        return self.model.construct()

    def move_to(self, to: QPointF) -> QPainterPath:
        return self.commit(ToolMode.MOVE_TO, [to])

    def line_to(self, to: QPointF) -> QPainterPath:
        return self.commit(ToolMode.LINE_TO, [to])

    def cubic_to(self, control1: QPointF, control2: QPointF, to: QPointF) -> QPainterPath:
        return self.commit(ToolMode.CUBIC_TO, [control1, control2, to])

    def add_rectangle(self, from_point: QPointF, to: QPointF) -> QPainterPath:
        return self.commit(ToolMode.RECTANGLE, [from_point, to])

    def add_ellipse(self, from_point: QPointF, to: QPointF) -> QPainterPath:
        return self.commit(ToolMode.ELLIPSE, [from_point, to])

    @Slot()
    def remove_last(self):
        if self.model.is_empty():
            return
        self._discard_input()
        path = construct_path(self.model.snapshot().without_last(), self.model.fill_rule)
        self.execute_command(
            ReplacePathCommand(self.model, deconstruct_path(path), "Remove Last")
        )

    def move_point(self, index: int, to: QPointF):
        data = self.model.snapshot()
        if not 0 <= index < len(data.points) or data.points[index] == to:
            return
        moved = deconstruct_path(construct_path(data.with_point(index, to)))
        if moved.elements == data.elements:
            self.execute_command(MovePointCommand(self.model, index, to))
        else:
            # The move collapsed a segment, record the normalised path instead.
            self.execute_command(ReplacePathCommand(self.model, moved, "Move Point"))

    # Transforms ---------------------------------------------------------
    @Slot()
    def rotate_left(self):
        self._transform("rotate_left")

    @Slot()
    def rotate_right(self):
        self._transform("rotate_right")

    @Slot()
    def flip_horizontal(self):
        self._transform("flip_horizontal")

    @Slot()
    def flip_vertical(self):
        self._transform("flip_vertical")

    def _transform(self, name: str):
        if self.model.is_empty():
            # Nothing committed to record, only points in progress follow.
            self._transform_active_points(name)
            self.path_changed.emit()
            return
        command = TransformCommand(
            self.model, name, self.snap_engine.center, self._transform_active_points
        )
        self.execute_command(command)

    def _transform_active_points(self, name: str):
        if not self.state.active_points:
            return
        center = self.snap_engine.center
        points = transform.apply(name, self.state.active_points, center)
        rubber_band = self.state.rubber_band
        if rubber_band is not None:
            corners = transform.apply(
                name, [rubber_band.topLeft(), rubber_band.bottomRight()], center
            )
            rubber_band = QRectF(*corners).normalized()
        self.state = replace(self.state, active_points=tuple(points), rubber_band=rubber_band)

    # Attributes ---------------------------------------------------------
    @Slot(bool)
    def set_filled(self, filled: bool):
        self._set_attribute("filled", bool(filled))

    def set_fill_rule(self, rule: Qt.FillRule):
        self._set_attribute("fill_rule", rule)

    def set_cap_style(self, cap_style: Qt.PenCapStyle):
        self._set_attribute("cap_style", cap_style)

    def set_join_style(self, join_style: Qt.PenJoinStyle):
        self._set_attribute("join_style", join_style)

    @Slot(float)
    def set_line_width(self, width: float):
        clamped = round(self.settings_controller.clamp_line_width(width), LINE_WIDTH_DECIMALS)
        self._set_attribute("line_width", clamped)
        self._emit_line_width_limits()

    @Slot()
    def increase_line_width(self):
        self.set_line_width(self.model.line_width + self.settings_controller.line_width_step)

    @Slot()
    def decrease_line_width(self):
        self.set_line_width(self.model.line_width - self.settings_controller.line_width_step)

    def _set_attribute(self, name: str, value):
        if getattr(self.model, name) == value:
            return
        self.execute_command(SetAttributeCommand(self.model, name, value))

    def _emit_line_width_limits(self):
        settings = self.settings_controller
        width = self.model.line_width
        self.min_line_width.emit(width <= settings.min_line_width + 1e-9)
        self.max_line_width.emit(width >= settings.max_line_width - 1e-9)

    # Tool and snap selection ---------------------------------------------
    def select_tool(self, mode: ToolMode):
        self.state, effects = interaction.select_tool(self.state, mode, self.model.is_empty())
        self.guides = GuideState()
        self._apply(effects)
        self.path_changed.emit()

    @Slot(bool)
    def enable_snap(self, enabled: bool):
        self.snap_engine.grid_enabled = bool(enabled)

    @Slot(bool)
    def enable_guides(self, enabled: bool):
        self.snap_engine.guides_enabled = bool(enabled)
        if not enabled:
            self.guides = GuideState()
            self.path_changed.emit()

    @property
    def tool(self) -> ToolMode:
        return self.state.tool

    # Pointer input ------------------------------------------------------
    def press(self, pos: QPointF):
        hit = self.node_under_cursor(pos)
        if hit is not None:
            pos = self._target_position(hit)
            self.guides = GuideState()
        else:
            pos = self.snap_point(pos)
        event = PointerEvent(pos, hit, self.model.is_empty())
        self.state, effects = interaction.on_press(self.state, event)
        self._apply(effects)
        self.path_changed.emit()

    def move(self, pos: QPointF):
        event = PointerEvent(self.snap_point(pos), None, self.model.is_empty())
        self.state, effects = interaction.on_move(self.state, event)
        self._apply(effects)
        self.path_changed.emit()

    def release(self, pos: QPointF):
        event = PointerEvent(self.snap_point(pos), None, self.model.is_empty())
        self.state, effects = interaction.on_release(self.state, event)
        self._apply(effects)
        self.path_changed.emit()

    @Slot()
    def cancel(self):
        self._discard_input()
        self.path_changed.emit()

    def _discard_input(self):
        self.state, effects = interaction.cancel(self.state, self.model.is_empty())
        self.guides = GuideState()
        self._apply(effects)

    def _apply(self, effects):
        for effect in effects:
            if isinstance(effect, CommitPoints):
                self.commit(effect.tool, effect.points)
                self.message.emit(interaction.prompt(self.state, self.model.is_empty()).text)
            elif isinstance(effect, MovePoint):
                self.move_point(effect.index, effect.pos)
            elif isinstance(effect, ShowMessage):
                self.message.emit(effect.text)

    def snap_point(self, pos: QPointF) -> QPointF:
        snapped, self.guides = self.snap_engine.snap(pos, self._guide_sources())
        return snapped

    def _guide_sources(self) -> list[QPointF]:
        committed = list(self.model.points)
        active = list(self.state.active_points)
        drag = self.state.drag
        if drag is not None:
            if isinstance(drag.target, CommittedPoint):
                committed.pop(drag.target.index)
            else:
                active.pop(drag.target.index)
        return committed + active

    def node_under_cursor(self, pos: QPointF) -> Optional[DragTarget]:
        """The committed or active point within reach of *pos*, nearest first."""

        candidates = [
            (CommittedPoint(index), point) for index, point in enumerate(self.model.points)
        ]
        candidates.extend(
            (ActivePoint(index), point) for index, point in enumerate(self.state.active_points)
        )
        nearest: Optional[DragTarget] = None
        nearest_distance = math.inf
        for target, point in candidates:
            point_distance = distance(point, pos)
            if point_distance <= self.node_tolerance and point_distance < nearest_distance:
                nearest, nearest_distance = target, point_distance
        return nearest

    def _target_position(self, target: DragTarget) -> QPointF:
        if isinstance(target, ActivePoint):
            return QPointF(self.state.active_points[target.index])
        return self.model.points[target.index]

    # Host surface -------------------------------------------------------
    def painter_path(self) -> QPainterPath:
        """The path to draw, including a committed point being dragged."""

        drag = self.state.drag
        if drag is not None and isinstance(drag.target, CommittedPoint):
            data = self.model.snapshot().with_point(drag.target.index, drag.current)
            return self.model.construct(data)
        return self.model.construct()

    @property
    def active_points(self) -> tuple[QPointF, ...]:
        return self.state.active_points

    @property
    def rubber_band(self) -> Optional[QRectF]:
        return self.state.rubber_band
