"""Pointer driven tool state machine.

Every handler takes the current :class:`InteractionState` and an event and
returns the next state together with a list of effects for the editor to
apply. Nothing here touches the symbol itself, which keeps the handlers usable
without a display.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from PySide6.QtCore import QPointF, QRectF

from symbol_editor.tools import ToolMode, get_tool


@dataclass(frozen=True)
class ActivePoint:
    index: int


@dataclass(frozen=True)
class CommittedPoint:
    index: int


DragTarget = Union[ActivePoint, CommittedPoint]


@dataclass(frozen=True)
class Drag:
    target: DragTarget
    origin: QPointF
    current: QPointF


@dataclass(frozen=True)
class InteractionState:
    tool: ToolMode = ToolMode.LINE_TO
    active_points: tuple[QPointF, ...] = ()
    drag: Optional[Drag] = None
    rubber_band: Optional[QRectF] = None


@dataclass(frozen=True)
class PointerEvent:
    """A pointer position in symbol space, already snapped.

    ``hit`` is the point under the cursor when the button went down.
    """

    pos: QPointF
    hit: Optional[DragTarget] = None
    path_empty: bool = False


@dataclass(frozen=True)
class CommitPoints:
    tool: ToolMode
    points: tuple[QPointF, ...]


@dataclass(frozen=True)
class MovePoint:
    index: int
    pos: QPointF


@dataclass(frozen=True)
class ShowMessage:
    text: str


Effect = Union[CommitPoints, MovePoint, ShowMessage]
Result = tuple[InteractionState, list]


def required_points(tool: ToolMode, path_empty: bool) -> int:
    """Points needed before *tool* commits.

    An empty path always starts with a move, so LineTo and CubicTo commit
    their first point on their own as a MoveTo.
    """
    tool_cls = get_tool(tool)
    if path_empty and tool_cls.needs_start_point:
        return 1
    return tool_cls.points_required


def prompt(state: InteractionState, path_empty: bool) -> ShowMessage:
    tool = get_tool(state.tool)
    if path_empty and tool.needs_start_point and not state.active_points:
        return ShowMessage(f"{tool.name}: Select the start point")
    return ShowMessage(tool.prompt(len(state.active_points)))


def select_tool(state: InteractionState, tool: ToolMode, path_empty: bool = False) -> Result:
    next_state = InteractionState(tool=tool)
    return next_state, [prompt(next_state, path_empty)]


def cancel(state: InteractionState, path_empty: bool = False) -> Result:
    next_state = InteractionState(tool=state.tool)
    return next_state, [prompt(next_state, path_empty)]


def on_press(state: InteractionState, event: PointerEvent) -> Result:
    if state.drag is not None:
        return state, []
    if event.hit is not None:
        drag = Drag(event.hit, QPointF(event.pos), QPointF(event.pos))
        return replace(state, drag=drag), [ShowMessage("Drag the point to its new position")]
    if get_tool(state.tool).rubber_band:
        return (
            replace(
                state,
                active_points=(QPointF(event.pos),),
                rubber_band=QRectF(event.pos, event.pos),
            ),
            [],
        )
    return state, []


def on_move(state: InteractionState, event: PointerEvent) -> Result:
    if state.drag is not None:
        drag = replace(state.drag, current=QPointF(event.pos))
        next_state = replace(state, drag=drag)
        if isinstance(drag.target, ActivePoint):
            next_state = replace(
                next_state,
                active_points=_replaced(state.active_points, drag.target.index, event.pos),
            )
        return next_state, []
    if state.rubber_band is not None and state.active_points:
        rubber_band = QRectF(state.active_points[0], event.pos).normalized()
        return replace(state, rubber_band=rubber_band), []
    return state, []


def on_release(state: InteractionState, event: PointerEvent) -> Result:
    if state.drag is not None:
        drag = state.drag
        next_state = replace(state, drag=None)
        if drag.current == drag.origin:
            # Pressed on a point without moving it.
            return next_state, [prompt(next_state, event.path_empty)]
        if isinstance(drag.target, ActivePoint):
            active_points = _replaced(state.active_points, drag.target.index, event.pos)
            next_state = replace(next_state, active_points=active_points)
            return next_state, [prompt(next_state, event.path_empty)]
        return next_state, [MovePoint(drag.target.index, QPointF(event.pos))]

    if state.rubber_band is not None:
        if not state.active_points:
            return replace(state, rubber_band=None), []
        state = replace(state, rubber_band=None)
    elif get_tool(state.tool).rubber_band:
        # Release without a press, nothing to finish.
        return state, []

    return _accept_point(state, event)


def _accept_point(state: InteractionState, event: PointerEvent) -> Result:
    active_points = state.active_points + (QPointF(event.pos),)
    required = required_points(state.tool, event.path_empty)
    if len(active_points) < required:
        next_state = replace(state, active_points=active_points)
        return next_state, [prompt(next_state, event.path_empty)]

    tool = state.tool
    if event.path_empty and get_tool(tool).needs_start_point:
        tool = ToolMode.MOVE_TO
    next_state = replace(state, active_points=active_points[required:])
    return next_state, [CommitPoints(tool, active_points[:required])]


def _replaced(points: tuple[QPointF, ...], index: int, pos: QPointF) -> tuple[QPointF, ...]:
    updated = list(points)
    updated[index] = QPointF(pos)
    return tuple(updated)

