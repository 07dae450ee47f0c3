from PySide6.QtCore import QPointF

from symbol_editor.core import interaction
from symbol_editor.core.interaction import (
    ActivePoint,
    CommitPoints,
    CommittedPoint,
    InteractionState,
    MovePoint,
    PointerEvent,
    ShowMessage,
)
from symbol_editor.tools import ToolMode


def _click(state, x, y, path_empty=False, hit=None):
    event = PointerEvent(QPointF(x, y), hit, path_empty)
    state, press_effects = interaction.on_press(state, event)
    state, release_effects = interaction.on_release(state, event)
    return state, press_effects + release_effects


def _commits(effects):
    return [effect for effect in effects if isinstance(effect, CommitPoints)]


def test_required_points():
    assert interaction.required_points(ToolMode.LINE_TO, path_empty=True) == 1
    assert interaction.required_points(ToolMode.CUBIC_TO, path_empty=True) == 1
    assert interaction.required_points(ToolMode.CUBIC_TO, path_empty=False) == 3
    assert interaction.required_points(ToolMode.RECTANGLE, path_empty=True) == 2
    assert interaction.required_points(ToolMode.MOVE_TO, path_empty=False) == 1


def test_first_line_point_on_empty_path_becomes_a_move():
    state = InteractionState(tool=ToolMode.LINE_TO)

    state, effects = _click(state, 0, 0, path_empty=True)

    assert _commits(effects) == [CommitPoints(ToolMode.MOVE_TO, (QPointF(0, 0),))]
    assert state.active_points == ()


def test_line_to_commits_each_point():
    state = InteractionState(tool=ToolMode.LINE_TO)

    state, effects = _click(state, 1, 0)

    assert _commits(effects) == [CommitPoints(ToolMode.LINE_TO, (QPointF(1, 0),))]
    assert state.active_points == ()


def test_cubic_to_accumulates_three_points():
    state = InteractionState(tool=ToolMode.CUBIC_TO)

    state, effects = _click(state, 0, 0)
    assert state.active_points == (QPointF(0, 0),)
    assert _commits(effects) == []
    assert isinstance(effects[-1], ShowMessage)
    assert "second control point" in effects[-1].text

    state, effects = _click(state, 1, 1)
    assert len(state.active_points) == 2
    assert _commits(effects) == []

    state, effects = _click(state, 2, 0)
    assert _commits(effects) == [
        CommitPoints(ToolMode.CUBIC_TO, (QPointF(0, 0), QPointF(1, 1), QPointF(2, 0)))
    ]
    assert state.active_points == ()


def test_select_tool_discards_active_points():
    state = InteractionState(tool=ToolMode.CUBIC_TO, active_points=(QPointF(0.5, 0.5),))

    state, effects = interaction.select_tool(state, ToolMode.LINE_TO)

    assert state == InteractionState(tool=ToolMode.LINE_TO)
    assert effects == [ShowMessage("Line To: Select the end point of the line")]


def test_cancel_keeps_tool():
    state = InteractionState(tool=ToolMode.CUBIC_TO, active_points=(QPointF(0.5, 0.5),))

    state, _ = interaction.cancel(state)

    assert state.tool is ToolMode.CUBIC_TO
    assert state.active_points == ()


def test_rectangle_uses_rubber_band():
    state = InteractionState(tool=ToolMode.RECTANGLE)

    state, _ = interaction.on_press(state, PointerEvent(QPointF(0.25, 0.25)))
    assert state.rubber_band is not None
    state, _ = interaction.on_move(state, PointerEvent(QPointF(0.75, 0.5)))
    assert state.rubber_band.width() == 0.5
    assert state.rubber_band.height() == 0.25
    state, effects = interaction.on_release(state, PointerEvent(QPointF(0.75, 0.5)))

    assert state.rubber_band is None
    assert state.active_points == ()
    assert _commits(effects) == [
        CommitPoints(ToolMode.RECTANGLE, (QPointF(0.25, 0.25), QPointF(0.75, 0.5)))
    ]


def test_release_without_press_does_nothing_for_rubber_band_tools():
    state = InteractionState(tool=ToolMode.ELLIPSE)

    next_state, effects = interaction.on_release(state, PointerEvent(QPointF(0.5, 0.5)))

    assert next_state == state
    assert effects == []


def test_drag_committed_point():
    state = InteractionState(tool=ToolMode.LINE_TO)
    target = CommittedPoint(1)

    state, _ = interaction.on_press(state, PointerEvent(QPointF(0.5, 0.5), target))
    assert state.drag.target == target
    state, _ = interaction.on_move(state, PointerEvent(QPointF(0.7, 0.6)))
    assert state.drag.current == QPointF(0.7, 0.6)
    state, effects = interaction.on_release(state, PointerEvent(QPointF(0.75, 0.6)))

    assert state.drag is None
    assert effects == [MovePoint(1, QPointF(0.75, 0.6))]


def test_press_on_point_without_moving_is_not_a_move():
    state = InteractionState(tool=ToolMode.LINE_TO)
    event = PointerEvent(QPointF(0.5, 0.5), CommittedPoint(0))

    state, _ = interaction.on_press(state, event)
    state, effects = interaction.on_release(state, event)

    assert state.drag is None
    assert not any(isinstance(effect, (MovePoint, CommitPoints)) for effect in effects)


def test_drag_active_point_updates_in_place():
    state = InteractionState(
        tool=ToolMode.CUBIC_TO, active_points=(QPointF(0.1, 0.1), QPointF(0.2, 0.2))
    )

    state, _ = interaction.on_press(state, PointerEvent(QPointF(0.1, 0.1), ActivePoint(0)))
    state, _ = interaction.on_move(state, PointerEvent(QPointF(0.3, 0.1)))
    assert state.active_points[0] == QPointF(0.3, 0.1)
    state, effects = interaction.on_release(state, PointerEvent(QPointF(0.4, 0.1)))

    assert state.active_points == (QPointF(0.4, 0.1), QPointF(0.2, 0.2))
    assert _commits(effects) == []
    assert not any(isinstance(effect, MovePoint) for effect in effects)


def test_handlers_do_not_mutate_their_input():
    state = InteractionState(tool=ToolMode.CUBIC_TO)

    interaction.on_release(state, PointerEvent(QPointF(0.5, 0.5)))

    assert state.active_points == ()


def test_cubic_on_empty_path_commits_the_start_point_alone():
    state = InteractionState(tool=ToolMode.CUBIC_TO)

    state, effects = _click(state, 0.25, 0.25, path_empty=True)

    assert _commits(effects) == [CommitPoints(ToolMode.MOVE_TO, (QPointF(0.25, 0.25),))]
    assert state.active_points == ()
