import pytest
from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainterPath

from symbol_editor.tools import BaseTool, ToolMode, ToolRegistry, get_tool, get_tools


def test_builtin_tools_are_registered():
    assert [tool.mode for tool in get_tools()] == list(ToolMode)


def test_tool_for_shortcut():
    registry = ToolRegistry()
    registry.load_builtin_tools()

    assert registry.tool_for_shortcut("r").mode is ToolMode.RECTANGLE
    assert registry.tool_for_shortcut("c").mode is ToolMode.CUBIC_TO
    assert registry.tool_for_shortcut("x") is None


def test_register_rejects_non_tools():
    registry = ToolRegistry()

    with pytest.raises(TypeError):
        registry.register_tool(object)


def test_register_ignores_duplicates():
    registry = ToolRegistry()
    registry.load_builtin_tools()
    line_tool = registry.get_tool(ToolMode.LINE_TO)

    registry.register_tool(type(line_tool))

    assert registry.get_tool(ToolMode.LINE_TO) is line_tool
    assert len(registry.get_tools()) == len(ToolMode)


def test_build_does_not_touch_the_input_path():
    path = QPainterPath()
    path.moveTo(0, 0)

    result = get_tool(ToolMode.LINE_TO).build(path, [QPointF(1, 1)])

    assert path.elementCount() == 1
    assert result.elementCount() == 2


def test_cubic_to_build():
    path = QPainterPath()
    path.moveTo(0, 0)

    result = get_tool(ToolMode.CUBIC_TO).build(
        path, [QPointF(0, 1), QPointF(1, 1), QPointF(1, 0)]
    )

    assert result.elementCount() == 4
    assert result.elementAt(1).isCurveTo()
    assert result.currentPosition() == QPointF(1, 0)


def test_rectangle_accepts_either_drag_direction():
    result = get_tool(ToolMode.RECTANGLE).build(
        QPainterPath(), [QPointF(0.75, 0.25), QPointF(0.25, 0.75)]
    )

    assert result.boundingRect().topLeft() == QPointF(0.25, 0.25)
    assert result.boundingRect().width() == 0.5


def test_ellipse_needs_an_area():
    result = get_tool(ToolMode.ELLIPSE).build(
        QPainterPath(), [QPointF(0.25, 0.25), QPointF(0.25, 0.75)]
    )

    assert result.isEmpty()


def test_prompts():
    assert get_tool(ToolMode.CUBIC_TO).prompt(0) == "Cubic To: Select the first control point"
    assert get_tool(ToolMode.CUBIC_TO).prompt(2) == "Cubic To: Select the end point"
    assert BaseTool().prompt(0) == ""
