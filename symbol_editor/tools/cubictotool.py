from symbol_editor.tools.basetool import BaseTool, ToolMode


class CubicToTool(BaseTool):
    name = "Cubic To"
    mode = ToolMode.CUBIC_TO
    shortcut = "c"
    points_required = 3
    needs_start_point = True
    prompts = (
        "Select the first control point",
        "Select the second control point",
        "Select the end point",
    )

    def build(self, path, points):
        result = self._extend(path)
        control1, control2, to = points
        result.cubicTo(control1, control2, to)
        return result
