from symbol_editor.tools.basetool import BaseTool, ToolMode


class LineToTool(BaseTool):
    name = "Line To"
    mode = ToolMode.LINE_TO
    shortcut = "l"
    needs_start_point = True
    prompts = ("Select the end point of the line",)

    def build(self, path, points):
        result = self._extend(path)
        result.lineTo(points[0])
        return result
