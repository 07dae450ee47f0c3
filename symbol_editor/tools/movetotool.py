from symbol_editor.tools.basetool import BaseTool, ToolMode


class MoveToTool(BaseTool):
    name = "Move To"
    mode = ToolMode.MOVE_TO
    shortcut = "m"
    prompts = ("Select the start of a new sub path",)

    def build(self, path, points):
        result = self._extend(path)
        result.moveTo(points[0])
        return result
