from symbol_editor.tools.basetool import BaseTool, ToolMode


class RectangleTool(BaseTool):
    name = "Rectangle"
    mode = ToolMode.RECTANGLE
    shortcut = "r"
    points_required = 2
    rubber_band = True
    prompts = ("Drag out the rectangle",)

    def build(self, path, points):
        result = self._extend(path)
        rect = self._rect_from_points(points[0], points[1])
        if rect.width() > 0 and rect.height() > 0:
            result.addRect(rect)
        return result
