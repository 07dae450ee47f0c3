from symbol_editor.tools.basetool import BaseTool, ToolMode


class EllipseTool(BaseTool):
    name = "Ellipse"
    mode = ToolMode.ELLIPSE
    shortcut = "e"
    points_required = 2
    rubber_band = True
    prompts = ("Drag out the bounding rectangle of the ellipse",)

    def build(self, path, points):
        result = self._extend(path)
        rect = self._rect_from_points(points[0], points[1])
        # A flat ellipse would degenerate into duplicated points.
        if rect.width() > 0 and rect.height() > 0:
            result.addEllipse(rect)
        return result
