from abc import ABC, abstractmethod
from typing import Callable, Optional

from PySide6.QtCore import QPointF

from symbol_editor.core import transform
from symbol_editor.core.path_model import PathData, PathModel


class Command(ABC):
    """
    Abstract base class for all commands.
    """

    name = "Command"

    @abstractmethod
    def execute(self):
        """
        Executes the command.
        """
        raise NotImplementedError

    @abstractmethod
    def undo(self):
        """
        Undoes the command.
        """
        raise NotImplementedError


class ReplacePathCommand(Command):
    """Swaps the whole element/point data of the model."""

    def __init__(self, model: PathModel, after: PathData, name: str = "Edit Path"):
        self.model = model
        self.before = model.snapshot()
        self.after = after
        self.name = name

    def execute(self):
        self.model.replace(self.after)

    def undo(self):
        self.model.replace(self.before)


class MovePointCommand(Command):
    name = "Move Point"

    def __init__(self, model: PathModel, index: int, to: QPointF):
        self.model = model
        self.index = index
        self.to = QPointF(to)
        self.before_point: Optional[QPointF] = None

    def execute(self):
        data = self.model.snapshot()
        if self.before_point is None:
            self.before_point = QPointF(data.points[self.index])
        self.model.replace(data.with_point(self.index, self.to))

    def undo(self):
        self.model.replace(self.model.snapshot().with_point(self.index, self.before_point))


class SetAttributeCommand(Command):
    NAMES = {
        "filled": "Set Fill",
        "fill_rule": "Set Fill Rule",
        "cap_style": "Set Cap Style",
        "join_style": "Set Join Style",
        "line_width": "Set Line Width",
    }

    def __init__(self, model: PathModel, attribute: str, value):
        self.model = model
        self.attribute = attribute
        self.value = value
        self.before = getattr(model, attribute)
        self.name = self.NAMES.get(attribute, "Set Attribute")

    def execute(self):
        self.model.set_attribute(self.attribute, self.value)

    def undo(self):
        self.model.set_attribute(self.attribute, self.before)


class TransformCommand(Command):
    """Rotates or flips every committed point about *center*.

    *on_transform* receives the name of the transform applied so that points
    not yet committed can follow the committed ones.
    """

    NAMES = {
        "rotate_left": "Rotate Left",
        "rotate_right": "Rotate Right",
        "flip_horizontal": "Flip Horizontal",
        "flip_vertical": "Flip Vertical",
    }

    def __init__(
        self,
        model: PathModel,
        transform_name: str,
        center: QPointF,
        on_transform: Optional[Callable[[str], None]] = None,
    ):
        self.model = model
        self.transform_name = transform_name
        self.center = QPointF(center)
        self.on_transform = on_transform
        self.before = model.snapshot()
        self.after = PathData(
            self.before.elements,
            tuple(transform.apply(transform_name, self.before.points, self.center)),
        )
        self.name = self.NAMES[transform_name]

    def execute(self):
        self.model.replace(self.after)
        if self.on_transform is not None:
            self.on_transform(self.transform_name)

    def undo(self):
        self.model.replace(self.before)
        if self.on_transform is not None:
            self.on_transform(transform.inverse(self.transform_name))
