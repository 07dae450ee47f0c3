from typing import Sequence

import numpy as np
from PySide6.QtCore import QPointF

# Matrices act on offsets from the centre in screen orientation, y pointing down.
MATRICES = {
    "rotate_left": np.array([[0.0, 1.0], [-1.0, 0.0]]),
    "rotate_right": np.array([[0.0, -1.0], [1.0, 0.0]]),
    "flip_horizontal": np.array([[-1.0, 0.0], [0.0, 1.0]]),
    "flip_vertical": np.array([[1.0, 0.0], [0.0, -1.0]]),
}

INVERSES = {
    "rotate_left": "rotate_right",
    "rotate_right": "rotate_left",
    "flip_horizontal": "flip_horizontal",
    "flip_vertical": "flip_vertical",
}


def inverse(name: str) -> str:
    return INVERSES[name]


def apply(name: str, points: Sequence[QPointF], center: QPointF) -> list[QPointF]:
    """Transform *points* about *center* with the named matrix."""

    if not points:
        return []
    matrix = MATRICES[name]
    origin = np.array([center.x(), center.y()])
    coords = np.array([[point.x(), point.y()] for point in points]) - origin
    transformed = coords @ matrix.T + origin
    return [QPointF(float(x), float(y)) for x, y in transformed]


def rotate_left(points, center):
    return apply("rotate_left", points, center)


def rotate_right(points, center):
    return apply("rotate_right", points, center)


def flip_horizontal(points, center):
    return apply("flip_horizontal", points, center)


def flip_vertical(points, center):
    return apply("flip_vertical", points, center)
