import pytest
from PySide6.QtCore import QPoint, Qt

from symbol_editor.ui import MainWindow


@pytest.fixture
def window(qtbot, editor):
    window = MainWindow(editor)
    qtbot.addWidget(window)
    window.show()
    return window


def test_cursor_position_is_shown(window):
    widget = window.editor_widget

    widget.cursor_pos_changed.emit(widget.to_symbol(QPoint(256, 128)))

    assert window.cursor_pos_label.text() == "Cursor: (0.500, 0.250)"


def test_editor_messages_reach_the_status_bar(window, editor):
    editor.cancel()

    assert window.statusBar().currentMessage() == "Line To: Select the start point"


def test_clicks_on_central_widget_edit_the_symbol(qtbot, window, editor):
    qtbot.mouseClick(window.editor_widget, Qt.LeftButton, Qt.NoModifier, QPoint(128, 128))

    assert editor.model.points[0] == window.editor_widget.to_symbol(QPoint(128, 128))
