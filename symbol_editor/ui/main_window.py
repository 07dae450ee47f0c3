from PySide6.QtWidgets import QLabel, QMainWindow

from symbol_editor.core.editor import Editor
from symbol_editor.ui.editor_widget import EditorWidget


class MainWindow(QMainWindow):
    def __init__(self, editor: Editor):
        super().__init__()
        self.editor = editor
        self.setWindowTitle("Symbol Editor")
        self.editor_widget = EditorWidget(editor, self)
        self.setCentralWidget(self.editor_widget)
        self._setup_status_bar()
        self._connect_signals()

    def _setup_status_bar(self):
        status_bar = self.statusBar()
        self.cursor_pos_label = QLabel("Cursor: (0.000, 0.000)")
        status_bar.addPermanentWidget(self.cursor_pos_label)

    def _connect_signals(self):
        self.editor_widget.cursor_pos_changed.connect(self.update_cursor_pos_label)
        self.editor.message.connect(self.statusBar().showMessage)

    def update_cursor_pos_label(self, pos):
        self.cursor_pos_label.setText(f"Cursor: ({pos.x():.3f}, {pos.y():.3f})")
