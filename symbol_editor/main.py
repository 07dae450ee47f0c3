import sys

from PySide6.QtWidgets import QApplication

from symbol_editor.core.editor import Editor
from symbol_editor.ui import MainWindow


def main():
    q_app = QApplication(sys.argv)
    editor = Editor()
    window = MainWindow(editor)
    window.show()
    editor.select_tool(editor.tool)
    return q_app.exec()


if __name__ == "__main__":
    sys.exit(main())
