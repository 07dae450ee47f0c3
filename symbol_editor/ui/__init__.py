from .editor_widget import EditorWidget
from .main_window import MainWindow

__all__ = ["EditorWidget", "MainWindow"]
