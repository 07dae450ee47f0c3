import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from symbol_editor.core.editor import Editor
from symbol_editor.core.settings_controller import SettingsController


@pytest.fixture
def settings_controller(tmp_path, monkeypatch):
    """
    Settings read from an empty settings.ini in a temporary directory.
    """
    monkeypatch.chdir(tmp_path)
    return SettingsController()


@pytest.fixture
def editor(qapp, settings_controller):
    return Editor(settings_controller)
