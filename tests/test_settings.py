from symbol_editor.core.settings_controller import SettingsController
from symbol_editor.core.snap import DEFAULT_ANGLES


def test_defaults(settings_controller):
    assert settings_controller.get_grid_settings() == {'elements': 16, 'group': 4, 'size': 512}
    snap = settings_controller.get_snap_settings()
    assert snap['enabled'] is True
    assert snap['grid_tolerance'] == 0.02
    assert snap['angles'] == tuple(DEFAULT_ANGLES)
    assert settings_controller.get_symbol_settings()['line_width'] == 0.01
    assert settings_controller.get_default_grid_settings() == settings_controller.get_grid_settings()
    assert settings_controller.get_default_snap_settings()['node_tolerance'] == 0.015
    assert settings_controller.get_default_symbol_settings()['max_line_width'] == 0.1


def test_save_and_reload(settings_controller):
    settings_controller.update_grid_settings(elements=32, group=8)
    settings_controller.update_snap_settings(guides=False, guide_tolerance=0.03, angles=[0, 90])
    settings_controller.update_symbol_settings(line_width=0.05)
    settings_controller.save_settings()

    reloaded = SettingsController()

    assert reloaded.grid_elements == 32
    assert reloaded.grid_group == 8
    assert reloaded.guides_enabled is False
    assert reloaded.guide_tolerance == 0.03
    assert reloaded.angles == (0.0, 90.0)
    assert reloaded.line_width == 0.05


def test_invalid_values_fall_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "settings.ini").write_text(
        "[Grid]\nelements = many\n"
        "[Snap]\nenabled = perhaps\ngrid_tolerance = -1\nangles = north\n"
        "[Symbol]\nline_width = 5\n"
    )

    settings = SettingsController()

    assert settings.grid_elements == 16
    assert settings.snap_enabled is True
    assert settings.grid_tolerance == 0.02
    assert settings.angles == tuple(DEFAULT_ANGLES)
    assert settings.line_width == 0.1


def test_angles_are_folded_into_half_turn(settings_controller):
    settings_controller.update_snap_settings(angles="0, 45, 225".split(","))

    assert settings_controller.angles == (0.0, 45.0)


def test_empty_angles_are_ignored(settings_controller):
    settings_controller.update_snap_settings(angles=[])

    assert settings_controller.angles == tuple(DEFAULT_ANGLES)


def test_line_width_is_clamped(settings_controller):
    settings_controller.update_symbol_settings(line_width=0.0001)

    assert settings_controller.line_width == settings_controller.min_line_width
