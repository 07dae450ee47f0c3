import configparser

from loguru import logger
from PySide6.QtCore import QObject

from symbol_editor.core.snap import DEFAULT_ANGLES


class SettingsController(QObject):
    """Manages application settings persistence."""

    DEFAULT_GRID_SETTINGS = {
        "elements": 16,
        "group": 4,
        "size": 512,
    }

    DEFAULT_SNAP_SETTINGS = {
        "enabled": True,
        "guides": True,
        "grid_tolerance": 0.02,
        "guide_tolerance": 0.01,
        "node_tolerance": 0.015,
        "angles": DEFAULT_ANGLES,
    }

    DEFAULT_SYMBOL_SETTINGS = {
        "line_width": 0.01,
        "min_line_width": 0.01,
        "max_line_width": 0.1,
        "line_width_step": 0.01,
    }

    def __init__(self, path='settings.ini'):
        super().__init__()
        self.path = path
        self.config = configparser.ConfigParser()
        self.config.read(self.path)

        if not self.config.has_section('Grid'):
            self.config.add_section('Grid')
        self.grid_elements = self._get_int('Grid', 'elements', self.DEFAULT_GRID_SETTINGS["elements"])
        self.grid_group = self._get_int('Grid', 'group', self.DEFAULT_GRID_SETTINGS["group"])
        self.grid_size = self._get_int('Grid', 'size', self.DEFAULT_GRID_SETTINGS["size"])
        self._sync_grid_settings_to_config()

        if not self.config.has_section('Snap'):
            self.config.add_section('Snap')
        self.snap_enabled = self._get_bool('Snap', 'enabled', self.DEFAULT_SNAP_SETTINGS["enabled"])
        self.guides_enabled = self._get_bool('Snap', 'guides', self.DEFAULT_SNAP_SETTINGS["guides"])
        self.grid_tolerance = self._get_positive_float(
            'Snap', 'grid_tolerance', self.DEFAULT_SNAP_SETTINGS["grid_tolerance"]
        )
        self.guide_tolerance = self._get_positive_float(
            'Snap', 'guide_tolerance', self.DEFAULT_SNAP_SETTINGS["guide_tolerance"]
        )
        self.node_tolerance = self._get_positive_float(
            'Snap', 'node_tolerance', self.DEFAULT_SNAP_SETTINGS["node_tolerance"]
        )
        self.angles = self._get_angles('Snap', 'angles', self.DEFAULT_SNAP_SETTINGS["angles"])
        self._sync_snap_settings_to_config()

        if not self.config.has_section('Symbol'):
            self.config.add_section('Symbol')
        self.min_line_width = self._get_positive_float(
            'Symbol', 'min_line_width', self.DEFAULT_SYMBOL_SETTINGS["min_line_width"]
        )
        self.max_line_width = max(
            self.min_line_width,
            self._get_positive_float(
                'Symbol', 'max_line_width', self.DEFAULT_SYMBOL_SETTINGS["max_line_width"]
            ),
        )
        self.line_width = self.clamp_line_width(
            self._get_positive_float(
                'Symbol', 'line_width', self.DEFAULT_SYMBOL_SETTINGS["line_width"]
            )
        )
        self.line_width_step = self._get_positive_float(
            'Symbol', 'line_width_step', self.DEFAULT_SYMBOL_SETTINGS["line_width_step"]
        )
        self._sync_symbol_settings_to_config()

    def save_settings(self):
        """Persist settings to disk."""
        self._sync_grid_settings_to_config()
        self._sync_snap_settings_to_config()
        self._sync_symbol_settings_to_config()
        try:
            with open(self.path, 'w') as configfile:
                self.config.write(configfile)
        except OSError as e:
            logger.error("Could not write to {}: {}", self.path, e)

    def clamp_line_width(self, width):
        return max(self.min_line_width, min(self.max_line_width, float(width)))

    def _get_bool(self, section, option, fallback):
        try:
            return self.config.getboolean(section, option)
        except (configparser.NoOptionError, ValueError):
            return fallback

    def _get_int(self, section, option, fallback):
        try:
            return max(1, self.config.getint(section, option))
        except (configparser.NoOptionError, ValueError):
            return fallback

    def _get_positive_float(self, section, option, fallback):
        try:
            value = self.config.getfloat(section, option)
        except (configparser.NoOptionError, ValueError):
            return fallback
        return value if value > 0 else fallback

    def _get_angles(self, section, option, fallback):
        raw_value = self.config.get(section, option, fallback=None)
        if raw_value is None:
            return tuple(fallback)
        try:
            angles = self._normalize_angles(raw_value.split(','))
        except ValueError:
            angles = tuple(fallback)
        return angles

    @staticmethod
    def _normalize_angles(values):
        angles = []
        for value in values:
            if isinstance(value, str) and not value.strip():
                continue
            angle = float(value) % 180.0
            if angle not in angles:
                angles.append(angle)
        if not angles:
            raise ValueError("no guide angles given")
        return tuple(angles)

    def _sync_grid_settings_to_config(self):
        self.config.set('Grid', 'elements', str(int(self.grid_elements)))
        self.config.set('Grid', 'group', str(int(self.grid_group)))
        self.config.set('Grid', 'size', str(int(self.grid_size)))

    def _sync_snap_settings_to_config(self):
        self.config.set('Snap', 'enabled', str(self.snap_enabled))
        self.config.set('Snap', 'guides', str(self.guides_enabled))
        self.config.set('Snap', 'grid_tolerance', repr(float(self.grid_tolerance)))
        self.config.set('Snap', 'guide_tolerance', repr(float(self.guide_tolerance)))
        self.config.set('Snap', 'node_tolerance', repr(float(self.node_tolerance)))
        self.config.set('Snap', 'angles', ','.join(f"{angle:g}" for angle in self.angles))

    def _sync_symbol_settings_to_config(self):
        self.config.set('Symbol', 'line_width', repr(float(self.line_width)))
        self.config.set('Symbol', 'min_line_width', repr(float(self.min_line_width)))
        self.config.set('Symbol', 'max_line_width', repr(float(self.max_line_width)))
        self.config.set('Symbol', 'line_width_step', repr(float(self.line_width_step)))

    def get_grid_settings(self):
        return {
            'elements': int(self.grid_elements),
            'group': int(self.grid_group),
            'size': int(self.grid_size),
        }

    def get_snap_settings(self):
        return {
            'enabled': self.snap_enabled,
            'guides': self.guides_enabled,
            'grid_tolerance': self.grid_tolerance,
            'guide_tolerance': self.guide_tolerance,
            'node_tolerance': self.node_tolerance,
            'angles': tuple(self.angles),
        }

    def get_symbol_settings(self):
        return {
            'line_width': self.line_width,
            'min_line_width': self.min_line_width,
            'max_line_width': self.max_line_width,
            'line_width_step': self.line_width_step,
        }

    def get_default_grid_settings(self):
        return dict(self.DEFAULT_GRID_SETTINGS)

    def get_default_snap_settings(self):
        return dict(self.DEFAULT_SNAP_SETTINGS)

    def get_default_symbol_settings(self):
        return dict(self.DEFAULT_SYMBOL_SETTINGS)

    def update_grid_settings(self, *, elements=None, group=None, size=None):
        if elements is not None:
            self.grid_elements = max(1, int(elements))
        if group is not None:
            self.grid_group = max(1, int(group))
        if size is not None:
            self.grid_size = max(1, int(size))
        self._sync_grid_settings_to_config()

    def update_snap_settings(
        self,
        *,
        enabled=None,
        guides=None,
        grid_tolerance=None,
        guide_tolerance=None,
        node_tolerance=None,
        angles=None,
    ):
        if enabled is not None:
            self.snap_enabled = bool(enabled)
        if guides is not None:
            self.guides_enabled = bool(guides)
        if grid_tolerance is not None and float(grid_tolerance) > 0:
            self.grid_tolerance = float(grid_tolerance)
        if guide_tolerance is not None and float(guide_tolerance) > 0:
            self.guide_tolerance = float(guide_tolerance)
        if node_tolerance is not None and float(node_tolerance) > 0:
            self.node_tolerance = float(node_tolerance)
        if angles is not None:
            try:
                angles_value = self._normalize_angles(angles)
            except (TypeError, ValueError):
                angles_value = self.angles
            self.angles = angles_value
        self._sync_snap_settings_to_config()

    def update_symbol_settings(
        self,
        *,
        line_width=None,
        min_line_width=None,
        max_line_width=None,
        line_width_step=None,
    ):
        if min_line_width is not None and float(min_line_width) > 0:
            self.min_line_width = float(min_line_width)
        if max_line_width is not None and float(max_line_width) > 0:
            self.max_line_width = float(max_line_width)
        self.max_line_width = max(self.min_line_width, self.max_line_width)
        if line_width is not None:
            self.line_width = float(line_width)
        self.line_width = self.clamp_line_width(self.line_width)
        if line_width_step is not None and float(line_width_step) > 0:
            self.line_width_step = float(line_width_step)
        self._sync_symbol_settings_to_config()
