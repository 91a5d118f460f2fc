"""
editor_settings.py - Editor defaults with user overrides in a JSON config file.

Only values that differ from DEFAULTS are written back to disk.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULTS = {
    "hit_margin": 5.0,
    "wire_color": "#000000",
    "wire_line_width": 2.0,
    "wire_line_dash": [],
    "grid_size": 10.0,
    "snap_to_grid": True,
    "node_handle_radius": 6.0,
    "history_max_depth": 100,
}

SETTING_LABELS = {
    "hit_margin": "Hit-test margin (px)",
    "wire_color": "Default wire color",
    "wire_line_width": "Default wire width",
    "wire_line_dash": "Default wire dash pattern",
    "grid_size": "Grid cell size",
    "snap_to_grid": "Snap points to grid",
    "node_handle_radius": "Node grab radius (px)",
    "history_max_depth": "Undo steps kept per object (0 = unlimited)",
}

_CONFIG_DIR = Path.home() / ".wiredraw"
_CONFIG_FILE = _CONFIG_DIR / "settings.json"


def _matches_default_type(key, value) -> bool:
    default = DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return not (isinstance(default, int) and isinstance(value, float))
    return isinstance(value, type(default))


class EditorSettings:
    """Central registry for editor settings with load/save support."""

    def __init__(self, config_path=None):
        self._values = {k: _copy(v) for k, v in DEFAULTS.items()}
        self._config_path = Path(config_path) if config_path else _CONFIG_FILE
        self.load()

    def get(self, key, default=None):
        """Return the setting value, or ``default`` for unknown keys."""
        if key not in self._values:
            return default
        return _copy(self._values[key])

    def set(self, key, value) -> bool:
        """
        Set a known setting. Values of the wrong type are rejected.

        Returns:
            True if the value was stored.
        """
        if key not in DEFAULTS:
            logger.warning("Unknown setting '%s' ignored", key)
            return False
        if not _matches_default_type(key, value):
            logger.warning("Invalid value %r for setting '%s'. Keeping %r", value, key, self._values[key])
            return False
        self._values[key] = _copy(value)
        return True

    def get_all(self):
        """Return a copy of all current settings."""
        return {k: _copy(v) for k, v in self._values.items()}

    def reset_defaults(self):
        self._values = {k: _copy(v) for k, v in DEFAULTS.items()}

    def save(self):
        """Save user overrides to the JSON config file."""
        overrides = {k: v for k, v in self._values.items() if v != DEFAULTS.get(k)}
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w") as f:
                json.dump(overrides, f, indent=2)
        except OSError as e:
            logger.error("Failed to save editor settings: %s", e)

    def load(self):
        """Load user overrides from the JSON config file."""
        if not self._config_path.exists():
            return
        try:
            with open(self._config_path) as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load editor settings: %s", e)
            return
        if not isinstance(overrides, dict):
            logger.warning("Editor settings file %s is not a JSON object", self._config_path)
            return
        for key, value in overrides.items():
            if key in DEFAULTS:
                self.set(key, value)


def _copy(value):
    return list(value) if isinstance(value, list) else value
