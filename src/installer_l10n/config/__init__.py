"""Configuration - settings file, paths and catalog schemas.

This package provides:
- SettingsManager: INI settings management (from settings.py)
- Settings: Typed view of the settings file
- Paths: Path constants and utilities (from paths.py)
"""

from installer_l10n.config.paths import Paths
from installer_l10n.config.settings import (
    KeyboardSettings,
    ServerSettings,
    Settings,
    SettingsManager,
)

__all__ = [
    "KeyboardSettings",
    "Paths",
    "ServerSettings",
    "Settings",
    "SettingsManager",
]
