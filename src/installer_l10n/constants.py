"""Centralized constants module for installer-l10n.

Constants are organized by logical categories and use typing.Final
annotations to ensure immutability.

Usage:
    from installer_l10n.constants import DEFAULT_LOCALE
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

SETTINGS_VERSION: Final[str] = "1.0.0"

CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "installer-l10n"

# Environment overrides
ENV_CONFIG_DIR: Final[str] = "INSTALLER_L10N_CONFIG_DIR"
ENV_LOG_DIR: Final[str] = "INSTALLER_L10N_LOG_DIR"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_SERVER: Final[str] = "server"
SECTION_EVENTS: Final[str] = "events"
SECTION_CATALOG: Final[str] = "catalog"
SECTION_KEYBOARD: Final[str] = "keyboard"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_DEFAULT_TIMEZONE: Final[str] = "default_timezone"
KEY_DEFAULT_KEYMAP: Final[str] = "default_keymap"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 3000

# =============================================================================
# Localization Defaults
# =============================================================================

DEFAULT_LOCALE: Final[str] = "en_US"
DEFAULT_TIMEZONE: Final[str] = "UTC"
DEFAULT_KEYMAP: Final[str] = "us"

# Environment variables consulted, in order, for the startup locale
LOCALE_ENV_VARS: Final[tuple[str, ...]] = ("LC_ALL", "LANG")
TIMEZONE_ENV_VAR: Final[str] = "TZ"

# Catalog file names inside the catalog directory
LOCALES_CATALOG_FILE: Final[str] = "locales.json"
TIMEZONES_CATALOG_FILE: Final[str] = "timezones.json"
KEYMAPS_CATALOG_FILE: Final[str] = "keymaps.json"

# =============================================================================
# Events Constants
# =============================================================================

DEFAULT_EVENTS_CAPACITY: Final[int] = 16

EVENT_CONFIG_CHANGED: Final[str] = "L10nConfigChanged"
EVENT_LOCALE_CHANGED: Final[str] = "LocaleChanged"

# =============================================================================
# Keyboard Constants
# =============================================================================

DEFAULT_LOCALECTL_PATH: Final[str] = "/usr/bin/localectl"
DEFAULT_SETXKBMAP_PATH: Final[str] = "/usr/bin/setxkbmap"
DEFAULT_DISPLAY: Final[str] = ":0"

# =============================================================================
# Logging Constants
# =============================================================================

LOG_FILE_NAME: Final[str] = "installer-l10n.log"
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(threadName)s - %(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}
