"""Settings manager for the INI settings file."""

import configparser
import logging
from pathlib import Path
from typing import TypedDict

from installer_l10n.config.paths import Paths
from installer_l10n.constants import (
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_DISPLAY,
    DEFAULT_EVENTS_CAPACITY,
    DEFAULT_HOST,
    DEFAULT_KEYMAP,
    DEFAULT_LOCALECTL_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_SETXKBMAP_PATH,
    DEFAULT_TIMEZONE,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_DEFAULT_KEYMAP,
    KEY_DEFAULT_TIMEZONE,
    KEY_LOG_LEVEL,
    SECTION_CATALOG,
    SECTION_DEFAULT,
    SECTION_EVENTS,
    SECTION_KEYBOARD,
    SECTION_SERVER,
    SETTINGS_VERSION,
)

logger = logging.getLogger(__name__)

RawSettings = dict[str, str | dict[str, str]]

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ServerSettings(TypedDict):
    """HTTP server options."""

    host: str
    port: int


class KeyboardSettings(TypedDict):
    """External keyboard command options."""

    localectl: str
    setxkbmap: str
    display: str


class Settings(TypedDict):
    """Service settings."""

    config_version: str
    log_level: str
    console_log_level: str
    default_timezone: str
    default_keymap: str
    server: ServerSettings
    events_capacity: int
    catalog_dir: Path | None
    keyboard: KeyboardSettings


class SettingsManager:
    """Manages the settings.conf INI file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize settings manager.

        Args:
            config_dir: Configuration directory path
                (defaults to Paths.config_dir())

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = Paths.settings_file(self.config_dir)

    def get_default_settings(self) -> RawSettings:
        """Get default settings values as INI strings.

        Returns:
            Default settings dictionary

        """
        return {
            KEY_CONFIG_VERSION: SETTINGS_VERSION,
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            KEY_DEFAULT_TIMEZONE: DEFAULT_TIMEZONE,
            KEY_DEFAULT_KEYMAP: DEFAULT_KEYMAP,
            SECTION_SERVER: {"host": DEFAULT_HOST, "port": str(DEFAULT_PORT)},
            SECTION_EVENTS: {"capacity": str(DEFAULT_EVENTS_CAPACITY)},
            SECTION_CATALOG: {"directory": ""},
            SECTION_KEYBOARD: {
                "localectl": DEFAULT_LOCALECTL_PATH,
                "setxkbmap": DEFAULT_SETXKBMAP_PATH,
                "display": DEFAULT_DISPLAY,
            },
        }

    def _create_parser(self, defaults: RawSettings) -> configparser.ConfigParser:
        """Create a ConfigParser populated with ``defaults``."""
        parser = configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )
        parser.read_dict(
            {
                SECTION_DEFAULT: {
                    key: value
                    for key, value in defaults.items()
                    if not isinstance(value, dict)
                }
            }
        )
        for section, values in defaults.items():
            if isinstance(values, dict):
                parser.add_section(section)
                for key, value in values.items():
                    parser.set(section, key, value)
        return parser

    def load(self) -> Settings:
        """Load settings, writing the defaults first if the file is missing.

        Returns:
            Parsed settings

        """
        parser = self._create_parser(self.get_default_settings())

        if self.settings_file.exists():
            parser.read(self.settings_file, encoding="utf-8")
        else:
            self._write(parser)

        catalog_dir = parser.get(SECTION_CATALOG, "directory").strip()
        return Settings(
            config_version=parser.get(SECTION_DEFAULT, KEY_CONFIG_VERSION),
            log_level=self._level(parser, KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            console_log_level=self._level(
                parser, KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL
            ),
            default_timezone=parser.get(SECTION_DEFAULT, KEY_DEFAULT_TIMEZONE),
            default_keymap=parser.get(SECTION_DEFAULT, KEY_DEFAULT_KEYMAP),
            server=ServerSettings(
                host=parser.get(SECTION_SERVER, "host"),
                port=self._int(parser, SECTION_SERVER, "port", DEFAULT_PORT),
            ),
            events_capacity=self._int(
                parser, SECTION_EVENTS, "capacity", DEFAULT_EVENTS_CAPACITY
            ),
            catalog_dir=Paths.expand_path(catalog_dir) if catalog_dir else None,
            keyboard=KeyboardSettings(
                localectl=parser.get(SECTION_KEYBOARD, "localectl"),
                setxkbmap=parser.get(SECTION_KEYBOARD, "setxkbmap"),
                display=parser.get(SECTION_KEYBOARD, "display"),
            ),
        )

    def _write(self, parser: configparser.ConfigParser) -> None:
        """Write ``parser`` to the settings file.

        A read-only configuration directory is not fatal: the service runs
        on the in-memory defaults.
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with self.settings_file.open("w", encoding="utf-8") as f:
                parser.write(f)
        except OSError as e:
            logger.warning(
                "Could not write default settings to %s: %s",
                self.settings_file,
                e,
            )
        else:
            logger.info("Created default settings at %s", self.settings_file)

    @staticmethod
    def _int(
        parser: configparser.ConfigParser,
        section: str,
        key: str,
        default: int,
    ) -> int:
        """Read a positive integer, falling back to ``default``."""
        raw = parser.get(section, key)
        try:
            value = int(raw)
        except ValueError:
            logger.warning(
                "Invalid integer for [%s] %s: %r, using %d",
                section,
                key,
                raw,
                default,
            )
            return default
        if value <= 0:
            logger.warning(
                "Non-positive value for [%s] %s: %d, using %d",
                section,
                key,
                value,
                default,
            )
            return default
        return value

    @staticmethod
    def _level(
        parser: configparser.ConfigParser, key: str, default: str
    ) -> str:
        """Read a log level name, falling back to ``default``."""
        value = parser.get(SECTION_DEFAULT, key).strip().upper()
        if value not in _VALID_LEVELS:
            logger.warning("Invalid log level for %s: %r", key, value)
            return default
        return value
