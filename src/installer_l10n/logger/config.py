"""Bootstrap and settings-driven log levels.

The settings module logs through this package, so settings are imported
lazily inside ``update_logger_from_settings``.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from installer_l10n.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from installer_l10n.config import SettingsManager
    from installer_l10n.logger.state import _LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Return bootstrap console level, file level and log path.

    ``INSTALLER_L10N_LOG_DIR`` overrides the log directory, which keeps
    test runs away from the user's configuration directory.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(ENV_LOG_DIR)
    if env_log_dir:
        log_dir = Path(env_log_dir).expanduser()
    else:
        log_dir = (
            Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR / "logs"
        )
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_dir / LOG_FILE_NAME


def update_logger_from_settings(
    state: "_LoggerState",
    settings_manager: "SettingsManager | None" = None,
) -> None:
    """Apply handler levels from settings.conf.

    Only handler levels change; handlers are never added or removed here.

    Args:
        state: Logger state object
        settings_manager: Settings source (a default one is created when
            omitted)

    """
    if settings_manager is None:
        from installer_l10n.config import SettingsManager  # noqa: PLC0415

        settings_manager = SettingsManager()

    settings = settings_manager.load()
    console_level = getattr(
        logging, settings["console_log_level"], logging.WARNING
    )
    file_level = getattr(logging, settings["log_level"], logging.INFO)

    if state.queue_listener is not None:
        for handler in state.queue_listener.handlers:
            if isinstance(handler, RotatingFileHandler):
                handler.setLevel(file_level)
            elif isinstance(handler, logging.StreamHandler):
                handler.setLevel(console_level)

    state.settings_applied = True
