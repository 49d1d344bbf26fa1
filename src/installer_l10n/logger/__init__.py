"""Logging for installer-l10n.

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener thread
                                                 |
                                      Console + File handlers

Rules:
    1. Always use ``logger = get_logger(__name__)``
    2. Never call ``logging.basicConfig()``
    3. Use %-style formatting: ``logger.info("Locale %s", code)``
    4. Handlers are attached only to the ``installer_l10n`` root logger

Environment Variables:
    INSTALLER_L10N_LOG_DIR: Override the log directory (used by tests)
"""

from installer_l10n.logger.config import (
    update_logger_from_settings as _update_from_settings,
)
from installer_l10n.logger.formatters import ColoredConsoleFormatter
from installer_l10n.logger.handlers import ConfigurationError
from installer_l10n.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from installer_l10n.logger.state import get_state

__all__ = [
    "ColoredConsoleFormatter",
    "ConfigurationError",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "setup_logging",
    "update_logger_from_settings",
]


def update_logger_from_settings(settings_manager=None) -> None:  # noqa: ANN001
    """Apply log levels from settings.conf to the running handlers.

    Args:
        settings_manager: Optional SettingsManager to read from

    """
    _update_from_settings(get_state(), settings_manager)
