"""Handler creation for the logging system.

Handlers are owned by a QueueListener thread. Loggers only ever see a
QueueHandler, so request handlers running on the event loop or in the
executor never block on file I/O.
"""

import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from installer_l10n.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from installer_l10n.logger.formatters import ColoredConsoleFormatter

if TYPE_CHECKING:
    from installer_l10n.logger.state import _LoggerState

ROOT_LOGGER_NAME = "installer_l10n"


class ConfigurationError(Exception):
    """Error in logging configuration."""


def _create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create the colored console handler.

    Args:
        console_level: Log level name for console output

    Returns:
        Configured StreamHandler writing to stderr

    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        ColoredConsoleFormatter(
            LOG_CONSOLE_FORMAT, datefmt=LOG_CONSOLE_DATE_FORMAT
        )
    )
    console_handler.setLevel(getattr(logging, console_level, logging.WARNING))
    return console_handler


def _create_file_handler(log_file: Path, file_level: str) -> RotatingFileHandler:
    """Create the rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level name for file output

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(getattr(logging, file_level, logging.INFO))
    return file_handler


def setup_root_logger(
    state: "_LoggerState",
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Initialize the root logger and start the QueueListener.

    Called exactly once per process (or per test after
    ``clear_logger_state``).

    Args:
        state: Logger state object
        console_level: Console log level name
        file_level: File log level name
        log_file: Path to log file
        enable_file_logging: Whether to add the file handler

    Raises:
        ConfigurationError: If handler setup fails

    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)  # Filter at handlers
    root_logger.propagate = False

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [_create_console_handler(console_level)]
    if enable_file_logging:
        handlers.append(_create_file_handler(log_file, file_level))

    state.log_queue = queue.Queue(-1)
    state.queue_listener = QueueListener(
        state.log_queue,
        *handlers,
        respect_handler_level=True,
    )
    state.queue_listener.start()

    root_logger.addHandler(QueueHandler(state.log_queue))
    state.root_initialized = True
