"""Public logging API: setup, lookup, flushing and test cleanup."""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from installer_l10n.logger.config import load_log_settings
from installer_l10n.logger.handlers import ROOT_LOGGER_NAME, setup_root_logger
from installer_l10n.logger.state import get_state


def flush_all_handlers(timeout: float = 5.0) -> None:
    """Wait for the log queue to drain and flush every handler.

    Args:
        timeout: Maximum seconds to wait for the queue to empty

    """
    state = get_state()
    if state.queue_listener is None or state.log_queue is None:
        return

    deadline = time.monotonic() + timeout
    while not state.log_queue.empty() and time.monotonic() < deadline:
        time.sleep(0.01)
    # Records may be dequeued but not yet written
    time.sleep(0.05)

    for handler in state.queue_listener.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener at interpreter exit."""
    state = get_state()
    if state.queue_listener is not None:
        flush_all_handlers()
        state.queue_listener.stop()
        state.queue_listener = None


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = ROOT_LOGGER_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Initialize the root logger once and return the named logger.

    Child loggers ("installer_l10n.core.manager", ...) have no handlers of
    their own and propagate to the root.

    Args:
        name: Logger name, usually ``__name__``
        console_level: Console log level name
        file_level: File log level name
        log_file: Log file path
        enable_file_logging: Whether to write a rotating log file

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Usage:
        >>> from installer_l10n.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Timezone set to %s", timezone)

    Args:
        name: Logger name, typically ``__name__``
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def clear_logger_state() -> None:
    """Stop the listener and drop every package logger.

    Intended for tests only.
    """
    state = get_state()
    with state.lock:
        if state.queue_listener is not None:
            flush_all_handlers()
            state.queue_listener.stop()
            state.queue_listener = None
        state.log_queue = None
        state.root_initialized = False
        state.settings_applied = False

        for logger_name in list(logging.Logger.manager.loggerDict.keys()):
            if logger_name.startswith(ROOT_LOGGER_NAME):
                log_instance = logging.getLogger(logger_name)
                for handler in log_instance.handlers[:]:
                    handler.close()
                    log_instance.removeHandler(handler)
