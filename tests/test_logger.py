"""Tests for the logging package."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from installer_l10n.logger import (
    ColoredConsoleFormatter,
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
    update_logger_from_settings,
)
from installer_l10n.logger.config import load_log_settings
from installer_l10n.logger.state import get_state


@pytest.fixture
def fresh_logging(tmp_path: Path):
    """Re-initialize logging into a temporary file."""
    clear_logger_state()
    log_file = tmp_path / "logs" / "installer-l10n.log"
    yield log_file
    clear_logger_state()
    get_logger()


def test_load_log_settings_with_env_var(monkeypatch: MonkeyPatch) -> None:
    """Test load_log_settings returns test dir when env var is set."""
    monkeypatch.setenv("INSTALLER_L10N_LOG_DIR", "/tmp/pytest-test-logs")

    console_level, file_level, log_path = load_log_settings()

    assert console_level == "WARNING"
    assert file_level == "INFO"
    assert log_path == Path("/tmp/pytest-test-logs") / "installer-l10n.log"


def test_load_log_settings_without_env_var(monkeypatch: MonkeyPatch) -> None:
    """Test load_log_settings returns default path when env var is not set."""
    monkeypatch.delenv("INSTALLER_L10N_LOG_DIR", raising=False)

    _, _, log_path = load_log_settings()

    assert log_path == (
        Path.home()
        / ".config"
        / "installer-l10n"
        / "logs"
        / "installer-l10n.log"
    )


def test_file_logging(fresh_logging: Path) -> None:
    """Test records from child loggers reach the rotating file."""
    setup_logging(log_file=fresh_logging, file_level="DEBUG")
    logger = get_logger("installer_l10n.tests")

    logger.debug("Timezone set to %s", "Atlantic/Canary")
    flush_all_handlers()

    content = fresh_logging.read_text(encoding="utf-8")
    assert "Timezone set to Atlantic/Canary" in content
    assert "installer_l10n.tests" in content


def test_root_initialized_once(fresh_logging: Path) -> None:
    """Test repeated setup keeps the first listener."""
    setup_logging(log_file=fresh_logging)
    listener = get_state().queue_listener

    get_logger("installer_l10n.a")
    get_logger("installer_l10n.b")

    assert get_state().queue_listener is listener
    assert not logging.getLogger("installer_l10n").propagate


def test_update_from_settings(fresh_logging: Path) -> None:
    """Test settings.conf levels are applied to the handlers."""
    setup_logging(log_file=fresh_logging)
    settings_manager = MagicMock()
    settings_manager.load.return_value = {
        "log_level": "DEBUG",
        "console_log_level": "ERROR",
    }

    update_logger_from_settings(settings_manager)

    handlers = get_state().queue_listener.handlers
    file_handler = next(
        h for h in handlers if isinstance(h, RotatingFileHandler)
    )
    console_handler = next(
        h for h in handlers if not isinstance(h, RotatingFileHandler)
    )
    assert file_handler.level == logging.DEBUG
    assert console_handler.level == logging.ERROR
    assert get_state().settings_applied


def test_colored_formatter_restores_levelname() -> None:
    """Test the color codes do not leak into the record."""
    formatter = ColoredConsoleFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord(
        "installer_l10n", logging.WARNING, __file__, 1, "careful", None, None
    )

    output = formatter.format(record)

    assert "careful" in output
    assert "\033[" in output
    assert record.levelname == "WARNING"
