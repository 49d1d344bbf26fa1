"""Pytest configuration and fixtures for installer-l10n tests."""

import logging
import os
import tempfile

# Keep the settings file and log file of a test run out of the user's
# configuration directory. Must happen before installer_l10n is imported.
_TEST_ROOT = tempfile.mkdtemp(prefix="installer-l10n-tests-")
os.environ.setdefault(
    "INSTALLER_L10N_CONFIG_DIR", os.path.join(_TEST_ROOT, "config")
)
os.environ.setdefault("INSTALLER_L10N_LOG_DIR", os.path.join(_TEST_ROOT, "logs"))

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from installer_l10n.core import (  # noqa: E402
    BroadcastChannel,
    Catalogs,
    L10nManager,
    load_catalogs,
)
from installer_l10n.domain import DesiredConfig  # noqa: E402


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    The package root logger is created with propagate=False; caplog only
    sees records that reach the logging root.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("installer_l10n"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture(scope="session")
def catalogs() -> Catalogs:
    """Catalogs bundled with the package."""
    return load_catalogs()


@pytest.fixture
def channel() -> BroadcastChannel:
    """Fresh broadcast channel."""
    return BroadcastChannel(capacity=16)


@pytest.fixture
def keymap_applier() -> MagicMock:
    """Keymap applier that records calls instead of running commands."""
    return MagicMock(name="keymap_applier")


@pytest.fixture
def locale_switcher() -> MagicMock:
    """Interface locale switch that records calls."""
    return MagicMock(name="locale_switcher")


@pytest.fixture
def initial_config() -> DesiredConfig:
    """Startup configuration: en_US, UTC, us."""
    return DesiredConfig(
        locales=["en_US"],
        keymap="us",
        timezone="UTC",
        ui_locale="en_US",
        ui_keymap="us",
    )


@pytest.fixture
def manager(
    catalogs, channel, keymap_applier, locale_switcher, initial_config
) -> L10nManager:
    """Manager over the bundled catalogs with mocked side effects."""
    mgr = L10nManager(
        catalogs,
        channel,
        keymap_applier,
        initial=initial_config,
        locale_switcher=locale_switcher,
    )
    locale_switcher.reset_mock()
    return mgr
