"""Tests for the INI settings file."""

from pathlib import Path

import pytest
from pytest import MonkeyPatch

from installer_l10n.config import Paths, SettingsManager


@pytest.fixture
def settings_manager(tmp_path: Path) -> SettingsManager:
    """Settings manager in an empty temporary directory."""
    return SettingsManager(config_dir=tmp_path / "config")


class TestSettingsManager:
    """Test loading settings.conf."""

    def test_defaults_written_when_missing(self, settings_manager) -> None:
        """Test a missing file is created with the defaults."""
        settings = settings_manager.load()

        assert settings_manager.settings_file.exists()
        assert settings["config_version"] == "1.0.0"
        assert settings["log_level"] == "INFO"
        assert settings["console_log_level"] == "WARNING"
        assert settings["default_timezone"] == "UTC"
        assert settings["default_keymap"] == "us"
        assert settings["server"] == {"host": "127.0.0.1", "port": 3000}
        assert settings["events_capacity"] == 16
        assert settings["catalog_dir"] is None
        assert settings["keyboard"] == {
            "localectl": "/usr/bin/localectl",
            "setxkbmap": "/usr/bin/setxkbmap",
            "display": ":0",
        }

    def test_user_values(self, settings_manager, tmp_path: Path) -> None:
        """Test values from the file override the defaults."""
        settings_manager.config_dir.mkdir(parents=True)
        settings_manager.settings_file.write_text(
            "[DEFAULT]\n"
            "log_level = debug\n"
            "default_timezone = Europe/Berlin  # installer site\n"
            "\n"
            "[server]\n"
            "port = 8080\n"
            "\n"
            "[catalog]\n"
            f"directory = {tmp_path / 'catalogs'}\n"
            "\n"
            "[keyboard]\n"
            "display = :1\n",
            encoding="utf-8",
        )

        settings = settings_manager.load()

        assert settings["log_level"] == "DEBUG"
        assert settings["default_timezone"] == "Europe/Berlin"
        assert settings["server"]["port"] == 8080
        assert settings["server"]["host"] == "127.0.0.1"
        assert settings["catalog_dir"] == (tmp_path / "catalogs").resolve()
        assert settings["keyboard"]["display"] == ":1"
        assert settings["keyboard"]["localectl"] == "/usr/bin/localectl"

    @pytest.mark.parametrize("raw", ["many", "0", "-4"])
    def test_invalid_capacity_falls_back(
        self, settings_manager, raw: str, caplog
    ) -> None:
        """Test bad integers use the default and warn."""
        settings_manager.config_dir.mkdir(parents=True)
        settings_manager.settings_file.write_text(
            f"[events]\ncapacity = {raw}\n", encoding="utf-8"
        )

        settings = settings_manager.load()

        assert settings["events_capacity"] == 16
        assert "capacity" in caplog.text

    def test_invalid_log_level_falls_back(self, settings_manager) -> None:
        """Test an unknown level name uses the default."""
        settings_manager.config_dir.mkdir(parents=True)
        settings_manager.settings_file.write_text(
            "[DEFAULT]\nconsole_log_level = LOUD\n", encoding="utf-8"
        )

        assert settings_manager.load()["console_log_level"] == "WARNING"


class TestPaths:
    """Test directory resolution."""

    def test_config_dir_env_override(
        self, monkeypatch: MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test INSTALLER_L10N_CONFIG_DIR replaces the default directory."""
        monkeypatch.setenv("INSTALLER_L10N_CONFIG_DIR", str(tmp_path))

        assert Paths.config_dir() == tmp_path
        assert Paths.settings_file() == tmp_path / "settings.conf"

    def test_config_dir_default(self, monkeypatch: MonkeyPatch) -> None:
        """Test the default lives under ~/.config."""
        monkeypatch.delenv("INSTALLER_L10N_CONFIG_DIR", raising=False)

        assert Paths.config_dir() == (
            Path.home() / ".config" / "installer-l10n"
        )

    def test_bundled_directories_exist(self) -> None:
        """Test the package ships catalogs and schemas."""
        assert (Paths.CATALOG_DIR / "locales.json").is_file()
        assert (Paths.SCHEMA_DIR / "keymaps.schema.json").is_file()
