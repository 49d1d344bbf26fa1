"""Path constants for installer-l10n."""

import os
from pathlib import Path

from installer_l10n.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_SUBDIR,
    ENV_CONFIG_DIR,
)


class Paths:
    """Application paths and directory structure."""

    HOME_DIR = Path.home()
    CONFIG_DIR = HOME_DIR / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR

    # Bundled with the package
    PACKAGE_DIR = Path(__file__).parent.parent
    CATALOG_DIR = PACKAGE_DIR / "catalog"
    SCHEMA_DIR = Path(__file__).parent / "schemas"

    @classmethod
    def config_dir(cls) -> Path:
        """Return the configuration directory, honoring the env override."""
        override = os.getenv(ENV_CONFIG_DIR)
        if override:
            return Path(override).expanduser()
        return cls.CONFIG_DIR

    @classmethod
    def settings_file(cls, config_dir: Path | None = None) -> Path:
        """Return the settings.conf path inside ``config_dir``."""
        return (config_dir or cls.config_dir()) / CONFIG_FILE_NAME

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand ``~`` and resolve a user-supplied path."""
        return Path(path_str).expanduser().resolve()
