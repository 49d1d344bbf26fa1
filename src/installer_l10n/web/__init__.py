"""HTTP surface of the localization service."""

from installer_l10n.web.app import CHANNEL_KEY, MANAGER_KEY, create_app

__all__ = ["CHANNEL_KEY", "MANAGER_KEY", "create_app"]
