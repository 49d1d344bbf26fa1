"""Core localization services: catalogs, state manager and notifications."""

from installer_l10n.core.catalog import Catalog, Catalogs, load_catalogs
from installer_l10n.core.events import (
    BroadcastChannel,
    EventReceiver,
    L10nConfigChanged,
    LocaleChanged,
)
from installer_l10n.core.keyboard import (
    KeymapApplier,
    NullKeymapApplier,
    SystemKeymapApplier,
)
from installer_l10n.core.locking import ReadWriteLock
from installer_l10n.core.manager import L10nManager, default_config

__all__ = [
    "BroadcastChannel",
    "Catalog",
    "Catalogs",
    "EventReceiver",
    "KeymapApplier",
    "L10nConfigChanged",
    "L10nManager",
    "LocaleChanged",
    "NullKeymapApplier",
    "ReadWriteLock",
    "SystemKeymapApplier",
    "default_config",
    "load_catalogs",
]
