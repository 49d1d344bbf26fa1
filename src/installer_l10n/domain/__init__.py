"""Domain types for localization configuration."""

from installer_l10n.domain.ids import KeymapId, LocaleId
from installer_l10n.domain.types import (
    ChangeSet,
    DesiredConfig,
    KeymapEntry,
    LocaleConfig,
    LocaleEntry,
    TimezoneEntry,
    UpdateRequest,
)

__all__ = [
    "ChangeSet",
    "DesiredConfig",
    "KeymapEntry",
    "KeymapId",
    "LocaleConfig",
    "LocaleEntry",
    "LocaleId",
    "TimezoneEntry",
    "UpdateRequest",
]
