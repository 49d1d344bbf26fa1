"""Process-wide interface locale and translated catalog labels.

The interface locale is the language of the running installer. It is set
once at startup and afterwards changed only through ``set_service_locale``,
which the state manager calls when an update carries ``ui_locale``.

Display names for locales and timezones come from babel's CLDR data, so
labels can be refreshed for any interface locale babel knows about. Codes
babel has no data for keep the labels from the catalog file.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from babel import Locale, UnknownLocaleError
from babel.dates import get_timezone, get_timezone_location

from installer_l10n.constants import DEFAULT_LOCALE
from installer_l10n.domain.ids import LocaleId
from installer_l10n.domain.types import LocaleEntry, TimezoneEntry
from installer_l10n.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)


class _InterfaceLocaleState:
    """Current interface locale."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.locale = DEFAULT_LOCALE


_state = _InterfaceLocaleState()


def set_service_locale(locale: str) -> None:
    """Switch the interface language of the whole process.

    Args:
        locale: Locale code, e.g. ``de_DE``

    """
    with _state.lock:
        previous = _state.locale
        _state.locale = locale
    logger.info("Interface locale switched from %s to %s", previous, locale)


def _babel_locale(ui_locale: str) -> Locale | None:
    """Return babel's Locale for ``ui_locale`` or None if unknown."""
    try:
        return Locale.parse(LocaleId.parse(ui_locale).code)
    except (ValueError, UnknownLocaleError):
        logger.debug("No CLDR data for interface locale %s", ui_locale)
        return None


def translate_locales(
    entries: Iterable[LocaleEntry], ui_locale: str
) -> tuple[LocaleEntry, ...]:
    """Return locale entries with language/territory names in ``ui_locale``."""
    entries = tuple(entries)
    ui = _babel_locale(ui_locale)
    if ui is None:
        return entries

    translated = []
    for entry in entries:
        locale_id = LocaleId.parse(entry.id)
        translated.append(
            LocaleEntry(
                id=entry.id,
                language=ui.languages.get(locale_id.language, entry.language),
                territory=ui.territories.get(
                    locale_id.territory, entry.territory
                ),
            )
        )
    return tuple(translated)


def translate_timezones(
    entries: Iterable[TimezoneEntry], ui_locale: str
) -> tuple[TimezoneEntry, ...]:
    """Return timezone entries whose city label is in ``ui_locale``.

    Region labels ("Europe", "America") have no CLDR translation and are
    kept as they are.
    """
    entries = tuple(entries)
    ui = _babel_locale(ui_locale)
    if ui is None:
        return entries

    translated = []
    for entry in entries:
        if "/" not in entry.code:
            translated.append(entry)
            continue
        try:
            city = get_timezone_location(
                get_timezone(entry.code), locale=ui, return_city=True
            )
        except LookupError:
            logger.debug("No CLDR data for timezone %s", entry.code)
            translated.append(entry)
            continue
        translated.append(
            TimezoneEntry(code=entry.code, parts=(*entry.parts[:-1], city))
        )
    return tuple(translated)
