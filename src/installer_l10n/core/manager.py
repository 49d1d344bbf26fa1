"""Localization state manager.

``L10nManager`` owns the desired configuration of the machine being
installed. Reads take shared access and return copies. ``apply`` takes
exclusive access for its whole duration and either commits every field of
an update or none of them:

1. every present field is validated against its catalog, in the order
   locales, timezone, keymap, ui_locale, ui_keymap;
2. ``ui_keymap`` is applied to the graphical session;
3. ``ui_locale`` becomes the process interface locale and catalog labels
   are re-translated;
4. the staged record replaces the current one;
5. ``LocaleChanged`` (for ``ui_locale``) and ``L10nConfigChanged`` are
   published.

A failure in steps 1-3 leaves the in-memory configuration untouched.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from installer_l10n.constants import (
    DEFAULT_KEYMAP,
    DEFAULT_LOCALE,
    DEFAULT_TIMEZONE,
    LOCALE_ENV_VARS,
    TIMEZONE_ENV_VAR,
)
from installer_l10n.core.catalog import Catalogs
from installer_l10n.core.events import (
    BroadcastChannel,
    L10nConfigChanged,
    LocaleChanged,
)
from installer_l10n.core.keyboard import KeymapApplier, NullKeymapApplier
from installer_l10n.core.locking import ReadWriteLock
from installer_l10n.core.translation import (
    set_service_locale,
    translate_locales,
    translate_timezones,
)
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
from installer_l10n.exceptions import (
    CommitError,
    InvalidKeymapError,
    UnknownLocaleError,
    UnknownTimezoneError,
    ValidationFailure,
)
from installer_l10n.logger import get_logger

logger = get_logger(__name__)

LocaleSwitcher = Callable[[str], None]


@dataclass(frozen=True)
class _Labels:
    """Catalog listings translated to the current interface locale."""

    locales: tuple[LocaleEntry, ...]
    timezones: tuple[TimezoneEntry, ...]
    keymaps: tuple[KeymapEntry, ...]


def _first_known(
    candidates: list[str | None], exists: Callable[[str], bool]
) -> str | None:
    for candidate in candidates:
        if candidate and exists(candidate):
            return candidate
    return None


def default_config(
    catalogs: Catalogs,
    default_timezone: str = DEFAULT_TIMEZONE,
    default_keymap: str = DEFAULT_KEYMAP,
    environ: Mapping[str, str] | None = None,
) -> DesiredConfig:
    """Build the startup configuration from the environment.

    The locale comes from ``LC_ALL`` or ``LANG`` (encoding stripped) and
    the timezone from ``TZ``; anything unknown to the catalogs falls back
    to the configured defaults and then to the first catalog entry.

    Args:
        catalogs: Reference catalogs
        default_timezone: Timezone used when ``TZ`` is unset or unknown
        default_keymap: Keymap for both ``keymap`` and ``ui_keymap``
        environ: Environment to read (defaults to ``os.environ``)

    Returns:
        Initial desired configuration

    """
    environ = os.environ if environ is None else environ

    env_locales: list[str | None] = []
    for var in LOCALE_ENV_VARS:
        value = environ.get(var)
        if not value:
            continue
        try:
            env_locales.append(LocaleId.parse(value).code)
        except ValueError:
            logger.debug("Ignoring %s=%s: not a locale identifier", var, value)
    locale = _first_known(
        [*env_locales, DEFAULT_LOCALE], catalogs.locales.exists
    ) or catalogs.locales.entries()[0].id

    tz_env = environ.get(TIMEZONE_ENV_VAR, "").lstrip(":")
    timezone = _first_known(
        [tz_env, default_timezone, DEFAULT_TIMEZONE], catalogs.timezones.exists
    ) or catalogs.timezones.entries()[0].code

    keymap = _first_known(
        [default_keymap, DEFAULT_KEYMAP], catalogs.keymaps.exists
    ) or str(catalogs.keymaps.entries()[0].id)

    return DesiredConfig(
        locales=[locale],
        keymap=keymap,
        timezone=timezone,
        ui_locale=locale,
        ui_keymap=keymap,
    )


class L10nManager:
    """Validates, stores and publishes the localization configuration."""

    def __init__(
        self,
        catalogs: Catalogs,
        events: BroadcastChannel,
        keymap_applier: KeymapApplier | None = None,
        initial: DesiredConfig | None = None,
        locale_switcher: LocaleSwitcher = set_service_locale,
    ) -> None:
        """Initialize the manager.

        Args:
            catalogs: Reference catalogs used for validation
            events: Channel receiving change notifications
            keymap_applier: Applies ``ui_keymap`` to the local session
            initial: Starting configuration (defaults to ``default_config``)
            locale_switcher: Function switching the process interface
                locale

        Raises:
            ValidationFailure: If ``initial`` holds a value unknown to the
                catalogs

        """
        self._catalogs = catalogs
        self._events = events
        self._keyboard = keymap_applier or NullKeymapApplier()
        self._switch_locale = locale_switcher
        self._lock = ReadWriteLock()

        start = initial.copy() if initial else default_config(catalogs)
        self._config = start
        self._config = self._stage(
            UpdateRequest(
                locales=tuple(start.locales),
                timezone=start.timezone,
                keymap=start.keymap,
                ui_locale=start.ui_locale,
                ui_keymap=start.ui_keymap,
            )
        )
        self._switch_locale(self._config.ui_locale)
        self._labels = self._translate(self._config.ui_locale)
        logger.debug("Initial l10n configuration: %s", self._config)

    @property
    def catalogs(self) -> Catalogs:
        return self._catalogs

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def snapshot(self) -> DesiredConfig:
        """Return an independent copy of the current configuration."""
        with self._lock.read():
            return self._config.copy()

    def get_config(self) -> LocaleConfig:
        """Return the configuration in its external shape."""
        return self.snapshot().to_dict()

    def locales(self) -> tuple[LocaleEntry, ...]:
        """Locale catalog, labelled in the interface locale."""
        with self._lock.read():
            return self._labels.locales

    def timezones(self) -> tuple[TimezoneEntry, ...]:
        """Timezone catalog, labelled in the interface locale."""
        with self._lock.read():
            return self._labels.timezones

    def keymaps(self) -> tuple[KeymapEntry, ...]:
        """Keymap catalog."""
        with self._lock.read():
            return self._labels.keymaps

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def apply(self, update: UpdateRequest) -> ChangeSet:
        """Validate and commit a partial update.

        Args:
            update: Fields to change; absent fields are left untouched

        Returns:
            The fields that were applied

        Raises:
            UnknownLocaleError: A locale or the ui_locale is not known
            UnknownTimezoneError: The timezone is not known
            InvalidKeymapError: A keymap is malformed or not known
            CommitError: The keymap could not be applied to the session

        """
        with self._lock.write():
            try:
                staged = self._stage(update)
            except ValidationFailure as e:
                logger.warning("Rejected l10n update: %s", e)
                raise

            if update.ui_keymap is not None:
                try:
                    self._keyboard.apply_keymap(staged.ui_keymap)
                except CommitError as e:
                    logger.error(
                        "Keymap %s not applied: %s", staged.ui_keymap, e
                    )
                    raise

            labels = self._labels
            if update.ui_locale is not None:
                try:
                    self._switch_locale(staged.ui_locale)
                except OSError as e:
                    msg = f"Could not switch interface locale: {e}"
                    logger.error(msg)
                    raise CommitError(
                        msg, field="ui_locale", value=staged.ui_locale, cause=e
                    ) from e
                labels = self._translate(staged.ui_locale)

            self._config = staged
            self._labels = labels

            changes = ChangeSet(
                **{
                    name: getattr(staged, name)
                    for name in update.present_fields()
                    if name != "locales"
                },
                locales=(
                    tuple(staged.locales)
                    if update.locales is not None
                    else None
                ),
            )
            if update.ui_locale is not None:
                self._events.send(LocaleChanged(staged.ui_locale))
            self._events.send(L10nConfigChanged(changes))

        logger.info(
            "Applied l10n update: %s", ", ".join(changes.fields) or "-"
        )
        return changes

    def _stage(self, update: UpdateRequest) -> DesiredConfig:
        """Return the current configuration with ``update`` applied.

        Raises:
            ValidationFailure: On the first invalid field

        """
        staged = self._config.copy()
        if update.locales is not None:
            staged.locales = [
                self._resolve_locale(code, "locales")
                for code in update.locales
            ]
        if update.timezone is not None:
            if not self._catalogs.timezones.exists(update.timezone):
                raise UnknownTimezoneError(update.timezone)
            staged.timezone = update.timezone
        if update.keymap is not None:
            staged.keymap = self._resolve_keymap(update.keymap, "keymap")
        if update.ui_locale is not None:
            staged.ui_locale = self._resolve_locale(
                update.ui_locale, "ui_locale"
            )
        if update.ui_keymap is not None:
            staged.ui_keymap = self._resolve_keymap(
                update.ui_keymap, "ui_keymap"
            )
        return staged

    def _resolve_locale(self, code: str, field: str) -> str:
        """Return the catalog id for ``code``.

        ``de_DE.UTF-8`` resolves to ``de_DE`` when only the latter is in
        the catalog.
        """
        if self._catalogs.locales.exists(code):
            return code
        try:
            base = LocaleId.parse(code).code
        except ValueError as e:
            raise UnknownLocaleError(code, field=field) from e
        if self._catalogs.locales.exists(base):
            return base
        raise UnknownLocaleError(code, field=field)

    def _resolve_keymap(self, value: str, field: str) -> str:
        try:
            keymap_id = str(KeymapId.parse(value))
        except ValueError as e:
            raise InvalidKeymapError(value, field=field) from e
        if not self._catalogs.keymaps.exists(keymap_id):
            raise InvalidKeymapError(value, field=field)
        return keymap_id

    def _translate(self, ui_locale: str) -> _Labels:
        return _Labels(
            locales=translate_locales(
                self._catalogs.locales.entries(), ui_locale
            ),
            timezones=translate_timezones(
                self._catalogs.timezones.entries(), ui_locale
            ),
            keymaps=self._catalogs.keymaps.entries(),
        )
