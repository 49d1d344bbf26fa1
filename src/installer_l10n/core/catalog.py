"""Reference catalogs for locales, timezones and keymaps.

Catalogs are read once from JSON files in the catalog directory, checked
against the bundled schemas and kept immutable for the life of the
process. They are safe to read from any thread without locking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

import orjson

from installer_l10n.config.paths import Paths
from installer_l10n.config.schemas import CatalogValidator, SchemaValidationError
from installer_l10n.constants import (
    KEYMAPS_CATALOG_FILE,
    LOCALES_CATALOG_FILE,
    TIMEZONES_CATALOG_FILE,
)
from installer_l10n.domain.ids import KeymapId
from installer_l10n.domain.types import KeymapEntry, LocaleEntry, TimezoneEntry
from installer_l10n.exceptions import CatalogLoadError
from installer_l10n.logger import get_logger

logger = get_logger(__name__)

EntryT = TypeVar("EntryT")


class Catalog(Generic[EntryT]):
    """Ordered, immutable sequence of entries indexed by identifier."""

    def __init__(
        self,
        name: str,
        entries: Iterable[EntryT],
        key: Callable[[EntryT], str],
    ) -> None:
        """Build the catalog.

        Args:
            name: Catalog name used in error messages
            entries: Entries in catalog order
            key: Returns the identifier of an entry

        Raises:
            CatalogLoadError: If two entries share an identifier

        """
        self.name = name
        self._entries = tuple(entries)
        self._index: dict[str, EntryT] = {}
        for entry in self._entries:
            code = key(entry)
            if code in self._index:
                msg = f"Duplicate identifier {code!r}"
                raise CatalogLoadError(msg, field=name)
            self._index[code] = entry

    def exists(self, code: str) -> bool:
        """Return True when ``code`` identifies an entry."""
        return code in self._index

    def entries(self) -> tuple[EntryT, ...]:
        """All entries in catalog order."""
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(frozen=True)
class Catalogs:
    """The three reference catalogs."""

    locales: Catalog[LocaleEntry]
    timezones: Catalog[TimezoneEntry]
    keymaps: Catalog[KeymapEntry]


def _read_catalog(
    directory: Path, filename: str, kind: str, validator: CatalogValidator
) -> list[dict[str, Any]]:
    """Decode and validate one catalog file.

    Raises:
        CatalogLoadError: If the file is missing, not JSON or invalid

    """
    path = directory / filename
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError as e:
        msg = f"Catalog file not found: {path}"
        raise CatalogLoadError(msg, field=kind) from e
    except OSError as e:
        msg = f"Could not read {path}: {e}"
        raise CatalogLoadError(msg, field=kind) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise CatalogLoadError(msg, field=kind) from e

    try:
        validator.validate(kind, data)
    except SchemaValidationError as e:
        raise CatalogLoadError(str(e), field=kind) from e
    return data  # type: ignore[no-any-return]


def _keymap_entry(raw: dict[str, Any]) -> KeymapEntry:
    try:
        keymap_id = KeymapId.parse(raw["id"])
    except ValueError as e:
        raise CatalogLoadError(str(e), field="keymaps") from e
    return KeymapEntry(id=keymap_id, description=raw["description"])


def load_catalogs(directory: Path | None = None) -> Catalogs:
    """Load the locale, timezone and keymap catalogs.

    Args:
        directory: Directory holding the catalog files (defaults to the
            catalogs bundled with the package)

    Returns:
        Loaded catalogs

    Raises:
        CatalogLoadError: If any catalog cannot be loaded. The service
            cannot validate anything without its catalogs, so callers
            treat this as fatal.

    """
    directory = directory or Paths.CATALOG_DIR
    validator = CatalogValidator()

    locales = Catalog(
        "locales",
        (
            LocaleEntry(raw["id"], raw["language"], raw["territory"])
            for raw in _read_catalog(
                directory, LOCALES_CATALOG_FILE, "locales", validator
            )
        ),
        key=lambda entry: entry.id,
    )
    timezones = Catalog(
        "timezones",
        (
            TimezoneEntry(raw["code"], tuple(raw["parts"]))
            for raw in _read_catalog(
                directory, TIMEZONES_CATALOG_FILE, "timezones", validator
            )
        ),
        key=lambda entry: entry.code,
    )
    keymaps = Catalog(
        "keymaps",
        (
            _keymap_entry(raw)
            for raw in _read_catalog(
                directory, KEYMAPS_CATALOG_FILE, "keymaps", validator
            )
        ),
        key=lambda entry: str(entry.id),
    )

    logger.info(
        "Loaded catalogs from %s: %d locales, %d timezones, %d keymaps",
        directory,
        len(locales),
        len(timezones),
        len(keymaps),
    )
    return Catalogs(locales=locales, timezones=timezones, keymaps=keymaps)
