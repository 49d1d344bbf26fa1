"""Data model for localization configuration.

Entries describe catalog content, ``DesiredConfig`` is the mutable record
of the installation's choices, ``UpdateRequest`` is a partial update and
``ChangeSet`` names what an applied update touched.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self, TypedDict

from installer_l10n.domain.ids import KeymapId
from installer_l10n.exceptions import InvalidRequestError

# Validation and commit order of the configuration fields
CONFIG_FIELDS: tuple[str, ...] = (
    "locales",
    "timezone",
    "keymap",
    "ui_locale",
    "ui_keymap",
)


@dataclass(frozen=True, slots=True)
class LocaleEntry:
    """Locale catalog entry."""

    id: str
    language: str
    territory: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "language": self.language,
            "territory": self.territory,
        }


@dataclass(frozen=True, slots=True)
class TimezoneEntry:
    """Timezone catalog entry.

    ``parts`` holds a display label for each ``/``-separated component of
    the code, e.g. ``("Atlantic", "Canary")``.
    """

    code: str
    parts: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "parts": list(self.parts)}


@dataclass(frozen=True, slots=True)
class KeymapEntry:
    """Keymap catalog entry."""

    id: KeymapId
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"id": str(self.id), "description": self.description}


class LocaleConfig(TypedDict):
    """External view of the configuration. Every field is populated."""

    locales: list[str]
    keymap: str
    timezone: str
    ui_locale: str
    ui_keymap: str


@dataclass(slots=True)
class DesiredConfig:
    """Desired localization configuration of the machine being installed.

    Attributes:
        locales: Locales to install in the target system
        keymap: Keymap for the target system
        timezone: Timezone for the target system
        ui_locale: Interface language of the running installer; unrelated
            to ``locales``
        ui_keymap: Keymap of the local graphical session

    """

    locales: list[str]
    keymap: str
    timezone: str
    ui_locale: str
    ui_keymap: str

    def copy(self) -> DesiredConfig:
        """Return an independent copy."""
        return DesiredConfig(
            locales=list(self.locales),
            keymap=self.keymap,
            timezone=self.timezone,
            ui_locale=self.ui_locale,
            ui_keymap=self.ui_keymap,
        )

    def to_dict(self) -> LocaleConfig:
        return LocaleConfig(
            locales=list(self.locales),
            keymap=self.keymap,
            timezone=self.timezone,
            ui_locale=self.ui_locale,
            ui_keymap=self.ui_keymap,
        )


@dataclass(frozen=True, slots=True)
class UpdateRequest:
    """Partial update: ``None`` means the field is absent."""

    locales: tuple[str, ...] | None = None
    timezone: str | None = None
    keymap: str | None = None
    ui_locale: str | None = None
    ui_keymap: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> Self:  # noqa: ANN401
        """Build a request from a decoded JSON object.

        Unknown keys are ignored and ``null`` counts as absent.

        Raises:
            InvalidRequestError: If ``data`` is not an object or a present
                field has the wrong type

        """
        if not isinstance(data, Mapping):
            msg = "Expected a JSON object"
            raise InvalidRequestError(msg)

        locales = data.get("locales")
        if locales is not None:
            if not isinstance(locales, list) or not all(
                isinstance(code, str) for code in locales
            ):
                msg = "'locales' must be a list of strings"
                raise InvalidRequestError(msg, field="locales")
            locales = tuple(locales)

        values: dict[str, str | None] = {}
        for name in ("timezone", "keymap", "ui_locale", "ui_keymap"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                msg = f"'{name}' must be a string"
                raise InvalidRequestError(msg, field=name)
            values[name] = value

        return cls(locales=locales, **values)

    def present_fields(self) -> list[str]:
        """Names of the fields present in the request, in commit order."""
        return [name for name in CONFIG_FIELDS if getattr(self, name) is not None]


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Fields applied by one successful update."""

    locales: tuple[str, ...] | None = None
    timezone: str | None = None
    keymap: str | None = None
    ui_locale: str | None = None
    ui_keymap: str | None = None

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the changed fields, in commit order."""
        return tuple(
            name for name in CONFIG_FIELDS if getattr(self, name) is not None
        )

    def to_dict(self) -> dict[str, Any]:
        """Render only the changed fields."""
        result: dict[str, Any] = {}
        for name in self.fields:
            value = getattr(self, name)
            result[name] = list(value) if name == "locales" else value
        return result
