"""Locale and keymap identifiers.

A locale id looks like ``de_DE`` or ``en_US.UTF-8``. A keymap id is an
X11 layout with an optional variant: ``us`` or ``cz(qwerty)``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Self

_LOCALE_RE = re.compile(
    r"^(?P<language>[a-z]{2,3})_(?P<territory>[A-Z]{2})"
    r"(?:\.(?P<encoding>[A-Za-z0-9-]+))?$"
)
_KEYMAP_RE = re.compile(
    r"^(?P<layout>[A-Za-z0-9][\w-]*)(?:\((?P<variant>[A-Za-z0-9][\w-]*)\))?$"
)


@dataclass(frozen=True, slots=True)
class LocaleId:
    """Parsed locale identifier."""

    language: str
    territory: str
    encoding: str | None = None

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse ``language_TERRITORY[.encoding]``.

        Raises:
            ValueError: If ``text`` is not a locale identifier

        """
        match = _LOCALE_RE.match(text.strip())
        if match is None:
            msg = f"Not a locale identifier: {text!r}"
            raise ValueError(msg)
        return cls(
            match["language"], match["territory"], match["encoding"]
        )

    @property
    def code(self) -> str:
        """Identifier without the encoding suffix."""
        return f"{self.language}_{self.territory}"

    def __str__(self) -> str:
        if self.encoding:
            return f"{self.code}.{self.encoding}"
        return self.code


@dataclass(frozen=True, slots=True)
class KeymapId:
    """Parsed keymap identifier."""

    layout: str
    variant: str | None = None

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse ``layout`` or ``layout(variant)``.

        Raises:
            ValueError: If ``text`` is not a keymap identifier

        """
        match = _KEYMAP_RE.match(text)
        if match is None:
            msg = f"Not a keymap identifier: {text!r}"
            raise ValueError(msg)
        return cls(match["layout"], match["variant"])

    def __str__(self) -> str:
        if self.variant:
            return f"{self.layout}({self.variant})"
        return self.layout
