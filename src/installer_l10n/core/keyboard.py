"""Applying a keyboard layout to the running graphical session.

The state manager depends on the ``KeymapApplier`` protocol only, so tests
and headless deployments can pass ``NullKeymapApplier`` instead of running
system commands.
"""

from __future__ import annotations

import os
import subprocess
from typing import Protocol, runtime_checkable

from installer_l10n.constants import (
    DEFAULT_DISPLAY,
    DEFAULT_LOCALECTL_PATH,
    DEFAULT_SETXKBMAP_PATH,
)
from installer_l10n.exceptions import CommitError
from installer_l10n.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class KeymapApplier(Protocol):
    """Applies a keymap to the local session."""

    def apply_keymap(self, keymap_id: str) -> None:
        """Make ``keymap_id`` the active layout.

        Raises:
            CommitError: If the layout could not be applied

        """
        ...


class NullKeymapApplier:
    """Keymap applier that changes nothing (no local graphical session)."""

    def apply_keymap(self, keymap_id: str) -> None:
        logger.debug("Skipping keymap %s: no local session", keymap_id)


class SystemKeymapApplier:
    """Apply keymaps with ``localectl`` and ``setxkbmap``.

    ``localectl set-x11-keymap`` updates the system X11 configuration and
    ``setxkbmap`` switches the layout of the display already running.
    """

    def __init__(
        self,
        localectl: str = DEFAULT_LOCALECTL_PATH,
        setxkbmap: str = DEFAULT_SETXKBMAP_PATH,
        display: str = DEFAULT_DISPLAY,
    ) -> None:
        self.localectl = localectl
        self.setxkbmap = setxkbmap
        self.display = display

    def apply_keymap(self, keymap_id: str) -> None:
        """Run both commands in sequence; the second needs ``DISPLAY``.

        Raises:
            CommitError: If a command cannot be started or exits non-zero.
                When ``setxkbmap`` fails the system configuration has
                already been changed by ``localectl``.

        """
        self._run([self.localectl, "set-x11-keymap", keymap_id], keymap_id)
        self._run(
            [self.setxkbmap, keymap_id],
            keymap_id,
            env={**os.environ, "DISPLAY": self.display},
        )
        logger.info("Applied keymap %s to display %s", keymap_id, self.display)

    @staticmethod
    def _run(
        cmd: list[str], keymap_id: str, env: dict[str, str] | None = None
    ) -> None:
        logger.debug("Running %s", " ".join(cmd))
        try:
            subprocess.run(  # noqa: S603
                cmd, check=True, capture_output=True, text=True, env=env
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            msg = f"{cmd[0]} exited with status {e.returncode}"
            if stderr:
                msg = f"{msg}: {stderr}"
            raise CommitError(
                msg, field="ui_keymap", value=keymap_id, cause=e
            ) from e
        except OSError as e:
            msg = f"Could not run {cmd[0]}: {e}"
            raise CommitError(
                msg, field="ui_keymap", value=keymap_id, cause=e
            ) from e
