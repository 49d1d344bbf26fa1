"""CLI runner for installer-l10n.

Loads settings, wires the catalogs, event channel and state manager
together, and dispatches the parsed subcommand.
"""

import asyncio
import sys
from argparse import Namespace
from collections.abc import Sequence

import orjson
import uvloop
from aiohttp import web

from installer_l10n.config import Settings, SettingsManager
from installer_l10n.core import (
    BroadcastChannel,
    Catalogs,
    KeymapApplier,
    L10nManager,
    NullKeymapApplier,
    SystemKeymapApplier,
    default_config,
    load_catalogs,
)
from installer_l10n.exceptions import CatalogLoadError, ValidationFailure
from installer_l10n.logger import get_logger, update_logger_from_settings

from .parser import CLIParser

logger = get_logger(__name__)


def build_manager(
    settings: Settings,
    catalogs: Catalogs,
    channel: BroadcastChannel,
    *,
    keyboard: bool = True,
) -> L10nManager:
    """Create the state manager described by ``settings``.

    Args:
        settings: Loaded settings
        catalogs: Reference catalogs
        channel: Channel for change notifications
        keyboard: Whether ui_keymap changes run the system commands

    Returns:
        Ready-to-use manager

    """
    applier: KeymapApplier = NullKeymapApplier()
    if keyboard:
        kb = settings["keyboard"]
        applier = SystemKeymapApplier(
            localectl=kb["localectl"],
            setxkbmap=kb["setxkbmap"],
            display=kb["display"],
        )
    initial = default_config(
        catalogs,
        default_timezone=settings["default_timezone"],
        default_keymap=settings["default_keymap"],
    )
    return L10nManager(catalogs, channel, applier, initial=initial)


async def serve(app: web.Application, host: str, port: int) -> None:
    """Run ``app`` until the task is cancelled."""
    runner = web.AppRunner(app)
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        await site.start()
        logger.info("Serving localization API on http://%s:%d", host, port)
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, settings_manager: SettingsManager | None = None) -> None:
        """Load settings and apply them to the logger.

        Args:
            settings_manager: Settings source (defaults to the user's
                settings.conf)

        """
        self.settings_manager = settings_manager or SettingsManager()
        self.settings = self.settings_manager.load()
        update_logger_from_settings(self.settings_manager)

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse ``argv`` and execute the selected command.

        Returns:
            Process exit status

        """
        args = CLIParser(self.settings).parse_args(argv)
        try:
            catalogs = load_catalogs(self.settings["catalog_dir"])
        except CatalogLoadError as e:
            logger.critical("Cannot start without catalogs: %s", e)
            return 1

        if args.command == "catalog":
            return self._print_catalog(catalogs, args.kind)
        if args.command == "config":
            return self._print_config(catalogs)
        return self._serve(catalogs, args)

    def _serve(self, catalogs: Catalogs, args: Namespace) -> int:
        from installer_l10n.web import create_app  # noqa: PLC0415

        channel = BroadcastChannel(self.settings["events_capacity"])
        try:
            manager = build_manager(
                self.settings,
                catalogs,
                channel,
                keyboard=not args.no_keyboard,
            )
        except ValidationFailure as e:
            logger.critical("Invalid startup configuration: %s", e)
            return 1

        uvloop.run(serve(create_app(manager, channel), args.host, args.port))
        return 0

    @staticmethod
    def _print_catalog(catalogs: Catalogs, kind: str) -> int:
        catalog = getattr(catalogs, kind)
        data = [entry.to_dict() for entry in catalog.entries()]
        sys.stdout.write(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
        sys.stdout.write("\n")
        return 0

    def _print_config(self, catalogs: Catalogs) -> int:
        config = default_config(
            catalogs,
            default_timezone=self.settings["default_timezone"],
            default_keymap=self.settings["default_keymap"],
        )
        sys.stdout.write(
            orjson.dumps(config.to_dict(), option=orjson.OPT_INDENT_2).decode()
        )
        sys.stdout.write("\n")
        return 0
