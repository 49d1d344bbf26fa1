"""CLI argument parser for installer-l10n."""

import argparse
from argparse import Namespace
from collections.abc import Sequence

from installer_l10n import __version__
from installer_l10n.config import Settings


class CLIParser:
    """Command-line argument parser for installer-l10n."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the parser.

        Args:
            settings: Loaded settings, used for option defaults

        """
        self.settings = settings

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to ``sys.argv[1:]``)

        Returns:
            Parsed arguments namespace

        """
        parser = self._create_main_parser()
        self._add_subcommands(parser)
        return parser.parse_args(argv)

    def _create_main_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="installer-l10n",
            description="Localization configuration service for the installer",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Serve the HTTP API on the configured address
  %(prog)s serve
  %(prog)s serve --host 0.0.0.0 --port 3000 --no-keyboard

  # Inspect the reference catalogs
  %(prog)s catalog locales
  %(prog)s catalog keymaps

  # Show the configuration the service would start with
  %(prog)s config
            """,
        )
        parser.add_argument(
            "--version", action="version", version=f"%(prog)s {__version__}"
        )
        return parser

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(dest="command", required=True)

        server = self.settings["server"]
        serve = subparsers.add_parser("serve", help="Run the HTTP service")
        serve.add_argument(
            "--host",
            default=server["host"],
            help="Address to bind (default: %(default)s)",
        )
        serve.add_argument(
            "--port",
            type=int,
            default=server["port"],
            help="Port to listen on (default: %(default)s)",
        )
        serve.add_argument(
            "--no-keyboard",
            action="store_true",
            help="Do not apply ui_keymap to the local graphical session",
        )

        catalog = subparsers.add_parser(
            "catalog", help="Print a reference catalog as JSON"
        )
        catalog.add_argument(
            "kind", choices=("locales", "timezones", "keymaps")
        )

        subparsers.add_parser(
            "config", help="Print the startup configuration as JSON"
        )
