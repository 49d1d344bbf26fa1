"""Command-line interface for installer-l10n."""

from installer_l10n.cli.runner import CLIRunner

__all__ = ["CLIRunner"]
