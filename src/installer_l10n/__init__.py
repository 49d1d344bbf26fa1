"""Top-level package for installer-l10n.

Localization configuration service for an operating system installer.
License: GPL-3.0
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("installer-l10n")
    # Handle None return in Python 3.13+ for uninstalled packages
    if __version__ is None:
        __version__ = "dev"
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
