"""Main CLI entry point for installer-l10n."""

import sys

from .cli import CLIRunner


def main() -> None:
    """Run the CLI application.

    Raises:
        SystemExit: Always, with the command's exit status.

    """
    try:
        sys.exit(CLIRunner().run())
    except KeyboardInterrupt:
        print("\nStopped")  # noqa: T201
        sys.exit(130)


if __name__ == "__main__":
    main()
