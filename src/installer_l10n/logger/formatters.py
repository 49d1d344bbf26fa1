"""Console formatter for the installer-l10n logging system."""

import logging

from installer_l10n.constants import LOG_COLORS


class ColoredConsoleFormatter(logging.Formatter):
    """Console formatter adding ANSI colors to the level name.

    The record's ``levelname`` is swapped only for the duration of
    ``format()`` so file handlers sharing the record see the plain name.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a colored level name.

        Args:
            record: The log record to format

        Returns:
            Formatted log message

        """
        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        original_levelname = record.levelname
        record.levelname = f"{color}{record.levelname}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
