"""Logger state shared by the whole process.

Holds the single QueueListener that owns every handler. Only the
``installer_l10n`` root logger is attached to it.
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import queue
    from logging.handlers import QueueListener


class _LoggerState:
    """Container for logger state (avoids module-level mutable globals).

    Attributes:
        lock: Thread lock for root logger initialization
        root_initialized: Whether root logger has been set up
        settings_applied: Whether settings file levels have been applied
        queue_listener: Background thread processing log records
        log_queue: Queue feeding the listener

    """

    def __init__(self) -> None:
        """Initialize logger state."""
        self.lock = threading.Lock()
        self.root_initialized = False
        self.settings_applied = False
        self.queue_listener: QueueListener | None = None
        self.log_queue: queue.Queue | None = None


_state = _LoggerState()


def get_state() -> _LoggerState:
    """Get the process-wide logger state.

    Returns:
        The logger state instance

    """
    return _state
