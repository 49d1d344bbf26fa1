"""Change notifications and the process-wide broadcast channel.

Publishers call ``BroadcastChannel.send`` and never wait: each receiver
owns a bounded buffer, and when it is full the oldest event is discarded
and counted in ``EventReceiver.lagged``. Receivers must tolerate missed
events.

Usage::

    channel = BroadcastChannel(capacity=16)
    with channel.subscribe() as receiver:
        event = receiver.recv(timeout=1.0)
        print(event.to_dict())

"""

from __future__ import annotations

import queue
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, Self, runtime_checkable

from installer_l10n.constants import (
    DEFAULT_EVENTS_CAPACITY,
    EVENT_CONFIG_CHANGED,
    EVENT_LOCALE_CHANGED,
)
from installer_l10n.domain.types import ChangeSet
from installer_l10n.logger import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Event(Protocol):
    """Anything that can be published on the channel."""

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class L10nConfigChanged:
    """The desired configuration changed. Carries only the changed fields."""

    changes: ChangeSet

    def to_dict(self) -> dict[str, Any]:
        return {"type": EVENT_CONFIG_CHANGED, **self.changes.to_dict()}


@dataclass(frozen=True)
class LocaleChanged:
    """The interface locale of the running installer changed."""

    locale: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": EVENT_LOCALE_CHANGED, "locale": self.locale}


class EventReceiver:
    """One subscriber's bounded view of the channel."""

    def __init__(
        self,
        channel: BroadcastChannel,
        capacity: int,
        on_push: Callable[[], None] | None = None,
    ) -> None:
        self._channel = channel
        self._on_push = on_push
        self._buffer: deque[Event] = deque()
        self._capacity = capacity
        self._cond = threading.Condition()
        self._closed = False
        self.lagged = 0

    def _push(self, event: Event) -> None:
        with self._cond:
            if self._closed:
                return
            if len(self._buffer) >= self._capacity:
                self._buffer.popleft()
                self.lagged += 1
            self._buffer.append(event)
            self._cond.notify()
        if self._on_push is not None:
            self._on_push()

    def recv(self, timeout: float | None = None) -> Event:
        """Wait for the next event.

        Args:
            timeout: Seconds to wait; None waits forever

        Returns:
            The oldest buffered event

        Raises:
            queue.Empty: If no event arrived in time or the receiver was
                closed while empty

        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._buffer:
                if self._closed:
                    raise queue.Empty
                remaining = (
                    None if deadline is None else deadline - time.monotonic()
                )
                if remaining is not None and remaining <= 0:
                    raise queue.Empty
                self._cond.wait(remaining)
            return self._buffer.popleft()

    def try_recv(self) -> Event | None:
        """Return the next event without waiting, or None."""
        with self._cond:
            return self._buffer.popleft() if self._buffer else None

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Unsubscribe and wake any thread blocked in ``recv``."""
        self._channel._unsubscribe(self)
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class BroadcastChannel:
    """Bounded fan-out channel shared by the whole process."""

    def __init__(self, capacity: int = DEFAULT_EVENTS_CAPACITY) -> None:
        if capacity <= 0:
            msg = f"capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self.capacity = capacity
        self._receivers: list[EventReceiver] = []
        self._lock = threading.Lock()

    def subscribe(
        self, on_push: Callable[[], None] | None = None
    ) -> EventReceiver:
        """Register a new receiver. It sees events sent from now on.

        Args:
            on_push: Called from the publishing thread after each event is
                buffered, e.g. to wake an event loop

        """
        receiver = EventReceiver(self, self.capacity, on_push)
        with self._lock:
            self._receivers.append(receiver)
        return receiver

    def _unsubscribe(self, receiver: EventReceiver) -> None:
        with self._lock:
            if receiver in self._receivers:
                self._receivers.remove(receiver)

    @property
    def receiver_count(self) -> int:
        with self._lock:
            return len(self._receivers)

    def send(self, event: Event) -> int:
        """Publish ``event`` to every current receiver without blocking.

        Returns:
            Number of receivers the event was delivered to

        """
        with self._lock:
            receivers = list(self._receivers)
        for receiver in receivers:
            receiver._push(event)
        logger.debug(
            "Published %s to %d receiver(s)",
            type(event).__name__,
            len(receivers),
        )
        return len(receivers)
