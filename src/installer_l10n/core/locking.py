"""Reader-writer lock guarding the desired configuration.

The standard library has no shared/exclusive lock, so ``ReadWriteLock``
builds one on ``threading.Condition``. Readers share access; a writer gets
exclusive access. Waiting writers block new readers so a steady stream of
snapshots cannot starve an update.

Example:
    >>> lock = ReadWriteLock()
    >>> with lock.read():
    ...     data = record.copy()
    >>> with lock.write():
    ...     record.timezone = "Atlantic/Canary"

"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class ReadWriteLock:
    """Writer-preferring shared/exclusive lock. Not reentrant."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                msg = "release_read() called without a read lock"
                raise RuntimeError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                msg = "release_write() called without the write lock"
                raise RuntimeError(msg)
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold shared access for the ``with`` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold exclusive access for the ``with`` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

