"""Define a reader/writer lock whose readers never block."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator


class SharedLock:
    """A lock allowing many concurrent readers or one exclusive writer.

    Readers only ever attempt the lock once: if a writer holds it (or is waiting for it),
        the attempt fails immediately and the reader is expected to skip its work.
        Writers block until every active reader has released the lock.
    """

    def __init__(self) -> None:
        """Initialize the lock in its released state."""
        self._condition = threading.Condition(threading.Lock())

        self._num_readers = 0
        """Number of shared holders currently inside the lock."""

        self._writer_active = False
        self._writers_waiting = 0

    @property
    def num_readers(self) -> int:
        """Retrieve the number of readers currently holding the lock."""
        with self._condition:
            return self._num_readers

    @property
    def writer_active(self) -> bool:
        """Check whether a writer currently holds the lock."""
        with self._condition:
            return self._writer_active

    @property
    def writers_waiting(self) -> int:
        """Retrieve the number of writers blocked while waiting for exclusive access."""
        with self._condition:
            return self._writers_waiting

    def try_acquire_shared(self) -> bool:
        """Attempt to acquire shared (read) access without blocking.

        :return: True if shared access was acquired, False if a writer holds or awaits the lock
        """
        with self._condition:
            if self._writer_active or self._writers_waiting:
                return False
            self._num_readers += 1
            return True

    def release_shared(self) -> None:
        """Release shared access previously acquired by try_acquire_shared()."""
        with self._condition:
            if self._num_readers == 0:
                raise RuntimeError("Cannot release shared access that was never acquired.")
            self._num_readers -= 1
            if self._num_readers == 0:
                self._condition.notify_all()

    def acquire_exclusive(self, timeout_s: float | None = None) -> bool:
        """Acquire exclusive (write) access, waiting for active readers and writers to finish.

        :param timeout_s: Maximum duration (seconds) to wait (if None, wait indefinitely)
        :return: True if exclusive access was acquired, else False
        """
        with self._condition:
            self._writers_waiting += 1
            try:
                acquired = self._condition.wait_for(
                    lambda: not self._writer_active and self._num_readers == 0,
                    timeout=timeout_s,
                )
                if acquired:
                    self._writer_active = True
                return acquired
            finally:
                self._writers_waiting -= 1

    def release_exclusive(self) -> None:
        """Release exclusive access previously acquired by acquire_exclusive()."""
        with self._condition:
            if not self._writer_active:
                raise RuntimeError("Cannot release exclusive access that was never acquired.")
            self._writer_active = False
            self._condition.notify_all()

    @contextmanager
    def shared_attempt(self) -> Generator[bool, None, None]:
        """Manage a context holding shared access if a single non-blocking attempt succeeds.

        :yield: True if shared access is held within the context, False if the attempt failed
        """
        acquired = self.try_acquire_shared()
        try:
            yield acquired
        finally:
            if acquired:
                self.release_shared()

    @contextmanager
    def exclusive(self) -> Generator[None, None, None]:
        """Manage a context holding exclusive access, blocking until it is available."""
        self.acquire_exclusive()
        try:
            yield
        finally:
            self.release_exclusive()
