"""Synchronization primitives — a reader-writer lock and a one-shot latch.

The hosts table is read far more often than it is written: every name
resolution is a read, while a reload happens once per period.  Two
primitives cover that access pattern:

- **ReadWriteLock** — many concurrent readers OR one exclusive writer,
  built on a single ``threading.Condition``.
- **Latch** — a one-way gate that starts open and can be closed exactly
  once.  Closing it is idempotent and observing it never blocks.

Real-world analogies:
    - **ReadWriteLock**: A museum exhibit — visitors (readers) can look
      together, but a restorer (writer) needs the room cleared.
    - **Latch**: A fuse — once blown it stays blown, and checking it is
      just a glance.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class ReadWriteLock:
    """Reader-writer lock — multiple readers OR one exclusive writer.

    Writer-preference: when a writer is waiting, new readers queue
    behind it rather than jumping ahead, so a steady stream of lookups
    cannot starve a reload.

    The lock is not reentrant.  A thread holding the read side must not
    request the write side.
    """

    def __init__(self, *, name: str) -> None:
        """Create an unlocked reader-writer lock with the given name."""
        self._name = name
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._waiting_writers = 0

    @property
    def name(self) -> str:
        """Return the lock name."""
        return self._name

    @property
    def reader_count(self) -> int:
        """Return the number of active readers."""
        with self._cond:
            return self._readers

    @property
    def is_writing(self) -> bool:
        """Return whether a writer currently holds the lock."""
        with self._cond:
            return self._writing

    def acquire_read(self) -> None:
        """Block until read access is granted.

        Access is granted when there is no active writer AND no writer
        waiting (writer-preference).
        """
        with self._cond:
            while self._writing or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release read access and wake a waiting writer if this was the last reader.

        Raises:
            RuntimeError: If no reader holds the lock.

        """
        with self._cond:
            if self._readers == 0:
                msg = f"release_read on '{self._name}' without an active reader"
                raise RuntimeError(msg)
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until exclusive write access is granted."""
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writing = True

    def release_write(self) -> None:
        """Release write access and wake every waiter.

        Raises:
            RuntimeError: If no writer holds the lock.

        """
        with self._cond:
            if not self._writing:
                msg = f"release_write on '{self._name}' without an active writer"
                raise RuntimeError(msg)
            self._writing = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold read access for the duration of a ``with`` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold write access for the duration of a ``with`` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        with self._cond:
            writing, readers = self._writing, self._readers
        if writing:
            state = "writing"
        elif readers:
            word = "reader" if readers == 1 else "readers"
            state = f"{readers} {word}"
        else:
            state = "idle"
        return f"ReadWriteLock('{self._name}', {state})"


class Latch:
    """A one-shot, thread-safe closed/open flag.

    Backed by ``threading.Event``: ``is_closed`` reads the event without
    taking any lock.  ``close`` serializes on a private lock of its own,
    so exactly one caller sees the transition however many race.
    """

    def __init__(self) -> None:
        """Create an open latch."""
        self._event = threading.Event()
        self._close_lock = threading.Lock()

    def close(self) -> bool:
        """Close the latch.

        Returns:
            True if this call closed it, False if it was already closed.

        """
        with self._close_lock:
            if self._event.is_set():
                return False
            self._event.set()
            return True

    def is_closed(self) -> bool:
        """Return whether the latch has been closed."""
        return self._event.is_set()

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        state = "closed" if self.is_closed() else "open"
        return f"Latch({state})"
