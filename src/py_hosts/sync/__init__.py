"""Synchronization subsystem — reader-writer lock and one-shot latch.

Re-exports public symbols so callers can write::

    from py_hosts.sync import Latch, ReadWriteLock
"""

from py_hosts.sync.primitives import Latch, ReadWriteLock

__all__ = [
    "Latch",
    "ReadWriteLock",
]
