"""Hosts table event log.

The table records what each reload did — how many records it loaded,
which lines it dropped and why, and when it was stopped.  Parse
problems in a hand-edited hosts file are never raised to the caller,
so this log is the only place they become visible.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, line).
- **Logger** — an append-only, thread-safe log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **One lock around the entry list** — reloads, lookups and stops
      run on arbitrary caller threads and may log concurrently.
"""

import threading
from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that generated the event (e.g. "hosts").
        line: The 1-based source line the event refers to, if any.

    """

    level: LogLevel
    message: str
    source: str
    line: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message`` or ``[LEVEL] source:line: message``."""
        where = self.source if self.line is None else f"{self.source}:{self.line}"
        return f"[{self.level.name}] {where}: {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    The logger collects ``LogEntry`` records and provides simple
    querying by level and/or source.
    """

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        with self._lock:
            return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        line: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.
            line: Source line number associated with the event.

        """
        entry = LogEntry(level=level, message=message, source=source, line=line)
        with self._lock:
            self._entries.append(entry)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self.entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result

    def clear(self) -> None:
        """Remove all log entries."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        with self._lock:
            return len(self._entries)
