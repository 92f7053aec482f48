"""Static hosts table — a live-reloadable local override consulted before DNS.

The table holds an ordered list of ``Host`` records.  Name lookups
scan it under a shared lock; a reload parses a whole hosts text off
to the side and then swaps the new records in, together with the
``reload`` period the text declared, under the exclusive lock.  A
reader therefore sees either the old table or the new one, never a
mix of the two.

The table never schedules anything itself.  Whoever feeds it text asks
``period()`` how long to wait before the next reload; once the table is
stopped, ``period()`` answers ``STOPPED_PERIOD`` and further reloads
are ignored.

Text format::

    # comment
    192.168.1.1   host.local   alias1  alias2
    reload 30s
"""

import io
from collections.abc import Iterable
from datetime import timedelta
from typing import Protocol

from py_hosts.logging import Logger, LogLevel
from py_hosts.parser import ReloadDirective, parse_duration, parse_line, split_line
from py_hosts.record import Host, HostsError, IPAddress
from py_hosts.sync import Latch, ReadWriteLock

LOG_SOURCE = "hosts"

MAX_LINE_LENGTH = 64 * 1024
"""Longest line a reload accepts; longer lines fail the whole reload."""

STOPPED_PERIOD = timedelta(seconds=-1)
"""Period reported by a stopped table: do not reload again."""


class Hosts(Protocol):
    """Anything that can resolve a hostname to an address."""

    def lookup(self, host: str) -> IPAddress | None:
        """Return the address for *host*, or None."""
        ...  # pragma: no cover


class Reloader(Protocol):
    """Anything that can be re-fed its configuration text."""

    def reload(self, source: Iterable[str] | str | None) -> None:
        """Replace the current configuration with *source*."""
        ...  # pragma: no cover

    def period(self) -> timedelta:
        """Return how long to wait before the next reload."""
        ...  # pragma: no cover


class Stoppable(Protocol):
    """Anything with a one-way stop switch."""

    def stop(self) -> None:
        """Stop for good."""
        ...  # pragma: no cover

    def stopped(self) -> bool:
        """Return whether stop has been called."""
        ...  # pragma: no cover


class StaticHosts:
    """An ordered, concurrently readable hostname → IP table."""

    def __init__(self, *hosts: Host, logger: Logger | None = None) -> None:
        """Create a table seeded with *hosts*, period zero, not stopped.

        Args:
            hosts: Initial records, in lookup order.
            logger: Where reload and stop events are recorded.  A private
                logger is created when omitted.

        """
        self._hosts: tuple[Host, ...] = hosts
        self._period = timedelta(0)
        self._lock = ReadWriteLock(name="hosts")
        self._stopped = Latch()
        self._log = logger if logger is not None else Logger()

    @property
    def log(self) -> Logger:
        """Return the event log."""
        return self._log

    def lookup(self, host: str) -> IPAddress | None:
        """Return the address for *host*, or None if no record names it.

        Records are scanned in order and the first one whose hostname or
        alias equals *host* wins.  An empty name never matches.
        """
        if not host:
            return None
        with self._lock.read_locked():
            for record in self._hosts:
                if record.matches(host):
                    return record.ip
        return None

    def records(self) -> tuple[Host, ...]:
        """Return the current records in lookup order."""
        with self._lock.read_locked():
            return self._hosts

    def reload(self, source: Iterable[str] | str | None) -> None:
        """Replace the table with the records parsed from *source*.

        Malformed lines are skipped and noted in the log at DEBUG.  The
        last ``reload`` directive sets the period; one that does not
        parse sets it to zero.  Nothing happens when *source* is None or
        the table is stopped.

        Args:
            source: Hosts text, as a string or any iterable of lines
                (an open text file, ``io.StringIO``, a list).

        Raises:
            HostsError: If reading *source* fails.  The table keeps its
                previous records and period.

        """
        if source is None or self.stopped():
            return
        if isinstance(source, str):
            source = io.StringIO(source)

        try:
            hosts, period = self._parse(source)
        except HostsError as exc:
            self._log.log(LogLevel.ERROR, f"reload failed: {exc}", source=LOG_SOURCE)
            raise

        with self._lock.write_locked():
            self._hosts = hosts
            self._period = period

        self._log.log(
            LogLevel.INFO,
            f"reloaded {len(hosts)} host(s), period {period}",
            source=LOG_SOURCE,
        )

    def _parse(self, source: Iterable[str]) -> tuple[tuple[Host, ...], timedelta]:
        """Read every line of *source* into records and a period."""
        hosts: list[Host] = []
        period = timedelta(0)
        try:
            for lineno, line in enumerate(source, start=1):
                if len(line.rstrip("\r\n")) > MAX_LINE_LENGTH:
                    msg = f"line {lineno} exceeds {MAX_LINE_LENGTH} characters"
                    raise HostsError(msg)
                fields = split_line(line)
                try:
                    entry = parse_line(fields)
                except ValueError as exc:
                    self._skip(lineno, str(exc))
                    continue
                if entry is None:
                    if fields:
                        self._skip(lineno, "too few fields")
                elif isinstance(entry, ReloadDirective):
                    try:
                        period = parse_duration(entry.literal)
                    except ValueError as exc:
                        period = timedelta(0)
                        self._skip(lineno, str(exc))
                else:
                    hosts.append(entry)
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read hosts source: {exc}"
            raise HostsError(msg) from exc
        return tuple(hosts), period

    def _skip(self, lineno: int, reason: str) -> None:
        self._log.log(LogLevel.DEBUG, f"ignored: {reason}", source=LOG_SOURCE, line=lineno)

    def period(self) -> timedelta:
        """Return how long the caller should wait before the next reload.

        Returns:
            The period from the most recent reload (zero if none set
            one), or ``STOPPED_PERIOD`` once the table is stopped.

        """
        if self.stopped():
            return STOPPED_PERIOD
        with self._lock.read_locked():
            return self._period

    def stop(self) -> None:
        """Stop accepting reloads.  Safe to call repeatedly and concurrently."""
        if self._stopped.close():
            self._log.log(LogLevel.INFO, "stopped", source=LOG_SOURCE)

    def stopped(self) -> bool:
        """Return whether ``stop`` has been called."""
        return self._stopped.is_closed()

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        state = "stopped" if self.stopped() else f"period {self.period()}"
        return f"StaticHosts({len(self.records())} hosts, {state})"


def lookup(hosts: Hosts | None, host: str) -> IPAddress | None:
    """Resolve *host* through *hosts*, treating a missing table as empty."""
    if hosts is None or not host:
        return None
    return hosts.lookup(host)
