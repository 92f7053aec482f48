"""py-hosts — a live-reloadable static hostname → IP table.

Re-exports public symbols so callers can write::

    from py_hosts import Host, StaticHosts
"""

from py_hosts.logging import LogEntry, Logger, LogLevel
from py_hosts.parser import (
    RELOAD_DIRECTIVE,
    ReloadDirective,
    parse_duration,
    parse_ip,
    parse_line,
    split_line,
)
from py_hosts.record import Host, HostsError, IPAddress
from py_hosts.table import (
    MAX_LINE_LENGTH,
    STOPPED_PERIOD,
    Hosts,
    Reloader,
    StaticHosts,
    Stoppable,
    lookup,
)

__all__ = [
    "MAX_LINE_LENGTH",
    "RELOAD_DIRECTIVE",
    "STOPPED_PERIOD",
    "Host",
    "Hosts",
    "HostsError",
    "IPAddress",
    "LogEntry",
    "LogLevel",
    "Logger",
    "ReloadDirective",
    "Reloader",
    "StaticHosts",
    "Stoppable",
    "lookup",
    "parse_duration",
    "parse_ip",
    "parse_line",
    "split_line",
]
