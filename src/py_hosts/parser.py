"""Hosts text parsing — tokenize a line, then classify its tokens.

Parsing happens in two independent stages:

1. **Tokenize** (``split_line``) — strip the ``#`` comment and split the
   rest into whitespace-separated fields.  Knows nothing about hosts.
2. **Classify** (``parse_line``) — look at the first field and decide
   whether the line is a ``reload`` directive, a host record, or noise.

Durations use the signed-decimal-with-unit form familiar from proxy and
resolver configs: ``30s``, ``5m``, ``1h30m``, ``1.5h``, ``300ms``.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from ipaddress import ip_address

from py_hosts.record import Host, IPAddress

RELOAD_DIRECTIVE = "reload"

_COMMENT = "#"
_ZONE = "%"
_MIN_FIELDS = 2

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC Greek small mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_NUMBER = r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION = re.compile(rf"[-+]?(?:{_NUMBER}{_UNIT})+")
_DURATION_PART = re.compile(rf"({_NUMBER})({_UNIT})")

# Longest duration representable as signed 64-bit nanoseconds.
_MAX_SECONDS = (2**63 - 1) / 1e9


@dataclass(frozen=True)
class ReloadDirective:
    """A ``reload <duration>`` line, holding the duration text as written."""

    literal: str


def split_line(line: str) -> list[str]:
    """Split a config line into fields.

    Text from the first ``#`` to the end of the line is dropped.  Tabs
    count as blanks and runs of blanks collapse, so the result never
    contains empty strings.

    Args:
        line: One line of hosts text, with or without its newline.

    Returns:
        The fields in order, or an empty list for blank/comment lines.

    """
    if not line:
        return []
    comment = line.find(_COMMENT)
    if comment >= 0:
        line = line[:comment]
    line = line.replace("\t", " ").strip()
    return [field for field in (part.strip() for part in line.split(" ")) if field]


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal such as ``30s`` or ``1h15m``.

    A unit is required on every number, except for the bare literal
    ``0``.  A leading ``-`` yields a negative duration.  Magnitudes past
    about 2562047h (signed 64-bit nanoseconds) are rejected.

    Raises:
        ValueError: If *text* is not a valid duration literal.

    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION.fullmatch(text):
        msg = f"invalid duration '{text}'"
        raise ValueError(msg)
    seconds = sum(
        float(number) * _UNIT_SECONDS[unit] for number, unit in _DURATION_PART.findall(text)
    )
    if seconds > _MAX_SECONDS:
        msg = f"invalid duration '{text}': out of range"
        raise ValueError(msg)
    if text.startswith("-"):
        seconds = -seconds
    return timedelta(seconds=seconds)


def parse_ip(text: str) -> IPAddress | None:
    """Return the address *text* denotes, or None if it is not an IP literal.

    Scoped IPv6 literals (``fe80::1%eth0``) are not accepted.
    """
    if _ZONE in text:
        return None
    try:
        return ip_address(text)
    except ValueError:
        return None


def parse_line(fields: list[str]) -> Host | ReloadDirective | None:
    """Classify the fields of one line.

    Args:
        fields: Output of ``split_line``.

    Returns:
        A ``ReloadDirective`` for ``reload <duration>``, a ``Host`` for
        ``<ip> <hostname> [alias ...]``, or None when the line has fewer
        than two fields.

    Raises:
        ValueError: If the first field is neither the reload keyword nor
            a valid IP address.

    """
    if len(fields) < _MIN_FIELDS:
        return None
    head, name, *aliases = fields
    if head == RELOAD_DIRECTIVE:
        return ReloadDirective(literal=name)
    ip = parse_ip(head)
    if ip is None:
        msg = f"invalid IP address '{head}'"
        raise ValueError(msg)
    return Host(ip=ip, hostname=name, aliases=tuple(aliases))
