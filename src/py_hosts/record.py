"""Host records — one static binding of an IP address to a set of names.

A hosts file is a local phone book consulted before DNS.  Each line
binds one address to a canonical hostname plus any number of aliases::

    192.168.1.1   host.local   alias1  alias2

A ``Host`` is the parsed form of one such line.
"""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address, ip_address

IPAddress = IPv4Address | IPv6Address


class HostsError(Exception):
    """Raise when a hosts source cannot be read."""


@dataclass(frozen=True)
class Host:
    """A static hostname → IP mapping.

    Frozen because records are shared between concurrent readers and
    are only ever replaced wholesale by a reload, never edited.
    """

    ip: IPAddress | None
    """The address the names resolve to (None for a placeholder record)."""

    hostname: str
    """The canonical name (e.g. 'host.local')."""

    aliases: tuple[str, ...] = ()
    """Alternate names, in the order they were written."""

    @classmethod
    def of(cls, ip: IPAddress | str | None, hostname: str, *aliases: str) -> "Host":
        """Build a record, parsing *ip* if it is given as text.

        Raises:
            ValueError: If *ip* is a string that is not a valid address.

        """
        address = ip_address(ip) if isinstance(ip, str) else ip
        return cls(ip=address, hostname=hostname, aliases=aliases)

    def matches(self, name: str) -> bool:
        """Return True if *name* is this record's hostname or one of its aliases.

        The hostname is compared first.
        """
        if self.hostname == name:
            return True
        return name in self.aliases

    def __str__(self) -> str:
        """Format as a hosts-file line."""
        fields = [] if self.ip is None else [str(self.ip)]
        fields.append(self.hostname)
        fields.extend(self.aliases)
        return " ".join(fields)
