"""Parse, validate and canonicalize IPv4/IPv6 addresses, ports and hosts.

Everything is a pure text <-> value transform: no DNS lookups and no sockets.

    >>> from hostaddr import Host
    >>> str(Host.parse("[2001:0db8::0001]:8080"))
    '[2001:db8::1]:8080'
"""

from hostaddr.core.address import (
    Address,
    AddressFamily,
    from_packed,
    get_family,
    parse as parse_address,
    validate as validate_address,
)
from hostaddr.core.host import Host
from hostaddr.core.http import HttpHost
from hostaddr.core.ipv4 import IPv4Address
from hostaddr.core.ipv6 import CompressionPolicy, IPv6Address
from hostaddr.core.port import Port, PortType
from hostaddr.errors import FormatError, FormatErrorKind

__all__ = [
    "Address",
    "AddressFamily",
    "CompressionPolicy",
    "FormatError",
    "FormatErrorKind",
    "Host",
    "HttpHost",
    "IPv4Address",
    "IPv6Address",
    "Port",
    "PortType",
    "from_packed",
    "get_family",
    "parse_address",
    "validate_address",
]
