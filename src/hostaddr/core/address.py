"""Address family detection and dispatch.

`Address` is a closed union of the two IP families. Code that needs
family-specific behavior matches on the concrete type:

    match address:
        case IPv4Address():
            ...
        case IPv6Address():
            ...
"""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

from hostaddr.core.ipv4 import IPv4Address
from hostaddr.core.ipv6 import IPv6Address
from hostaddr.errors import FormatError, FormatErrorKind

Address: TypeAlias = IPv4Address | IPv6Address


class AddressFamily(StrEnum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


def get_family(text: str) -> AddressFamily | None:
    """Return the family whose grammar accepts `text`, or None.

    IPv4 is tried first. The two grammars are disjoint, so the order only
    affects speed.
    """
    if not text:
        return None
    if IPv4Address.validate(text):
        return AddressFamily.IPV4
    if IPv6Address.validate(text):
        return AddressFamily.IPV6
    return None


def validate(text: str) -> bool:
    return get_family(text) is not None


def _closest_family(text: str) -> AddressFamily:
    # Bracketed or multi-colon text can only ever be IPv6
    if text.startswith("[") or text.count(":") > 1:
        return AddressFamily.IPV6
    return AddressFamily.IPV4


def parse(text: str) -> Address:
    """Parse `text` as whichever IP family accepts it.

    Args:
        text: Address text, optionally with a port ('1.2.3.4:80', '[::1]:80')

    Returns:
        IPv4Address or IPv6Address

    Raises:
        FormatError: from the codec the text most resembles when no family
            accepts it
    """
    family = get_family(text) or _closest_family(text)
    match family:
        case AddressFamily.IPV4:
            return IPv4Address.parse(text)
        case AddressFamily.IPV6:
            return IPv6Address.parse(text)


def from_packed(data: bytes) -> Address:
    """Rebuild an address from its 4 or 16 network-order bytes."""
    match len(data):
        case 4:
            return IPv4Address(data)
        case 16:
            return IPv6Address(data)
        case _:
            raise FormatError(
                FormatErrorKind.WRONG_GROUP_COUNT,
                bytes(data).hex(),
                f"expected 4 or 16 bytes, got {len(data)}",
            )


def family_of(address: Address) -> AddressFamily:
    match address:
        case IPv4Address():
            return AddressFamily.IPV4
        case IPv6Address():
            return AddressFamily.IPV6
        case _:
            raise TypeError(f"not an address: {address!r}")
