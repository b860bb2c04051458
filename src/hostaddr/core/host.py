"""Hosts: an address plus an optional port."""

from __future__ import annotations

from dataclasses import dataclass, replace

from hostaddr.core.address import Address, parse as parse_address
from hostaddr.core.ipv4 import IPv4Address
from hostaddr.core.ipv6 import IPv6Address, split_brackets
from hostaddr.core.port import Port, as_port
from hostaddr.errors import FormatError, FormatErrorKind
from hostaddr.utils.logger import logger


def split_host(text: str) -> tuple[str, str | None, bool]:
    """Separate host text into its address and port parts.

    Args:
        text: e.g. '10.0.0.1', '10.0.0.1:80', '[::1]:80' or '::1'

    Returns:
        Tuple of (address text, port text or None, bracketed)

    Raises:
        FormatError: MALFORMED_BRACKET on unbalanced or misplaced brackets
    """
    has_open, has_close = "[" in text, "]" in text
    if has_open and has_close:
        address, port = split_brackets(text)
        return address, port, True
    if has_open or has_close:
        raise FormatError(
            FormatErrorKind.MALFORMED_BRACKET, text, "unbalanced '[' or ']'"
        )

    # A single colon followed by a port; anything else is left to the address
    # codecs (unbracketed IPv6 has several colons).
    parts = text.split(":")
    if len(parts) == 2 and Port.validate(parts[1]):
        return parts[0], parts[1], False
    return text, None, False


@dataclass(frozen=True, slots=True)
class Host:
    """An IPv4/IPv6 address with an optional port."""

    address: Address
    port: Port | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.address, (IPv4Address, IPv6Address)):
            raise TypeError(f"not an address: {self.address!r}")
        if self.port is not None:
            object.__setattr__(self, "port", as_port(self.port))

    @classmethod
    def create(cls, address: Address, port: Port | int | None = None) -> Host:
        return cls(address, port)

    @classmethod
    def parse(cls, text: str) -> Host:
        """Parse 'addr', 'addr:port', '[ipv6]' or '[ipv6]:port'.

        Raises:
            FormatError: with the full input as `text`
        """
        try:
            address_text, port_text, bracketed = split_host(text)
            if bracketed:
                address: Address = IPv6Address.parse(address_text)
            else:
                address = parse_address(address_text)
            port = Port.parse(port_text) if port_text is not None else None
        except FormatError as e:
            logger.debug("Rejected host %r: %s", text, e.kind)
            if e.text == text:
                raise
            raise FormatError(e.kind, text, e.detail) from e
        return cls(address, port)

    @classmethod
    def validate(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except FormatError:
            return False
        return True

    def with_port(self, port: Port | int | None) -> Host:
        """Return a copy of this host with another port (None drops it)."""
        return replace(self, port=port)

    def format(self) -> str:
        """Format as 'addr', 'addr:port' or '[ipv6]:port'."""
        return self.address.format(self.port)

    def __str__(self) -> str:
        return self.format()
