"""IPv4 addresses: dotted-quad text <-> 4-byte value."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Union

from hostaddr.core.port import Port, as_port
from hostaddr.errors import FormatError, FormatErrorKind

if TYPE_CHECKING:
    from hostaddr.core.ipv6 import IPv6Address

OCTET_COUNT = 4
MAX_OCTET = 0xFF
MAX_OCTET_DIGITS = 3

_DIGITS_RE = re.compile(r"[0-9]+")

IPv4Mask = Union["IPv4Address", Sequence[int]]


def parse_octets(text: str, source: str | None = None) -> tuple[int, int, int, int]:
    """Split a bare dotted quad into its four octets.

    Args:
        text: Dotted quad without any port suffix (e.g., '192.168.0.1')
        source: Full input to report in errors (defaults to `text`)

    Returns:
        Tuple of four ints in [0, 255]

    Raises:
        FormatError: if `text` is not a canonical dotted quad
    """
    source = text if source is None else source

    if text.startswith(".") or text.endswith("."):
        raise FormatError(
            FormatErrorKind.TRAILING_OR_LEADING_SEPARATOR,
            source,
            "dotted quad cannot start or end with '.'",
        )

    parts = text.split(".")
    if len(parts) != OCTET_COUNT:
        raise FormatError(
            FormatErrorKind.WRONG_GROUP_COUNT,
            source,
            f"expected {OCTET_COUNT} octets, got {len(parts)}",
        )

    octets = []
    for part in parts:
        if not _DIGITS_RE.fullmatch(part):
            raise FormatError(
                FormatErrorKind.NOT_A_NUMBER, source, f"octet {part!r} is not a number"
            )
        if len(part) > 1 and part[0] == "0":
            raise FormatError(
                FormatErrorKind.LEADING_ZERO, source, f"octet {part!r} has a leading zero"
            )
        if len(part) > MAX_OCTET_DIGITS or int(part) > MAX_OCTET:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, source, f"octet {part!r} is above 255"
            )
        octets.append(int(part))

    a, b, c, d = octets
    return a, b, c, d


@dataclass(frozen=True, slots=True, repr=False)
class IPv4Address:
    """An IPv4 address backed by its 4 network-order bytes."""

    packed: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "packed", bytes(self.packed))
        if len(self.packed) != OCTET_COUNT:
            raise FormatError(
                FormatErrorKind.WRONG_GROUP_COUNT,
                self.packed.hex(),
                f"an IPv4 address needs {OCTET_COUNT} bytes, got {len(self.packed)}",
            )

    # Construction

    @classmethod
    def parse(cls, text: str) -> IPv4Address:
        """Parse 'a.b.c.d' or 'a.b.c.d:port'; the port is checked, then dropped."""
        address, sep, port = text.partition(":")
        if sep:
            try:
                Port.parse(port)
            except FormatError as e:
                raise FormatError(e.kind, text, e.detail) from e
        return cls(bytes(parse_octets(address, text)))

    @classmethod
    def validate(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except FormatError:
            return False
        return True

    @classmethod
    def from_octets(cls, *octets: int) -> IPv4Address:
        if len(octets) != OCTET_COUNT:
            raise FormatError(
                FormatErrorKind.WRONG_GROUP_COUNT,
                repr(octets),
                f"expected {OCTET_COUNT} octets, got {len(octets)}",
            )
        for octet in octets:
            if not 0 <= octet <= MAX_OCTET:
                raise FormatError(
                    FormatErrorKind.OUT_OF_RANGE, repr(octets), f"invalid octet {octet}"
                )
        return cls(bytes(octets))

    @classmethod
    def from_integer(cls, value: int) -> IPv4Address:
        if not 0 <= value < 1 << 32:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, str(value), "not an unsigned 32-bit integer"
            )
        return cls(value.to_bytes(OCTET_COUNT, "big"))

    @classmethod
    def from_prefix_length(cls, length: int) -> IPv4Address:
        """Build the netmask with `length` leading one bits (24 -> 255.255.255.0)."""
        if not 0 <= length <= 32:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, str(length), "prefix length must be 0..32"
            )
        return cls.from_integer((0xFFFFFFFF << (32 - length)) & 0xFFFFFFFF)

    # Views

    @property
    def octets(self) -> tuple[int, ...]:
        return tuple(self.packed)

    @property
    def name(self) -> str:
        return ".".join(str(octet) for octet in self.packed)

    def to_integer(self) -> int:
        return int.from_bytes(self.packed, "big")

    def to_ipv6(self) -> IPv6Address:
        """Return the IPv4-mapped IPv6 address (::ffff:a.b.c.d)."""
        from hostaddr.core.ipv6 import IPV4_MAPPED_PREFIX, IPv6Address

        return IPv6Address(IPV4_MAPPED_PREFIX + self.packed)

    def format(self, port: Port | int | None = None) -> str:
        """Format as 'a.b.c.d' or 'a.b.c.d:port'."""
        if port is None:
            return self.name
        return f"{self.name}:{as_port(port)}"

    # Classification

    def is_localhost(self) -> bool:
        return self.packed[0] == 127

    def is_private(self) -> bool:
        first, second = self.packed[0], self.packed[1]
        return (
            first == 10
            or (first == 172 and 16 <= second <= 31)
            or (first == 192 and second == 168)
        )

    def is_multicast(self) -> bool:
        return 224 <= self.packed[0] <= 239

    def is_publicly_routable(self) -> bool:
        return not (self.is_private() or self.is_localhost() or self.is_multicast())

    def is_local(self) -> bool:
        return self.is_localhost()

    def is_remote(self) -> bool:
        return not self.is_local()

    # Subnets. A set mask bit marks a network bit, a clear bit a host bit.

    def network_address(self, mask: IPv4Mask) -> IPv4Address:
        mask_bytes = _mask_bytes(mask)
        return IPv4Address(bytes(a & m for a, m in zip(self.packed, mask_bytes)))

    def broadcast_address(self, mask: IPv4Mask) -> IPv4Address:
        mask_bytes = _mask_bytes(mask)
        return IPv4Address(
            bytes(a | (~m & MAX_OCTET) for a, m in zip(self.packed, mask_bytes))
        )

    def is_broadcast(self, mask: IPv4Mask) -> bool:
        return self == self.broadcast_address(mask)

    def is_within_range(self, start: IPv4Address, end: IPv4Address) -> bool:
        """Return True if start <= self <= end (inclusive, octet by octet)."""
        return start.packed <= self.packed <= end.packed

    def __bytes__(self) -> bytes:
        return self.packed

    def __int__(self) -> int:
        return self.to_integer()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"IPv4Address('{self.name}')"


def _mask_bytes(mask: IPv4Mask) -> bytes:
    if isinstance(mask, IPv4Address):
        return mask.packed
    return IPv4Address.from_octets(*mask).packed
