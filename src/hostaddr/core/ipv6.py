"""IPv6 addresses: colon-hex text <-> 16-byte value.

Parsing runs in explicit steps so each one can be tested on its own:

1. split_brackets: '[addr]:port' -> ('addr', 'port')
2. embedded IPv4 tail: '::ffff:192.0.2.1' -> '::ffff:c000:201'
3. expand_elision: the single '::' becomes the missing zero groups
4. each of the 8 groups is checked as 1-4 hex digits

The stored value always holds all 8 groups. Compression is applied only
when rendering text (see CompressionPolicy).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence, Union

from hostaddr.config import get_settings
from hostaddr.core.ipv4 import IPv4Address, parse_octets
from hostaddr.core.port import Port, as_port
from hostaddr.errors import FormatError, FormatErrorKind

GROUP_COUNT = 8
MAX_GROUP = 0xFFFF
MAX_GROUP_DIGITS = 4

IPV4_MAPPED_PREFIX = bytes(10) + b"\xff\xff"

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")

IPv6Mask = Union["IPv6Address", Sequence[int]]


class CompressionPolicy(StrEnum):
    """Which run of zero groups is collapsed into '::' when rendering."""

    LONGEST = "longest"  # RFC 5952: longest run of 2+, leftmost on ties
    FIRST = "first"  # first run of any length, including a single group

    @classmethod
    def default(cls) -> CompressionPolicy:
        """Return the policy configured by HOSTADDR_FORMAT_IPV6_COMPRESSION."""
        return cls(get_settings().format.ipv6_compression)


def split_brackets(text: str) -> tuple[str, str | None]:
    """Separate an optionally bracketed address from its port.

    Args:
        text: 'addr', '[addr]' or '[addr]:port'

    Returns:
        Tuple of (address text, port text or None)

    Raises:
        FormatError: MALFORMED_BRACKET on unbalanced brackets or a bad suffix
    """
    if not text.startswith("["):
        if "]" in text:
            raise FormatError(
                FormatErrorKind.MALFORMED_BRACKET, text, "']' without a leading '['"
            )
        return text, None

    body = text[1:]
    if "[" in body or body.count("]") != 1:
        raise FormatError(
            FormatErrorKind.MALFORMED_BRACKET, text, "expected exactly one '[...]' pair"
        )

    address, _, suffix = body.partition("]")
    if not suffix:
        return address, None
    if not suffix.startswith(":"):
        raise FormatError(
            FormatErrorKind.MALFORMED_BRACKET, text, "expected ':port' after ']'"
        )
    return address, suffix[1:]


def count_explicit_groups(address: str) -> int:
    """Number of groups written out in `address`, not counting the '::' elision."""
    return sum(len(side.split(":")) for side in address.split("::") if side)


def expand_elision(address: str, source: str | None = None) -> list[str]:
    """Replace the '::' of `address` with the zero groups it stands for.

    Args:
        address: Colon-separated hex groups with at most one '::'
        source: Full input to report in errors (defaults to `address`)

    Returns:
        The group texts, with the elided groups materialized as '0'.
        The length is not checked here.

    Raises:
        FormatError: AMBIGUOUS_COMPRESSION for repeated '::' or ':::',
            WRONG_GROUP_COUNT when '::' would stand for no group at all
    """
    source = address if source is None else source

    if ":::" in address or address.count("::") > 1:
        raise FormatError(
            FormatErrorKind.AMBIGUOUS_COMPRESSION, source, "'::' may appear only once"
        )
    if "::" not in address:
        return address.split(":")

    missing = GROUP_COUNT - count_explicit_groups(address)
    if missing < 1:
        raise FormatError(
            FormatErrorKind.WRONG_GROUP_COUNT,
            source,
            f"'::' must stand for at least one group, {GROUP_COUNT - missing} are explicit",
        )

    head, tail = address.split("::")
    head_groups = head.split(":") if head else []
    tail_groups = tail.split(":") if tail else []
    return head_groups + ["0"] * missing + tail_groups


def _replace_embedded_ipv4(address: str, source: str) -> str:
    # '::ffff:1.2.3.4' -> '::ffff:102:304'
    head, sep, last = address.rpartition(":")
    if not sep or "." not in last:
        return address
    a, b, c, d = parse_octets(last, source)
    return f"{head}:{a << 8 | b:x}:{c << 8 | d:x}"


def parse_groups(address: str, source: str | None = None) -> tuple[int, ...]:
    """Parse bare IPv6 text (no brackets, no port) into 8 group values."""
    source = address if source is None else source

    address = _replace_embedded_ipv4(address, source)

    if (address.startswith(":") and not address.startswith("::")) or (
        address.endswith(":") and not address.endswith("::")
    ):
        raise FormatError(
            FormatErrorKind.TRAILING_OR_LEADING_SEPARATOR,
            source,
            "address cannot start or end with a single ':'",
        )

    parts = expand_elision(address, source)
    if len(parts) != GROUP_COUNT:
        raise FormatError(
            FormatErrorKind.WRONG_GROUP_COUNT,
            source,
            f"expected {GROUP_COUNT} groups, got {len(parts)}",
        )

    groups = []
    for part in parts:
        if not _HEX_RE.fullmatch(part):
            raise FormatError(
                FormatErrorKind.NOT_A_NUMBER, source, f"group {part!r} is not hexadecimal"
            )
        if len(part) > MAX_GROUP_DIGITS:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, source, f"group {part!r} has more than 4 digits"
            )
        groups.append(int(part, 16))
    return tuple(groups)


def _zero_runs(groups: Sequence[int]) -> list[tuple[int, int]]:
    """Return (start, length) of every run of zero groups, left to right."""
    runs = []
    start = None
    for index, group in enumerate(groups):
        if group == 0:
            if start is None:
                start = index
        elif start is not None:
            runs.append((start, index - start))
            start = None
    if start is not None:
        runs.append((start, len(groups) - start))
    return runs


def compress_groups(groups: Sequence[int], policy: CompressionPolicy) -> str:
    """Render groups as lowercase hex, collapsing one zero run into '::'."""
    texts = [f"{group:x}" for group in groups]
    runs = _zero_runs(groups)

    if policy is CompressionPolicy.FIRST:
        candidates = runs[:1]
    else:
        candidates = [run for run in runs if run[1] >= 2]

    if not candidates:
        return ":".join(texts)

    # max() keeps the leftmost run on ties
    start, length = max(candidates, key=lambda run: run[1])
    return ":".join(texts[:start]) + "::" + ":".join(texts[start + length :])


@dataclass(frozen=True, slots=True, repr=False)
class IPv6Address:
    """An IPv6 address backed by its 16 network-order bytes."""

    packed: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "packed", bytes(self.packed))
        if len(self.packed) != GROUP_COUNT * 2:
            raise FormatError(
                FormatErrorKind.WRONG_GROUP_COUNT,
                self.packed.hex(),
                f"an IPv6 address needs {GROUP_COUNT * 2} bytes, got {len(self.packed)}",
            )

    # Construction

    @classmethod
    def parse(cls, text: str) -> IPv6Address:
        """Parse 'addr', '[addr]' or '[addr]:port'; the port is checked, then dropped."""
        address, port = split_brackets(text)
        if port is not None:
            try:
                Port.parse(port)
            except FormatError as e:
                raise FormatError(e.kind, text, e.detail) from e
        return cls.from_groups(*parse_groups(address, text))

    @classmethod
    def validate(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except FormatError:
            return False
        return True

    @classmethod
    def from_groups(cls, *groups: int) -> IPv6Address:
        if len(groups) != GROUP_COUNT:
            raise FormatError(
                FormatErrorKind.WRONG_GROUP_COUNT,
                repr(groups),
                f"expected {GROUP_COUNT} groups, got {len(groups)}",
            )
        for group in groups:
            if not 0 <= group <= MAX_GROUP:
                raise FormatError(
                    FormatErrorKind.OUT_OF_RANGE, repr(groups), f"invalid group {group:#x}"
                )
        return cls(b"".join(group.to_bytes(2, "big") for group in groups))

    @classmethod
    def from_integer(cls, value: int) -> IPv6Address:
        if not 0 <= value < 1 << 128:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, str(value), "not an unsigned 128-bit integer"
            )
        return cls(value.to_bytes(16, "big"))

    @classmethod
    def from_longs(cls, high: int, low: int) -> IPv6Address:
        """Build from two unsigned 64-bit halves (groups 0-3 and 4-7)."""
        for half in (high, low):
            if not 0 <= half < 1 << 64:
                raise FormatError(
                    FormatErrorKind.OUT_OF_RANGE, str(half), "not an unsigned 64-bit integer"
                )
        return cls(high.to_bytes(8, "big") + low.to_bytes(8, "big"))

    @classmethod
    def from_prefix_length(cls, length: int) -> IPv6Address:
        """Build the netmask with `length` leading one bits (64 -> ffff:ffff:ffff:ffff::)."""
        if not 0 <= length <= 128:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, str(length), "prefix length must be 0..128"
            )
        all_ones = (1 << 128) - 1
        return cls.from_integer((all_ones << (128 - length)) & all_ones)

    # Views

    @property
    def groups(self) -> tuple[int, ...]:
        return tuple(
            int.from_bytes(self.packed[i : i + 2], "big") for i in range(0, 16, 2)
        )

    @property
    def name(self) -> str:
        """Compressed form using the configured CompressionPolicy."""
        return self.compressed()

    @property
    def raw_name(self) -> str:
        """All 8 groups as 4 zero-padded hex digits, never compressed."""
        return ":".join(f"{group:04x}" for group in self.groups)

    def compressed(self, policy: CompressionPolicy | None = None) -> str:
        return compress_groups(self.groups, policy or CompressionPolicy.default())

    def to_integer(self) -> int:
        return int.from_bytes(self.packed, "big")

    def to_longs(self) -> tuple[int, int]:
        return (
            int.from_bytes(self.packed[:8], "big"),
            int.from_bytes(self.packed[8:], "big"),
        )

    def to_ipv4(self) -> IPv4Address:
        """Return the IPv4 address carried by an IPv4-mapped value (::ffff:a.b.c.d)."""
        if not self.is_ipv4_mapped():
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE, self.name, "not an IPv4-mapped address"
            )
        return IPv4Address(self.packed[12:])

    def format(self, port: Port | int | None = None) -> str:
        """Format as 'addr' or '[addr]:port'."""
        if port is None:
            return self.name
        return f"[{self.name}]:{as_port(port)}"

    # Classification

    def is_loopback(self) -> bool:
        return self.packed == bytes(15) + b"\x01"

    def is_local(self) -> bool:
        return self.is_loopback()

    def is_remote(self) -> bool:
        return not self.is_local()

    def is_multicast(self) -> bool:
        return self.packed[0] == 0xFF

    def is_link_local(self) -> bool:
        return self.groups[0] & 0xFFC0 == 0xFE80

    def is_ipv4_mapped(self) -> bool:
        return self.packed[:12] == IPV4_MAPPED_PREFIX

    # Subnets, group by group. A set mask bit marks a network bit.

    def network_address(self, mask: IPv6Mask) -> IPv6Address:
        mask_groups = _mask_groups(mask)
        return IPv6Address.from_groups(
            *(g & m for g, m in zip(self.groups, mask_groups))
        )

    def broadcast_address(self, mask: IPv6Mask) -> IPv6Address:
        mask_groups = _mask_groups(mask)
        return IPv6Address.from_groups(
            *(g | (~m & MAX_GROUP) for g, m in zip(self.groups, mask_groups))
        )

    def is_broadcast(self, mask: IPv6Mask) -> bool:
        return self == self.broadcast_address(mask)

    def is_within_range(self, start: IPv6Address, end: IPv6Address) -> bool:
        """Return True if start <= self <= end (inclusive, group by group)."""
        return start.groups <= self.groups <= end.groups

    def __bytes__(self) -> bytes:
        return self.packed

    def __int__(self) -> int:
        return self.to_integer()

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"IPv6Address('{self.raw_name}')"


def _mask_groups(mask: IPv6Mask) -> tuple[int, ...]:
    if isinstance(mask, IPv6Address):
        return mask.groups
    return IPv6Address.from_groups(*mask).groups
