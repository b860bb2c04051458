"""TCP/UDP port numbers.

A port is an unsigned 16-bit integer. The accepted range is 0..65535
inclusive, for both `Port.parse` and `Port.validate`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from hostaddr.errors import FormatError, FormatErrorKind

MIN_PORT = 0
MAX_PORT = 65535
MAX_PORT_DIGITS = len(str(MAX_PORT))

_DIGITS_RE = re.compile(r"[0-9]+")


class PortType(StrEnum):
    """IANA port range a port belongs to."""

    WELL_KNOWN = "well_known"  # 0-1023
    REGISTERED = "registered"  # 1024-49151
    DYNAMIC_PRIVATE = "dynamic_private"  # 49152-65535
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True, order=True)
class Port:
    """A validated port number."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"port must be an int, got {type(self.value).__name__}")
        if not MIN_PORT <= self.value <= MAX_PORT:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE,
                str(self.value),
                f"port must be between {MIN_PORT} and {MAX_PORT}",
            )

    @classmethod
    def create(cls, value: int) -> Port:
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> Port:
        """Parse a base-10 port number.

        Args:
            text: ASCII digits only; signs, blanks and separators are rejected

        Returns:
            Port instance

        Raises:
            FormatError: NOT_A_NUMBER or OUT_OF_RANGE
        """
        if not _DIGITS_RE.fullmatch(text):
            raise FormatError(FormatErrorKind.NOT_A_NUMBER, text, "port is not a number")
        # Length check first: int() refuses very long digit strings
        digits = text.lstrip("0") or "0"
        if len(digits) > MAX_PORT_DIGITS or int(digits) > MAX_PORT:
            raise FormatError(
                FormatErrorKind.OUT_OF_RANGE,
                text,
                f"port must be between {MIN_PORT} and {MAX_PORT}",
            )
        return cls(int(digits))

    @classmethod
    def validate(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except FormatError:
            return False
        return True

    def is_well_known(self) -> bool:
        return 0 <= self.value <= 1023

    def is_registered(self) -> bool:
        return 1024 <= self.value <= 49151

    def is_dynamic_private(self) -> bool:
        return 49152 <= self.value <= 65535

    def is_in_range(self, low: int, high: int) -> bool:
        """Return True if low <= port <= high."""
        return low <= self.value <= high

    def classify(self) -> PortType:
        if self.is_well_known():
            return PortType.WELL_KNOWN
        if self.is_registered():
            return PortType.REGISTERED
        if self.is_dynamic_private():
            return PortType.DYNAMIC_PRIVATE
        return PortType.UNKNOWN

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


def as_port(value: Port | int) -> Port:
    """Return *value* as a Port, validating plain ints."""
    return value if isinstance(value, Port) else Port(value)
