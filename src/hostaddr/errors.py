"""Parse errors shared by every codec in hostaddr."""

from __future__ import annotations

from enum import StrEnum


class FormatErrorKind(StrEnum):
    """Reason a piece of text was rejected."""

    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"
    WRONG_GROUP_COUNT = "wrong_group_count"
    AMBIGUOUS_COMPRESSION = "ambiguous_compression"
    MALFORMED_BRACKET = "malformed_bracket"
    TRAILING_OR_LEADING_SEPARATOR = "trailing_or_leading_separator"
    LEADING_ZERO = "leading_zero"


class FormatError(ValueError):
    """Raised when text cannot be parsed as a port, address or host.

    Attributes:
        kind: What went wrong (see FormatErrorKind)
        text: The offending input, kept for diagnostics
        detail: Optional human readable explanation
    """

    def __init__(self, kind: FormatErrorKind, text: str, detail: str | None = None):
        self.kind = kind
        self.text = text
        self.detail = detail
        super().__init__(kind, text, detail)

    def __str__(self) -> str:
        reason = self.detail or self.kind.value.replace("_", " ")
        return f"{reason}: {self.text!r}"

    def __repr__(self) -> str:
        return f"FormatError({self.kind!s}, {self.text!r})"
