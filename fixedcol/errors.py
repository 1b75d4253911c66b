"""
Error model for the fixed-length identifier codec.

Every failure raised by the codec layer derives from FixedBytesError, which is
itself a ValueError so that pydantic validation of records wraps codec failures
into a regular ValidationError.
"""

from __future__ import annotations

from typing import Any, Optional


class FixedBytesError(ValueError):
    """Base class for all codec errors."""


class LengthMismatch(FixedBytesError):
    """A byte buffer did not have exactly the expected number of bytes."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} bytes, got {actual}")


class InvalidHexLength(FixedBytesError):
    """
    A hex string did not decode to exactly the expected number of bytes.

    Both counts are in hex digits (prefix excluded).
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} hex digits, got {actual}")


class InvalidHexDigit(FixedBytesError):
    """A character outside [0-9a-fA-F] was found in a hex string."""

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(f"invalid hex character {character!r} at position {position}")


class UnsupportedColumnType(FixedBytesError):
    """The backend / declared column type combination is not recognized."""

    def __init__(self, backend: Any, column_type: Optional[str], reason: str = "") -> None:
        self.backend = backend
        self.column_type = column_type
        message = f"unsupported column type {column_type!r} for backend {backend}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnexpectedNull(FixedBytesError):
    """A NULL column value was found where an identifier was required."""

    def __init__(self, column: Optional[str] = None) -> None:
        self.column = column
        where = f" in column {column!r}" if column else ""
        super().__init__(f"unexpected NULL{where}")


__all__ = [
    "FixedBytesError",
    "LengthMismatch",
    "InvalidHexLength",
    "InvalidHexDigit",
    "UnsupportedColumnType",
    "UnexpectedNull",
]
