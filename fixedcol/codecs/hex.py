"""
Text-hex codec for identifier columns stored as text.

The emitted form is always "0x" plus 2*N lowercase digits. A fixed width and a
single case make the text order match the byte order, which keeps range
predicates on text columns correct. Decoding accepts any case because drivers
and backends may echo text back re-cased.
"""

from __future__ import annotations

from typing import Generic, Type, TypeVar, Union

from fixedcol.domain.fixed_bytes import FixedBytes
from fixedcol.errors import InvalidHexDigit

T = TypeVar("T", bound=FixedBytes)

HexText = Union[str, bytes, bytearray, memoryview]


class HexCodec(Generic[T]):
    """Encode/decode a FixedBytes specialization to/from canonical hex text."""

    def __init__(self, fixed_type: Type[T]) -> None:
        if fixed_type.SIZE == 0:
            raise TypeError("HexCodec needs a FixedBytes[N] specialization")
        self.fixed_type = fixed_type

    def encode(self, value: T) -> str:
        if not isinstance(value, self.fixed_type):
            raise TypeError(f"expected {self.fixed_type.__name__}, got {type(value).__name__}")
        return value.to_hex()

    def decode(self, text: HexText) -> T:
        """
        Parse text produced by `encode`, in any case.

        Some drivers hand text columns back as bytes; those are read as ASCII
        and any non-ASCII byte is reported as an invalid digit.
        """
        if isinstance(text, (bytes, bytearray, memoryview)):
            text = _ascii(bytes(text))
        return self.fixed_type.from_hex(text)

    def __repr__(self) -> str:
        return f"<HexCodec {self.fixed_type.__name__}>"


def _ascii(raw: bytes) -> str:
    for index, byte in enumerate(raw):
        if byte > 0x7F:
            raise InvalidHexDigit(chr(byte), index)
    return raw.decode("ascii")


__all__ = ["HexCodec", "HexText"]
