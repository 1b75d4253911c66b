"""
Raw-bytes codec for native binary columns (MySQL BINARY(N), Postgres BYTEA).

The buffer is the identifier's own bytes: no length prefix, no byte-order swap.
"""

from __future__ import annotations

from typing import Generic, Type, TypeVar

from fixedcol.domain.fixed_bytes import BytesLike, FixedBytes

T = TypeVar("T", bound=FixedBytes)


class BinaryCodec(Generic[T]):
    """Encode/decode a FixedBytes specialization to/from its raw bytes."""

    def __init__(self, fixed_type: Type[T]) -> None:
        if fixed_type.SIZE == 0:
            raise TypeError("BinaryCodec needs a FixedBytes[N] specialization")
        self.fixed_type = fixed_type

    def encode(self, value: T) -> bytes:
        if not isinstance(value, self.fixed_type):
            raise TypeError(f"expected {self.fixed_type.__name__}, got {type(value).__name__}")
        return bytes(value)

    def decode(self, buffer: BytesLike) -> T:
        # A str here means the column was bound with the text encoding.
        if isinstance(buffer, str):
            raise TypeError("binary column returned text; check the declared column type")
        return self.fixed_type.from_slice(buffer)

    def __repr__(self) -> str:
        return f"<BinaryCodec {self.fixed_type.__name__}>"


__all__ = ["BinaryCodec"]
