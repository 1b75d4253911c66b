"""
Fixed-length byte array value type.

`FixedBytes[N]` returns the specialization of the generic type for width N.
Specializations are created once and cached; they add no behavior of their own,
only the `SIZE` class attribute, so every width shares this implementation.

Usage:
    from fixedcol.domain.fixed_bytes import Address, FixedBytes

    value = Address.from_hex("0x742d35cc6635c0532925a3b8d42cc72b5c2a9a1d")
    hash32 = FixedBytes[32].zero()

Equality and ordering follow the unsigned lexicographic order of the raw bytes,
which is the order databases apply to binary columns and, for a fixed-width
lowercase hex rendering, to text columns as well.
"""

from __future__ import annotations

import threading
from typing import Any, ClassVar, Dict, Iterator, Type, TypeVar, Union, overload

from pydantic_core import core_schema

from fixedcol.errors import FixedBytesError, InvalidHexDigit, InvalidHexLength, LengthMismatch

T = TypeVar("T", bound="FixedBytes")

BytesLike = Union[bytes, bytearray, memoryview]

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse_hex(text: str, size: int) -> bytes:
    """
    Parse `text` into exactly `size` bytes.

    Accepts an optional "0x"/"0X" prefix and digits in any case. Every digit is
    checked before the length, so a stray character is reported as
    InvalidHexDigit even when the length is also wrong.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    offset = 2 if text[:2] in ("0x", "0X") else 0
    digits = text[offset:]
    for index, char in enumerate(digits):
        if char not in _HEX_DIGITS:
            raise InvalidHexDigit(char, offset + index)
    if len(digits) != 2 * size:
        raise InvalidHexLength(2 * size, len(digits))
    return bytes.fromhex(digits)


def _restore(size: int, data: bytes) -> "FixedBytes":
    return FixedBytes[size](data)


class FixedBytes:
    """
    Immutable byte array of a fixed width.

    Instantiate a specialization (`FixedBytes[20]`, `Address`), never the
    generic class itself.
    """

    SIZE: ClassVar[int] = 0

    __slots__ = ("_data",)

    _specializations: ClassVar[Dict[int, type]] = {}
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __class_getitem__(cls, size: int) -> Type["FixedBytes"]:
        if cls is not FixedBytes:
            raise TypeError(f"{cls.__name__} is already specialized")
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise TypeError(f"FixedBytes width must be a positive int, got {size!r}")
        with cls._lock:
            specialized = cls._specializations.get(size)
            if specialized is None:
                specialized = type(
                    f"FixedBytes{size}",
                    (FixedBytes,),
                    {"__slots__": (), "SIZE": size, "__module__": __name__},
                )
                cls._specializations[size] = specialized
        return specialized

    def __init__(self, data: BytesLike) -> None:
        size = type(self).SIZE
        if size == 0:
            raise TypeError("use FixedBytes[N] to pick a width before constructing a value")
        if isinstance(data, str) or not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
        raw = bytes(data)
        if len(raw) != size:
            raise LengthMismatch(size, len(raw))
        object.__setattr__(self, "_data", raw)

    # ── Construction ─────────────────────────────────────────

    @classmethod
    def from_slice(cls: Type[T], data: BytesLike) -> T:
        """Wrap exactly SIZE bytes; raises LengthMismatch otherwise."""
        return cls(data)

    @classmethod
    def from_hex(cls: Type[T], text: str) -> T:
        """Parse a hex string (optional 0x prefix, any case)."""
        if cls.SIZE == 0:
            raise TypeError("use FixedBytes[N] to pick a width before parsing")
        return cls(parse_hex(text, cls.SIZE))

    @classmethod
    def zero(cls: Type[T]) -> T:
        """All-zero value of this width."""
        return cls(bytes(cls.SIZE))

    def is_zero(self) -> bool:
        return not any(self._data)

    # ── Conversion ───────────────────────────────────────────

    def to_hex(self) -> str:
        """Canonical form: 0x followed by 2*SIZE lowercase digits."""
        return "0x" + self._data.hex()

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> bytes: ...

    def __getitem__(self, index):
        return self._data[index]

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_hex()!r})"

    # ── Equality / ordering ──────────────────────────────────

    def _peer(self, other: Any) -> bool:
        return isinstance(other, FixedBytes) and other.SIZE == self.SIZE

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FixedBytes):
            return NotImplemented
        return self.SIZE == other.SIZE and self._data == other._data

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __lt__(self, other: Any) -> bool:
        if not self._peer(other):
            return NotImplemented
        return self._data < other._data

    def __le__(self, other: Any) -> bool:
        if not self._peer(other):
            return NotImplemented
        return self._data <= other._data

    def __gt__(self, other: Any) -> bool:
        if not self._peer(other):
            return NotImplemented
        return self._data > other._data

    def __ge__(self, other: Any) -> bool:
        if not self._peer(other):
            return NotImplemented
        return self._data >= other._data

    def __hash__(self) -> int:
        return hash((self.SIZE, self._data))

    # ── Immutability ─────────────────────────────────────────

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self: T) -> T:
        return self

    def __deepcopy__(self: T, memo: Dict[int, Any]) -> T:
        return self

    def __reduce__(self):
        return (_restore, (self.SIZE, self._data))

    # ── Pydantic integration ─────────────────────────────────

    @classmethod
    def _coerce(cls: Type[T], value: Any) -> T:
        if isinstance(value, cls):
            return value
        if isinstance(value, FixedBytes):
            raise LengthMismatch(cls.SIZE, value.SIZE)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_slice(value)
        if isinstance(value, str):
            return cls.from_hex(value)
        raise FixedBytesError(f"cannot convert {type(value).__name__} to {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_hex(), when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema, handler: Any) -> Dict[str, Any]:
        # Published as hex text; raw bytes are accepted in Python only.
        return {
            "type": "string",
            "pattern": f"^(0[xX])?[0-9a-fA-F]{{{2 * cls.SIZE}}}$",
            "description": f"{cls.SIZE}-byte identifier as hex, canonical form lowercase with 0x prefix",
            "examples": [cls.zero().to_hex()],
        }


Address = FixedBytes[20]
B256 = FixedBytes[32]


__all__ = ["FixedBytes", "Address", "B256", "BytesLike", "parse_hex"]
