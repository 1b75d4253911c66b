"""
Incoming side: turn a raw column value back into a FixedBytes value.

The decoder only ever sees fully materialized column values handed over by the
driver; it never reads partial buffers.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, Type, TypeVar

from fixedcol.codecs.binary import BinaryCodec
from fixedcol.codecs.hex import HexCodec
from fixedcol.columns.policy import Backend, ColumnEncoding, encoding_for
from fixedcol.domain.fixed_bytes import FixedBytes
from fixedcol.errors import FixedBytesError, UnexpectedNull, UnsupportedColumnType
from fixedcol.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=FixedBytes)


class ColumnDecoder(Generic[T]):
    """
    Decode identifier columns for one FixedBytes specialization.

    Parameters
    ----------
    fixed_type : type
        The FixedBytes[N] specialization to produce.
    """

    def __init__(self, fixed_type: Type[T]) -> None:
        self.fixed_type = fixed_type
        self._hex = HexCodec(fixed_type)
        self._binary = BinaryCodec(fixed_type)

    def decode(
        self,
        backend: Backend | str,
        column_type: str,
        raw_value: Any,
        column: Optional[str] = None,
    ) -> T:
        """
        Decode `raw_value` read from a column declared as `column_type`.

        Raises
        ------
        UnsupportedColumnType
            The declared type is missing, or neither a known text nor a known
            binary type.
        InvalidHexLength, InvalidHexDigit, LengthMismatch
            The value does not hold exactly N bytes.
        UnexpectedNull
            The column was NULL.
        """
        if column_type is None:
            raise UnsupportedColumnType(
                Backend.parse(backend), None, "declared column type is required when decoding"
            )
        encoding = encoding_for(backend, column_type)
        if raw_value is None:
            raise UnexpectedNull(column)
        try:
            if encoding is ColumnEncoding.TEXT_HEX:
                return self._hex.decode(raw_value)
            return self._binary.decode(raw_value)
        except FixedBytesError as exc:
            log.debug(
                "identifier decode failed",
                extra={"backend": str(backend), "column_type": column_type, "column": column, "error": str(exc)},
            )
            raise

    def decode_optional(
        self,
        backend: Backend | str,
        column_type: str,
        raw_value: Any,
        column: Optional[str] = None,
    ) -> Optional[T]:
        """Like decode, but SQL NULL maps to None."""
        if raw_value is None:
            encoding_for(backend, column_type)
            return None
        return self.decode(backend, column_type, raw_value, column)

    def __repr__(self) -> str:
        return f"<ColumnDecoder {self.fixed_type.__name__}>"


__all__ = ["ColumnDecoder"]
