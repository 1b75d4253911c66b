"""
Outgoing side: turn a FixedBytes value into the parameter a driver binds.

Text-hex columns get the canonical lowercase "0x..." string; binary columns get
the raw bytes. Binding performs no I/O and has no side effects, so drivers may
retry or bind speculatively.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from fixedcol.codecs.binary import BinaryCodec
from fixedcol.codecs.hex import HexCodec
from fixedcol.columns.policy import Backend, ColumnEncoding, encoding_for
from fixedcol.domain.fixed_bytes import FixedBytes

BoundParameter = Union[str, bytes]


class ColumnBinder:
    """
    Select the codec for an identifier column and encode the value.

    Example
    -------
        binder = ColumnBinder()
        cur.execute("INSERT INTO t (hash) VALUES (%s)", (binder.bind("postgres", value, "BYTEA"),))
    """

    def bind(
        self,
        backend: Backend | str,
        value: FixedBytes,
        column_type: Optional[str] = None,
    ) -> BoundParameter:
        """
        Encode `value` for a column declared as `column_type` on `backend`.

        Parameters
        ----------
        backend : Backend | str
            Target database engine.
        value : FixedBytes
            A value of any FixedBytes[N] specialization.
        column_type : str, optional
            Declared SQL type of the column. Required for Postgres.

        Returns
        -------
        str | bytes
            Hex text for TEXT_HEX columns, raw bytes for NATIVE_BINARY columns.
        """
        if not isinstance(value, FixedBytes) or value.SIZE == 0:
            raise TypeError(f"expected a FixedBytes value, got {type(value).__name__}")
        encoding = encoding_for(backend, column_type)
        if encoding is ColumnEncoding.TEXT_HEX:
            return HexCodec(type(value)).encode(value)
        return BinaryCodec(type(value)).encode(value)

    def bind_many(
        self,
        backend: Backend | str,
        values: Iterable[FixedBytes],
        column_type: Optional[str] = None,
    ) -> List[BoundParameter]:
        """Bind each value with the same column policy (batch inserts)."""
        return [self.bind(backend, value, column_type) for value in values]


def bind(backend: Backend | str, value: FixedBytes, column_type: Optional[str] = None) -> BoundParameter:
    """Module-level shortcut for ColumnBinder().bind."""
    return ColumnBinder().bind(backend, value, column_type)


__all__ = ["BoundParameter", "ColumnBinder", "bind"]
