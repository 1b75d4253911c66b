"""
fixedcol - fixed-length identifier codec for SQLite, MySQL and PostgreSQL.

Persist an N-byte identifier (20-byte addresses by default) to columns of any
of the three backends and read it back byte-for-byte:

- text-hex columns (SQLite, TEXT/VARCHAR on MySQL and Postgres)
- native binary columns (MySQL BINARY(N), Postgres BYTEA)

The caller picks the backend and the declared column type; the binder and the
decoder choose the representation from a static policy table.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from fixedcol.codecs import BinaryCodec, HexCodec
from fixedcol.columns import (
    Backend,
    ColumnBinder,
    ColumnDecoder,
    ColumnEncoding,
    RowMapper,
    encoding_for,
)
from fixedcol.config import Settings, get_settings
from fixedcol.domain import B256, Address, FixedBytes, IdentifierRecord, UserHash
from fixedcol.errors import (
    FixedBytesError,
    InvalidHexDigit,
    InvalidHexLength,
    LengthMismatch,
    UnexpectedNull,
    UnsupportedColumnType,
)
from fixedcol.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Value type
    "FixedBytes",
    "Address",
    "B256",
    # Codecs
    "HexCodec",
    "BinaryCodec",
    # Column layer
    "Backend",
    "ColumnEncoding",
    "ColumnBinder",
    "ColumnDecoder",
    "RowMapper",
    "encoding_for",
    # Records
    "IdentifierRecord",
    "UserHash",
    # Errors
    "FixedBytesError",
    "LengthMismatch",
    "InvalidHexLength",
    "InvalidHexDigit",
    "UnsupportedColumnType",
    "UnexpectedNull",
    # Configuration
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
]
