"""
Static encoding policy keyed on (backend, declared column type).

The declared column type is whatever the schema says for the identifier column
("BYTEA", "VARCHAR(42)", "BINARY(20)", ...). It is supplied by the caller and
never inferred from a runtime value.

    Backend     Declared type              Encoding
    ---------   ------------------------   -------------
    SQLite      any recognized / omitted   TEXT_HEX
    MySQL       binary / omitted           NATIVE_BINARY
    MySQL       text                       TEXT_HEX
    Postgres    BYTEA                      NATIVE_BINARY
    Postgres    text                       TEXT_HEX
    Postgres    omitted                    error
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from fixedcol.errors import UnsupportedColumnType


class Backend(str, Enum):
    SQLITE = "sqlite"
    MYSQL = "mysql"
    POSTGRES = "postgres"

    @classmethod
    def parse(cls, value: "Backend | str") -> "Backend":
        """Accept a Backend or a case-insensitive name/alias."""
        if isinstance(value, Backend):
            return value
        key = str(value).strip().lower()
        try:
            return _BACKEND_ALIASES[key]
        except KeyError:
            raise ValueError(
                f"Unknown backend '{value}'. Supported: {', '.join(b.value for b in cls)}"
            ) from None

    def __str__(self) -> str:
        return self.value


class ColumnEncoding(str, Enum):
    TEXT_HEX = "text_hex"
    NATIVE_BINARY = "native_binary"

    def __str__(self) -> str:
        return self.value


TEXT = "text"
BINARY = "binary"

_BACKEND_ALIASES: Dict[str, Backend] = {
    "sqlite": Backend.SQLITE,
    "sqlite3": Backend.SQLITE,
    "mysql": Backend.MYSQL,
    "mariadb": Backend.MYSQL,
    "postgres": Backend.POSTGRES,
    "postgresql": Backend.POSTGRES,
    "pg": Backend.POSTGRES,
}

# Base type names recognized per backend, after normalization.
_TEXT_TYPES: Dict[Backend, FrozenSet[str]] = {
    Backend.SQLITE: frozenset({"TEXT", "VARCHAR", "CHAR", "CHARACTER", "NCHAR", "NVARCHAR", "CLOB"}),
    Backend.MYSQL: frozenset(
        {"CHAR", "VARCHAR", "TEXT", "TINYTEXT", "MEDIUMTEXT", "LONGTEXT", "NCHAR", "NVARCHAR"}
    ),
    Backend.POSTGRES: frozenset({"TEXT", "VARCHAR", "CHARACTER VARYING", "CHAR", "CHARACTER", "BPCHAR"}),
}
_BINARY_TYPES: Dict[Backend, FrozenSet[str]] = {
    Backend.SQLITE: frozenset({"BLOB", "BINARY", "VARBINARY"}),
    Backend.MYSQL: frozenset({"BINARY", "VARBINARY", "BLOB", "TINYBLOB", "MEDIUMBLOB", "LONGBLOB"}),
    Backend.POSTGRES: frozenset({"BYTEA"}),
}

_POLICY: Dict[Tuple[Backend, str], ColumnEncoding] = {
    (Backend.SQLITE, TEXT): ColumnEncoding.TEXT_HEX,
    (Backend.SQLITE, BINARY): ColumnEncoding.TEXT_HEX,
    (Backend.MYSQL, TEXT): ColumnEncoding.TEXT_HEX,
    (Backend.MYSQL, BINARY): ColumnEncoding.NATIVE_BINARY,
    (Backend.POSTGRES, TEXT): ColumnEncoding.TEXT_HEX,
    (Backend.POSTGRES, BINARY): ColumnEncoding.NATIVE_BINARY,
}

# Encoding used when the caller does not name the column type. Postgres has
# none: both encodings are common there, so the declared type is mandatory.
_DEFAULTS: Dict[Backend, ColumnEncoding] = {
    Backend.SQLITE: ColumnEncoding.TEXT_HEX,
    Backend.MYSQL: ColumnEncoding.NATIVE_BINARY,
}

_LENGTH_SUFFIX = re.compile(r"\s*\(\s*\d+\s*\)\s*$")
_WHITESPACE = re.compile(r"\s+")


def normalize_column_type(column_type: str) -> str:
    """'varchar(42)' -> 'VARCHAR', 'character  varying (42)' -> 'CHARACTER VARYING'."""
    base = _LENGTH_SUFFIX.sub("", column_type.strip())
    return _WHITESPACE.sub(" ", base).upper()


def classify_column_type(backend: Backend | str, column_type: str) -> str:
    """Return TEXT or BINARY for a declared column type on `backend`."""
    backend = Backend.parse(backend)
    if not isinstance(column_type, str) or not column_type.strip():
        raise UnsupportedColumnType(backend, column_type, "empty column type")
    base = normalize_column_type(column_type)
    if base in _TEXT_TYPES[backend]:
        return TEXT
    if base in _BINARY_TYPES[backend]:
        return BINARY
    raise UnsupportedColumnType(backend, column_type)


def encoding_for(backend: Backend | str, column_type: Optional[str] = None) -> ColumnEncoding:
    """Look up the encoding for an identifier column."""
    backend = Backend.parse(backend)
    if column_type is None:
        try:
            return _DEFAULTS[backend]
        except KeyError:
            raise UnsupportedColumnType(
                backend, None, "declared column type is required (BYTEA or a text type)"
            ) from None
    return _POLICY[(backend, classify_column_type(backend, column_type))]


def policy_table() -> list[tuple[Backend, str, ColumnEncoding]]:
    """Representative (backend, declared type, encoding) rows, for display."""
    return [
        (Backend.SQLITE, "TEXT", encoding_for(Backend.SQLITE, "TEXT")),
        (Backend.SQLITE, "BINARY(N)", encoding_for(Backend.SQLITE, "BINARY")),
        (Backend.MYSQL, "BINARY(N)", encoding_for(Backend.MYSQL, "BINARY")),
        (Backend.MYSQL, "VARCHAR(2+2N)", encoding_for(Backend.MYSQL, "VARCHAR")),
        (Backend.POSTGRES, "BYTEA", encoding_for(Backend.POSTGRES, "BYTEA")),
        (Backend.POSTGRES, "VARCHAR(2+2N)", encoding_for(Backend.POSTGRES, "VARCHAR")),
    ]


__all__ = [
    "Backend",
    "ColumnEncoding",
    "TEXT",
    "BINARY",
    "normalize_column_type",
    "classify_column_type",
    "encoding_for",
    "policy_table",
]
