"""
A small identifier/label table driven through the column codec.

This is reference glue rather than a data-access layer: it shows how a caller
binds identifiers with ColumnBinder and reads them back with RowMapper on each
backend, and it is what the `check` CLI command and the integration tests run.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Optional

from fixedcol.columns.binder import ColumnBinder
from fixedcol.columns.policy import Backend, classify_column_type
from fixedcol.columns.row_mapper import RowMapper
from fixedcol.domain.fixed_bytes import Address
from fixedcol.domain.models import IdentifierRecord
from fixedcol.infrastructure.db_factory import placeholder, transaction
from fixedcol.utils.logging import get_logger

log = get_logger(__name__)

_IDENTIFIER_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_ID_COLUMN = {
    Backend.SQLITE: "id INTEGER PRIMARY KEY AUTOINCREMENT",
    Backend.MYSQL: "id INT AUTO_INCREMENT PRIMARY KEY",
    Backend.POSTGRES: "id SERIAL PRIMARY KEY",
}
_LABEL_COLUMN = {
    Backend.SQLITE: "label TEXT",
    Backend.MYSQL: "label VARCHAR(255)",
    Backend.POSTGRES: "label VARCHAR(255)",
}


def default_column_type(backend: Backend | str, size: int = Address.SIZE) -> str:
    """Declared type used for identifier columns unless the caller picks one."""
    backend = Backend.parse(backend)
    if backend is Backend.SQLITE:
        return "TEXT"
    if backend is Backend.MYSQL:
        return f"BINARY({size})"
    return "BYTEA"


class IdentifierTable:
    """
    CRUD helpers for a `(id, identifier, label)` table.

    Parameters
    ----------
    conn : DB-API connection
        sqlite3, PyMySQL or psycopg connection.
    backend : Backend | str
        Backend `conn` talks to.
    name : str
        Table name (plain SQL identifier).
    column_type : str, optional
        Declared type of the identifier column; see `default_column_type`.
    """

    def __init__(
        self,
        conn: Any,
        backend: Backend | str,
        name: str,
        column_type: Optional[str] = None,
    ) -> None:
        if not _IDENTIFIER_NAME.match(name):
            raise ValueError(f"invalid table name: {name!r}")
        self.conn = conn
        self.backend = Backend.parse(backend)
        self.name = name
        self.column_type = column_type or default_column_type(self.backend)
        classify_column_type(self.backend, self.column_type)
        self._binder = ColumnBinder()
        self._mapper = RowMapper(IdentifierRecord, self.backend, {"identifier": self.column_type})
        self._p = placeholder(self.backend)

    # ── Schema ───────────────────────────────────────────────

    def create(self, drop_existing: bool = True) -> None:
        with transaction(self.conn) as cur:
            if drop_existing:
                cur.execute(f"DROP TABLE IF EXISTS {self.name}")
            cur.execute(
                f"CREATE TABLE {self.name} ("
                f"{_ID_COLUMN[self.backend]}, "
                f"identifier {self.column_type} NOT NULL, "
                f"{_LABEL_COLUMN[self.backend]})"
            )
        log.debug("created table", extra={"table": self.name, "column_type": self.column_type})

    def drop(self) -> None:
        with transaction(self.conn) as cur:
            cur.execute(f"DROP TABLE IF EXISTS {self.name}")

    # ── Writes ───────────────────────────────────────────────

    def _insert_sql(self) -> str:
        return f"INSERT INTO {self.name} (identifier, label) VALUES ({self._p}, {self._p})"

    def bind(self, value: Address) -> Any:
        return self._binder.bind(self.backend, value, self.column_type)

    def insert(self, record: IdentifierRecord) -> None:
        with transaction(self.conn) as cur:
            cur.execute(self._insert_sql(), (self.bind(record.identifier), record.label))

    def insert_many(self, records: Iterable[IdentifierRecord]) -> int:
        """Insert all records in one transaction; nothing is kept on failure."""
        count = 0
        with transaction(self.conn) as cur:
            for record in records:
                cur.execute(self._insert_sql(), (self.bind(record.identifier), record.label))
                count += 1
        log.debug("inserted batch", extra={"table": self.name, "rows": count})
        return count

    # ── Reads ────────────────────────────────────────────────

    def _select(self, where: str = "", params: tuple = (), order_by: str = "id") -> List[IdentifierRecord]:
        sql = f"SELECT id, identifier, label FROM {self.name}"
        if where:
            sql = f"{sql} WHERE {where}"
        sql = f"{sql} ORDER BY {order_by}"
        with transaction(self.conn) as cur:
            if params:
                cur.execute(sql, params)
            else:
                cur.execute(sql)
            rows = cur.fetchall()
            description = cur.description
        return self._mapper.map_all(rows, description)

    def get(self, identifier: Address) -> Optional[IdentifierRecord]:
        found = self._select(f"identifier = {self._p}", (self.bind(identifier),))
        return found[0] if found else None

    def all(self, order_by: str = "id") -> List[IdentifierRecord]:
        if order_by not in ("id", "identifier", "label"):
            raise ValueError(f"cannot order by {order_by!r}")
        return self._select(order_by=order_by)

    def between(self, low: Address, high: Address) -> List[IdentifierRecord]:
        """Rows with low <= identifier <= high, in identifier order."""
        return self._select(
            f"identifier >= {self._p} AND identifier <= {self._p}",
            (self.bind(low), self.bind(high)),
            order_by="identifier",
        )

    def count(self) -> int:
        with transaction(self.conn) as cur:
            cur.execute(f"SELECT COUNT(*) FROM {self.name}")
            (value,) = cur.fetchone()
        return int(value)

    def __repr__(self) -> str:
        return f"<IdentifierTable {self.name} {self.backend}:{self.column_type}>"


__all__ = ["IdentifierTable", "default_column_type"]
