"""
Map driver rows into pydantic records, decoding identifier columns on the way.

Rows come from any DB-API cursor: either mappings (dict-like rows) or plain
sequences together with the column names from `cursor.description`. Only the
columns listed in `column_types` go through the ColumnDecoder; everything else
is passed to the model unchanged and validated there.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar, get_args

from pydantic import BaseModel

from fixedcol.columns.decoder import ColumnDecoder
from fixedcol.columns.policy import Backend, classify_column_type
from fixedcol.domain.fixed_bytes import Address, FixedBytes

M = TypeVar("M", bound=BaseModel)


def column_names(description: Optional[Sequence[Sequence[Any]]]) -> List[str]:
    """Column names from a DB-API `cursor.description`."""
    if not description:
        return []
    return [column[0] for column in description]


class RowMapper(Generic[M]):
    """
    Build `model` instances from result rows.

    Parameters
    ----------
    model : type[BaseModel]
        Target record type.
    backend : Backend | str
        Backend the rows were read from.
    column_types : dict[str, str]
        Declared SQL type of every identifier column, keyed by column name.
    fixed_type : type[FixedBytes]
        Specialization to decode identifier columns into.
    """

    def __init__(
        self,
        model: Type[M],
        backend: Backend | str,
        column_types: Dict[str, str],
        fixed_type: Type[FixedBytes] = Address,
    ) -> None:
        self.model = model
        self.backend = Backend.parse(backend)
        # Fail at construction for unknown declared types, not on the first row.
        for column_type in column_types.values():
            classify_column_type(self.backend, column_type)
        self.column_types = dict(column_types)
        self.decoder = ColumnDecoder(fixed_type)

    def _as_dict(self, row: Any, columns: Optional[Sequence[str]]) -> Dict[str, Any]:
        if isinstance(row, Mapping):
            return dict(row)
        if hasattr(row, "keys"):
            # sqlite3.Row and similar
            return {key: row[key] for key in row.keys()}
        if columns is None:
            raise ValueError("sequence rows need column names (pass cursor.description)")
        if len(columns) != len(row):
            raise ValueError(f"row has {len(row)} values but {len(columns)} column names were given")
        return dict(zip(columns, row))

    def _nullable(self, column: str) -> bool:
        field = self.model.model_fields.get(column)
        if field is None:
            return True
        return type(None) in get_args(field.annotation)

    def map(self, row: Any, columns: Optional[Sequence[Any]] = None) -> M:
        """
        Map one row.

        `columns` may be a list of names or a raw `cursor.description`.
        """
        names = _names(columns)
        data = self._as_dict(row, names)
        for column, column_type in self.column_types.items():
            if column not in data:
                continue
            if self._nullable(column):
                decode = self.decoder.decode_optional
            else:
                decode = self.decoder.decode
            data[column] = decode(self.backend, column_type, data[column], column=column)
        return self.model.model_validate(data)

    def map_all(self, rows: Iterable[Any], columns: Optional[Sequence[Any]] = None) -> List[M]:
        names = _names(columns)
        return [self.map(row, names) for row in rows]


def _names(columns: Optional[Sequence[Any]]) -> Optional[List[str]]:
    if columns is None:
        return None
    return [c if isinstance(c, str) else c[0] for c in columns]


__all__ = ["RowMapper", "column_names"]
