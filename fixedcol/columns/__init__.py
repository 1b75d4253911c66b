"""
Column layer: per-backend codec selection for identifier columns.

The binder and decoder share one static policy table (policy.py); RowMapper is
the thin glue that applies the decoder to whole result rows.
"""

from fixedcol.columns.binder import BoundParameter, ColumnBinder, bind
from fixedcol.columns.decoder import ColumnDecoder
from fixedcol.columns.policy import (
    Backend,
    ColumnEncoding,
    classify_column_type,
    encoding_for,
    policy_table,
)
from fixedcol.columns.row_mapper import RowMapper, column_names

__all__ = [
    "Backend",
    "BoundParameter",
    "ColumnBinder",
    "ColumnDecoder",
    "ColumnEncoding",
    "RowMapper",
    "bind",
    "classify_column_type",
    "column_names",
    "encoding_for",
    "policy_table",
]
