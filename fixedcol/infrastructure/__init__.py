"""
Infrastructure package for fixedcol.

Database connectivity used by the CLI and the integration tests. The codec
packages never import from here.
"""

from fixedcol.infrastructure.db_factory import (
    DRIVER_ERRORS,
    DatabaseURL,
    backend_for_url,
    connect,
    parse_url,
    placeholder,
    transaction,
)
from fixedcol.infrastructure.identifier_table import IdentifierTable, default_column_type

__all__ = [
    "DRIVER_ERRORS",
    "DatabaseURL",
    "IdentifierTable",
    "backend_for_url",
    "connect",
    "default_column_type",
    "parse_url",
    "placeholder",
    "transaction",
]
