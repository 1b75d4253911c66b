"""
Domain package for fixedcol.

Exports the FixedBytes value type and the record models built on it. Keep this
package free of database and codec-selection concerns.
"""

from fixedcol.domain.fixed_bytes import B256, Address, FixedBytes
from fixedcol.domain.models import IdentifierRecord, UserHash

__all__ = [
    "Address",
    "B256",
    "FixedBytes",
    "IdentifierRecord",
    "UserHash",
]
