"""
Record models that carry an identifier column alongside ordinary scalars.

These mirror the rows the integration tests write and read back. Identifier
fields are typed with a FixedBytes specialization, so validation accepts raw
bytes, hex text or a ready value, and JSON serialization emits canonical hex.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fixedcol.domain.fixed_bytes import Address


class IdentifierRecord(BaseModel):
    """
    An identifier with a human label, e.g. a row of `ethereum_fixed`.
    """

    id: Optional[int] = Field(None, description="Surrogate key; None before insert.")
    identifier: Address = Field(..., description="20-byte identifier.")
    label: str = Field(..., description="Free-form label.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class UserHash(BaseModel):
    """
    A user's hash holding, as stored in the `user_hash_advanced` table.
    """

    user_id: int = Field(..., description="Owning user.")
    hash_data: Address = Field(..., description="20-byte hash.")
    hash_name: Optional[str] = Field(None, description="Display name for the hash.")
    is_primary: bool = Field(False, description="Whether this is the user's primary hash.")
    balance_wei: Decimal = Field(Decimal(0), description="Balance in wei (NUMERIC(78, 0)).")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = ["IdentifierRecord", "UserHash"]
