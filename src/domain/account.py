"""Account Domain Entity

Custodial balance record tied to one platform user.
Balance is always >= 0 and changes only through LedgerTransactions.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Numeric, String
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class Account(BaseModel, table=True):
    """
    Account - Custodial balance holder

    Domain Rules:
    - Balance must be non-negative
    - Balance updates only through the ledger (one LedgerTransaction per change)
    - Never deleted while transactions reference it
    """

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint('balance >= 0', name='account_balance_non_negative'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Account identifier (uuid)"
    )

    username: str = Field(
        sa_column=Column(String(64), nullable=False, unique=True),
        description="Public username"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Contact email, also used to find the gateway customer"
    )

    tax_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(14), nullable=True),
        description="Individual taxpayer id (CPF), digits or formatted"
    )

    is_admin: bool = Field(
        default=False,
        description="Administrator role"
    )

    balance: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Current balance (must be >= 0)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Last balance update timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5b0e5a52-3c7d-4a8e-9d65-0e1f4c6b2a11",
                "username": "buyer_one",
                "email": "buyer@example.com",
                "tax_id": "12345678909",
                "is_admin": False,
                "balance": "15.00",
                "created_at": "2025-11-26T15:39:08Z",
                "updated_at": "2025-11-26T15:39:08Z"
            }
        }


def normalize_tax_id(tax_id: Optional[str]) -> Optional[str]:
    """Strip formatting from a CPF; return None unless exactly 11 digits remain"""
    if not tax_id:
        return None
    digits = re.sub(r"\D", "", tax_id)
    if len(digits) != 11:
        return None
    return digits
