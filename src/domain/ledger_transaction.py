"""Ledger Transaction Domain Entity

Immutable append-only audit trail of every balance mutation.
The sum of an account's transaction amounts equals its balance.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class TransactionType(str, Enum):
    """Ledger transaction kinds"""
    DEPOSIT = "deposit"        # Gateway payment confirmed
    PURCHASE = "purchase"      # Buyer paid for an order
    SALE = "sale"              # Seller paid for a completed order
    WITHDRAWAL = "withdrawal"  # Seller payout (gross amount)
    FEE = "fee"                # Platform share of a withdrawal


class LedgerTransaction(BaseModel, table=True):
    """
    Ledger Transaction - Immutable record of a balance change

    Domain Rules:
    - Transactions are immutable (append-only)
    - amount is signed: credits positive, debits negative
    - balance_after - balance_before == amount
    - idempotency_key is unique; a second insert with the same key means
      the effect was already applied
    """

    __tablename__ = "transactions"
    __table_args__ = (
        Index('ix_transactions_account_created', 'account_id', 'created_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Transaction identifier (uuid)"
    )

    account_id: str = Field(
        sa_column=Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True),
        description="Owning account"
    )

    order_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), ForeignKey("orders.id", ondelete="SET NULL"), nullable=True),
        description="Related order, if any"
    )

    transaction_type: TransactionType = Field(
        description="Kind of transaction (deposit, purchase, sale, withdrawal, fee)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Signed amount applied to the balance"
    )

    balance_before: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Balance before the transaction"
    )

    balance_after: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Balance after the transaction"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Human-readable description"
    )

    idempotency_key: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Unique settlement key (e.g. deposit:<gateway payment id>)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=timestamp_column(),
        description="Transaction timestamp (immutable)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "0f1d2c3b-4a59-4d8e-8f70-6a5b4c3d2e1f",
                "account_id": "5b0e5a52-3c7d-4a8e-9d65-0e1f4c6b2a11",
                "order_id": None,
                "transaction_type": "deposit",
                "amount": "20.00",
                "balance_before": "0.00",
                "balance_after": "20.00",
                "description": "Deposit via PIX - gateway #pay_080225913252",
                "idempotency_key": "deposit:pay_080225913252",
                "created_at": "2025-11-27T10:29:21Z"
            }
        }
