"""Withdrawal Domain Entity

A seller payout request. amount is the net payout after the platform fee;
the seller's account was debited the gross amount when it was created.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class WithdrawalStatus(str, Enum):
    """Withdrawal status types"""
    PENDING = "pending"      # Ledger debited, transfer not accepted yet
    APPROVED = "approved"    # Gateway accepted the transfer
    COMPLETED = "completed"  # Gateway confirmed the transfer
    REJECTED = "rejected"    # Admin override


class PixKeyType(str, Enum):
    """Destination key types for instant transfers"""
    CPF = "CPF"
    CNPJ = "CNPJ"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    EVP = "EVP"


WITHDRAWAL_TRANSITIONS: dict[WithdrawalStatus, set[WithdrawalStatus]] = {
    WithdrawalStatus.PENDING: {
        WithdrawalStatus.APPROVED,
        WithdrawalStatus.COMPLETED,
        WithdrawalStatus.REJECTED,
    },
    WithdrawalStatus.APPROVED: {WithdrawalStatus.COMPLETED, WithdrawalStatus.REJECTED},
    WithdrawalStatus.COMPLETED: set(),
    WithdrawalStatus.REJECTED: set(),
}

TERMINAL_STATUSES = {WithdrawalStatus.COMPLETED, WithdrawalStatus.REJECTED}


def can_transition(current: WithdrawalStatus, new: WithdrawalStatus) -> bool:
    return new in WITHDRAWAL_TRANSITIONS[current]


class Withdrawal(BaseModel, table=True):
    """
    Withdrawal - Seller payout through the payment gateway

    Domain Rules:
    - amount = gross_amount - fee_amount
    - Created in PENDING together with the ledger debit and fee credit
    - processed_at is set when a terminal status is reached
    """

    __tablename__ = "withdrawals"
    __table_args__ = (
        CheckConstraint('amount > 0', name='withdrawal_amount_positive'),
        Index('ix_withdrawals_seller_id', 'seller_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Withdrawal identifier (uuid)"
    )

    seller_id: str = Field(
        sa_column=Column(String(36), ForeignKey("sellers.id"), nullable=False),
        description="Seller registration requesting the payout"
    )

    account_id: str = Field(
        sa_column=Column(String(36), ForeignKey("accounts.id"), nullable=False),
        description="Debited account"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Net payout (after fee)"
    )

    gross_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount debited from the seller"
    )

    fee_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Platform fee credited to the platform account"
    )

    status: WithdrawalStatus = Field(
        default=WithdrawalStatus.PENDING,
        description="Withdrawal status"
    )

    destination_key: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Instant-transfer destination key"
    )

    destination_key_type: PixKeyType = Field(
        description="Destination key type"
    )

    gateway_transfer_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Transfer id assigned by the gateway"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    processed_at: Optional[datetime] = Field(
        default=None,
        sa_column=timestamp_column(nullable=True),
        description="Set when completed or rejected"
    )
