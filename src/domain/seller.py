"""Seller Domain Entity

A seller registration attached to an account. The seller's earnings and
payouts flow through the owning account's balance.
"""

from datetime import datetime
from decimal import Decimal
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow

DEFAULT_PRICE_PER_1K = Decimal("5.00")
DEFAULT_MIN_AMOUNT = 1000
DEFAULT_MAX_AMOUNT = 100000


class Seller(BaseModel, table=True):
    """
    Seller - Offer and reputation of a selling account

    Domain Rules:
    - One seller registration per account
    - price_per_1k > 0, min_amount > 0, max_amount >= min_amount
    - average_rating in [0, 5], recomputed when a rating is submitted
    """

    __tablename__ = "sellers"
    __table_args__ = (
        CheckConstraint('price_per_1k > 0', name='seller_price_positive'),
        CheckConstraint('min_amount > 0', name='seller_min_positive'),
        CheckConstraint('max_amount >= min_amount', name='seller_max_gte_min'),
        CheckConstraint('average_rating >= 0 AND average_rating <= 5', name='seller_rating_range'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Seller identifier (uuid)"
    )

    account_id: str = Field(
        sa_column=Column(String(36), ForeignKey("accounts.id"), nullable=False, unique=True),
        description="Owning account (receives sale credits, requests withdrawals)"
    )

    price_per_1k: Decimal = Field(
        default=DEFAULT_PRICE_PER_1K,
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price per 1000 units of in-game currency"
    )

    min_amount: int = Field(
        default=DEFAULT_MIN_AMOUNT,
        description="Minimum quantity per order"
    )

    max_amount: int = Field(
        default=DEFAULT_MAX_AMOUNT,
        description="Maximum quantity per order"
    )

    is_online: bool = Field(
        default=False,
        description="Seller is currently accepting orders"
    )

    total_sales: int = Field(
        default=0,
        description="Number of completed orders"
    )

    average_rating: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(3, 2), nullable=False, default=0),
        description="Average of submitted ratings"
    )

    total_ratings: int = Field(
        default=0,
        description="Number of submitted ratings"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    updated_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    def accepts_quantity(self, quantity: int) -> bool:
        return self.min_amount <= quantity <= self.max_amount
