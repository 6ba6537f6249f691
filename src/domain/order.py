"""Order Domain Entity

Created when a buyer commits to a seller's offer. total_price is fixed at
creation; status transitions are the only mutation afterwards.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class OrderStatus(str, Enum):
    """Order status types"""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DISPUTED = "disputed"


class DeliveryMethod(str, Enum):
    """How the seller hands over the in-game currency"""
    GAMEPASS = "gamepass"
    DONATION = "donation"
    GROUP_PAYOUT = "group_payout"


ORDER_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.DISPUTED},
    OrderStatus.PROCESSING: {OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.DISPUTED},
    OrderStatus.DISPUTED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

# Leaving a dispute is an admin decision
ADMIN_ONLY_SOURCES = {OrderStatus.DISPUTED}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ORDER_TRANSITIONS[current]


class Order(BaseModel, table=True):
    """
    Order - Purchase of in-game currency from a seller

    Domain Rules:
    - quantity within the seller's [min_amount, max_amount] at creation
    - total_price = quantity / 1000 * seller.price_per_1k, rounded to cents
    - total_price never recalculated
    - Status transitions follow ORDER_TRANSITIONS
    - completed_at is set when the order reaches COMPLETED
    """

    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint('quantity > 0', name='order_quantity_positive'),
        CheckConstraint('total_price > 0', name='order_total_positive'),
        Index('ix_orders_status', 'status'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Order identifier (uuid)"
    )

    buyer_id: str = Field(
        sa_column=Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True),
        description="Buying account"
    )

    seller_id: str = Field(
        sa_column=Column(String(36), ForeignKey("sellers.id"), nullable=False, index=True),
        description="Seller registration"
    )

    quantity: int = Field(
        description="Requested units of in-game currency"
    )

    total_price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Price charged to the buyer"
    )

    delivery_method: DeliveryMethod = Field(
        description="Delivery method (gamepass, donation, group_payout)"
    )

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        description="Order status"
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    updated_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())

    completed_at: Optional[datetime] = Field(
        default=None,
        sa_column=timestamp_column(nullable=True),
        description="Set when the order is completed"
    )
