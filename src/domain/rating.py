"""Rating Domain Entity

One buyer rating per completed order.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, ForeignKey, String, Text
from src.domain.base import BaseModel, generate_uuid, timestamp_column, utcnow


class Rating(BaseModel, table=True):
    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint('rating >= 1 AND rating <= 5', name='rating_range'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    order_id: str = Field(
        sa_column=Column(String(36), ForeignKey("orders.id"), nullable=False, unique=True),
        description="Rated order (one rating per order)"
    )

    seller_id: str = Field(
        sa_column=Column(String(36), ForeignKey("sellers.id"), nullable=False, index=True)
    )

    buyer_id: str = Field(
        sa_column=Column(String(36), ForeignKey("accounts.id"), nullable=False)
    )

    rating: int = Field(description="Score from 1 to 5")

    comment: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(default_factory=utcnow, sa_column=timestamp_column())
