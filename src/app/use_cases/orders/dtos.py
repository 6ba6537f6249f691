"""Data Transfer Objects for Order Use Cases"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.order import DeliveryMethod, Order, OrderStatus
from src.domain.rating import Rating


class CreateOrderCommandDTO(BaseModel):
    """
    Command DTO for a purchase

    The buyer is the actor; the price is taken from the seller's offer.
    """

    seller_id: str = Field(..., description="Seller registration to buy from")

    quantity: int = Field(
        ...,
        gt=0,
        description="Units of in-game currency"
    )

    delivery_method: DeliveryMethod = Field(
        ...,
        description="gamepass, donation or group_payout"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "seller_id": "9b2d4c1e-2a57-4d0e-8f0b-5b8d3c7a6e11",
                "quantity": 2000,
                "delivery_method": "gamepass"
            }
        }


class UpdateOrderStatusCommandDTO(BaseModel):
    status: OrderStatus


class SubmitRatingCommandDTO(BaseModel):
    rating: int = Field(..., description="1 to 5")
    comment: Optional[str] = Field(default=None, max_length=2000)


class OrderResponseDTO(BaseModel):
    id: str
    buyer_id: str
    seller_id: str
    quantity: int
    total_price: Decimal
    delivery_method: str
    status: str
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponseDTO":
        return cls(
            id=order.id,
            buyer_id=order.buyer_id,
            seller_id=order.seller_id,
            quantity=order.quantity,
            total_price=order.total_price,
            delivery_method=order.delivery_method.value,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            completed_at=order.completed_at,
        )


class PurchaseResponseDTO(BaseModel):
    order: OrderResponseDTO
    balance_after: Decimal = Field(..., description="Buyer balance after the debit")


class RatingResponseDTO(BaseModel):
    id: str
    order_id: str
    seller_id: str
    rating: int
    comment: Optional[str] = None
    seller_average_rating: Decimal
    seller_total_ratings: int
    created_at: datetime

    @classmethod
    def from_entity(
        cls, rating: Rating, average: Decimal, total: int
    ) -> "RatingResponseDTO":
        return cls(
            id=rating.id,
            order_id=rating.order_id,
            seller_id=rating.seller_id,
            rating=rating.rating,
            comment=rating.comment,
            seller_average_rating=average,
            seller_total_ratings=total,
            created_at=rating.created_at,
        )


class OrderScope(str, Enum):
    """Which side of the orders the actor is listing"""
    BUYER = "buyer"    # orders the actor placed
    SELLER = "seller"  # orders placed with the actor's seller registration
    ALL = "all"        # every order (admin)


class ListOrdersResponseDTO(BaseModel):
    orders: List[OrderResponseDTO]
    total: int = Field(..., description="Orders matching the filters")
    limit: int
    offset: int
