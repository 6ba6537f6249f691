"""Request schemas for Order API"""

from typing import Optional
from pydantic import BaseModel, Field
from src.domain.order import DeliveryMethod, OrderStatus


class CreateOrderRequestSchema(BaseModel):
    """
    Request schema for buying from a seller

    Used for POST /orders endpoint. The buyer is the caller.
    """

    seller_id: str = Field(
        ...,
        min_length=1,
        description="Seller to buy from"
    )

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


class UpdateOrderStatusRequestSchema(BaseModel):
    status: OrderStatus


class SubmitRatingRequestSchema(BaseModel):
    rating: int = Field(..., description="Score from 1 to 5")
    comment: Optional[str] = Field(default=None, max_length=2000)
