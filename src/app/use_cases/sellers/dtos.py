"""Data Transfer Objects for Seller Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.seller import (
    DEFAULT_MAX_AMOUNT,
    DEFAULT_MIN_AMOUNT,
    DEFAULT_PRICE_PER_1K,
    Seller,
)


class RegisterSellerCommandDTO(BaseModel):
    account_id: str = Field(..., description="Account to register as a seller")
    price_per_1k: Decimal = Field(default=DEFAULT_PRICE_PER_1K)
    min_amount: int = Field(default=DEFAULT_MIN_AMOUNT)
    max_amount: int = Field(default=DEFAULT_MAX_AMOUNT)


class UpdateSellerOfferCommandDTO(BaseModel):
    """Partial update; omitted fields keep their current value"""

    price_per_1k: Optional[Decimal] = None
    min_amount: Optional[int] = None
    max_amount: Optional[int] = None
    is_online: Optional[bool] = None

    class Config:
        json_schema_extra = {
            "example": {
                "price_per_1k": "4.50",
                "min_amount": 500,
                "max_amount": 50000,
                "is_online": True
            }
        }


class SellerResponseDTO(BaseModel):
    id: str
    account_id: str
    price_per_1k: Decimal
    min_amount: int
    max_amount: int
    is_online: bool
    total_sales: int
    average_rating: Decimal
    total_ratings: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, seller: Seller) -> "SellerResponseDTO":
        return cls(
            id=seller.id,
            account_id=seller.account_id,
            price_per_1k=seller.price_per_1k,
            min_amount=seller.min_amount,
            max_amount=seller.max_amount,
            is_online=seller.is_online,
            total_sales=seller.total_sales,
            average_rating=seller.average_rating,
            total_ratings=seller.total_ratings,
            created_at=seller.created_at,
            updated_at=seller.updated_at,
        )


class ListSellersResponseDTO(BaseModel):
    sellers: List[SellerResponseDTO]
    total: int
    limit: int
    offset: int
