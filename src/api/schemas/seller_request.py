"""Request schemas for Seller API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.seller import DEFAULT_MAX_AMOUNT, DEFAULT_MIN_AMOUNT, DEFAULT_PRICE_PER_1K


class RegisterSellerRequestSchema(BaseModel):
    account_id: str = Field(..., min_length=1)
    price_per_1k: Decimal = Field(default=DEFAULT_PRICE_PER_1K)
    min_amount: int = Field(default=DEFAULT_MIN_AMOUNT)
    max_amount: int = Field(default=DEFAULT_MAX_AMOUNT)


class UpdateSellerOfferRequestSchema(BaseModel):
    price_per_1k: Optional[Decimal] = None
    min_amount: Optional[int] = None
    max_amount: Optional[int] = None
    is_online: Optional[bool] = None
