"""Request schemas for Withdrawal API"""

from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from src.domain.withdrawal import PixKeyType, WithdrawalStatus


class RequestWithdrawalRequestSchema(BaseModel):
    """
    Request schema for a seller withdrawal

    Used for POST /withdrawals endpoint.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Gross amount to withdraw (fee is taken out of it)"
    )

    destination_key: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Instant-transfer destination key"
    )

    destination_key_type: PixKeyType = Field(
        ...,
        description="CPF, CNPJ, EMAIL, PHONE or EVP"
    )

    @field_validator('amount')
    @classmethod
    def validate_precision(cls, v):
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

    @field_validator('destination_key')
    @classmethod
    def strip_key(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("destination_key must not be blank")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "50.00",
                "destination_key": "seller@example.com",
                "destination_key_type": "EMAIL"
            }
        }


class UpdateWithdrawalStatusRequestSchema(BaseModel):
    status: WithdrawalStatus = Field(..., description="approved, completed or rejected")
