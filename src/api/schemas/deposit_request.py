"""Request schemas for Deposit API"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from src.app.services.payment_gateway import BillingType


class CreateDepositRequestSchema(BaseModel):
    """
    Request schema for creating a deposit

    Used for POST /deposits endpoint.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount to deposit"
    )

    billing_type: BillingType = Field(
        default=BillingType.PIX,
        description="PIX, BOLETO or CREDIT_CARD"
    )

    tax_id: Optional[str] = Field(
        default=None,
        max_length=18,
        description="Payer CPF, formatted or digits only"
    )

    @field_validator('amount')
    @classmethod
    def validate_precision(cls, v):
        """Reject amounts with more than 2 decimal places"""
        if v.as_tuple().exponent < -2:
            raise ValueError("Amount must have at most 2 decimal places")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "20.00",
                "billing_type": "PIX",
                "tax_id": "123.456.789-09"
            }
        }
