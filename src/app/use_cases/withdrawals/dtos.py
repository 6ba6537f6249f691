"""Data Transfer Objects for Withdrawal Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field
from src.domain.withdrawal import PixKeyType, Withdrawal, WithdrawalStatus


class RequestWithdrawalCommandDTO(BaseModel):
    """
    Command DTO for a seller payout

    amount is the gross amount debited from the seller; the platform fee is
    taken out of it.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Gross amount to withdraw"
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

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "50.00",
                "destination_key": "seller@example.com",
                "destination_key_type": "EMAIL"
            }
        }


class UpdateWithdrawalStatusCommandDTO(BaseModel):
    status: WithdrawalStatus


class WithdrawalResponseDTO(BaseModel):
    id: str
    seller_id: str
    status: str
    gross_amount: Decimal
    fee_amount: Decimal
    net_amount: Decimal = Field(..., description="Amount sent to the destination key")
    destination_key: str
    destination_key_type: str
    gateway_transfer_id: Optional[str] = None
    balance_after: Optional[Decimal] = Field(
        default=None,
        description="Seller balance after the debit (request response only)"
    )
    created_at: datetime
    processed_at: Optional[datetime] = None

    @classmethod
    def from_entity(
        cls, withdrawal: Withdrawal, balance_after: Optional[Decimal] = None
    ) -> "WithdrawalResponseDTO":
        return cls(
            id=withdrawal.id,
            seller_id=withdrawal.seller_id,
            status=withdrawal.status.value,
            gross_amount=withdrawal.gross_amount,
            fee_amount=withdrawal.fee_amount,
            net_amount=withdrawal.amount,
            destination_key=withdrawal.destination_key,
            destination_key_type=withdrawal.destination_key_type.value,
            gateway_transfer_id=withdrawal.gateway_transfer_id,
            balance_after=balance_after,
            created_at=withdrawal.created_at,
            processed_at=withdrawal.processed_at,
        )
