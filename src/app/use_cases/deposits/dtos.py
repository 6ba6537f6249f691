"""Data Transfer Objects for Deposit Use Cases

Pydantic models for command inputs, gateway event payloads and responses.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from src.app.services.payment_gateway import BillingType


class CreateDepositCommandDTO(BaseModel):
    """
    Command DTO for creating a deposit

    The depositing account comes from the actor, never from the body.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount to deposit (minimum enforced by the gateway adapter)"
    )

    billing_type: BillingType = Field(
        default=BillingType.PIX,
        description="PIX, BOLETO or CREDIT_CARD"
    )

    tax_id: Optional[str] = Field(
        default=None,
        description="Payer CPF; overrides the one stored on the account"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "amount": "20.00",
                "billing_type": "PIX",
                "tax_id": "123.456.789-09"
            }
        }


class DepositResponseDTO(BaseModel):
    """Payment created at the gateway"""

    payment_id: str
    status: str
    billing_type: str
    value: Decimal
    due_date: Optional[date] = None
    invoice_url: Optional[str] = None
    bank_slip_url: Optional[str] = None
    pix_qr_code: Optional[str] = Field(default=None, description="Base64 PNG of the PIX QR code")
    pix_copy_paste: Optional[str] = Field(default=None, description="PIX copy-paste payload")


class DepositStatusResponseDTO(BaseModel):
    payment_id: str
    status: str
    value: Decimal
    billing_type: str
    confirmed_date: Optional[date] = None
    credited: bool = Field(
        default=False,
        description="True when this call credited the account"
    )


class GatewayPaymentDTO(BaseModel):
    """Payment or transfer object inside a gateway event"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    value: Decimal = Decimal("0")
    status: Optional[str] = None
    billing_type: Optional[str] = Field(default=None, alias="billingType")
    external_reference: Optional[str] = Field(default=None, alias="externalReference")


class GatewayEventDTO(BaseModel):
    """
    Inbound gateway event

    Payment events carry a `payment` object, transfer events a `transfer`
    object. Either may hold the externalReference.
    """

    model_config = ConfigDict(extra="ignore")

    event: str
    payment: Optional[GatewayPaymentDTO] = None
    transfer: Optional[GatewayPaymentDTO] = None

    @property
    def subject(self) -> Optional[GatewayPaymentDTO]:
        return self.payment or self.transfer


class GatewayEventResultDTO(BaseModel):
    event: str
    action: str = Field(
        ...,
        description="deposit_credited, already_settled, withdrawal_completed, already_completed or ignored"
    )
