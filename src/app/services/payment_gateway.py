"""Payment Gateway Interface

Stateless translation between deposit/withdrawal intents and the external
payment processor. Implementations never retry; failures are returned as
GATEWAY_UNAVAILABLE (timeouts, transport errors, 5xx) or GATEWAY_REJECTED
(the processor refused the request).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from libs.result import Result
from src.domain.account import Account
from src.domain.payment_reference import PaymentReference
from src.domain.withdrawal import PixKeyType


class BillingType(str, Enum):
    """Deposit billing methods"""
    PIX = "PIX"                  # Instant transfer
    BOLETO = "BOLETO"
    CREDIT_CARD = "CREDIT_CARD"


CONFIRMED_PAYMENT_STATUSES = {"CONFIRMED", "RECEIVED"}


@dataclass
class DepositIntent:
    """Payment created at the gateway for a deposit"""
    gateway_payment_id: str
    status: str
    billing_type: str
    value: Decimal
    due_date: Optional[date] = None
    invoice_url: Optional[str] = None
    bank_slip_url: Optional[str] = None
    pix_qr_code: Optional[str] = None
    pix_copy_paste: Optional[str] = None


@dataclass
class PaymentStatus:
    """Live status of a gateway payment"""
    gateway_payment_id: str
    status: str
    value: Decimal
    billing_type: str
    external_reference: Optional[str] = None
    confirmed_date: Optional[date] = None

    @property
    def is_confirmed(self) -> bool:
        return self.status in CONFIRMED_PAYMENT_STATUSES


@dataclass
class TransferReceipt:
    gateway_transfer_id: Optional[str]
    accepted: bool


class PaymentGateway(ABC):
    @abstractmethod
    async def create_deposit(
        self,
        account: Account,
        amount: Decimal,
        billing_type: BillingType,
        tax_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Result[DepositIntent]:
        """
        Create (or find) the gateway customer for the account and create a payment

        For PIX, the scannable code and copy-paste payload are fetched as well.

        Errors:
            INVALID_AMOUNT: amount below the configured minimum
            GATEWAY_UNAVAILABLE / GATEWAY_REJECTED
        """
        pass

    @abstractmethod
    async def create_transfer(
        self,
        amount: Decimal,
        destination_key: str,
        destination_key_type: PixKeyType,
        reference: PaymentReference,
        description: Optional[str] = None,
    ) -> Result[TransferReceipt]:
        """Request an instant transfer to the destination key"""
        pass

    @abstractmethod
    async def fetch_payment_status(self, gateway_payment_id: str) -> Result[PaymentStatus]:
        """
        Fetch live payment status

        Errors:
            PAYMENT_NOT_FOUND: the gateway does not know the payment
            GATEWAY_UNAVAILABLE
        """
        pass
