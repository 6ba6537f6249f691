from .unit_of_work import UnitOfWork
from .payment_gateway import (
    PaymentGateway,
    BillingType,
    DepositIntent,
    PaymentStatus,
    TransferReceipt,
)
from .ledger import Ledger, Posting

__all__ = [
    "UnitOfWork",
    "PaymentGateway",
    "BillingType",
    "DepositIntent",
    "PaymentStatus",
    "TransferReceipt",
    "Ledger",
    "Posting",
]
