from .base import BaseModel, generate_uuid
from .account import Account, normalize_tax_id
from .ledger_transaction import LedgerTransaction, TransactionType
from .seller import Seller
from .order import Order, OrderStatus, DeliveryMethod
from .withdrawal import Withdrawal, WithdrawalStatus, PixKeyType
from .rating import Rating
from .payment_reference import PaymentReference, ReferenceType

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Account",
    "normalize_tax_id",
    "LedgerTransaction",
    "TransactionType",
    "Seller",
    "Order",
    "OrderStatus",
    "DeliveryMethod",
    "Withdrawal",
    "WithdrawalStatus",
    "PixKeyType",
    "Rating",
    "PaymentReference",
    "ReferenceType",
]
