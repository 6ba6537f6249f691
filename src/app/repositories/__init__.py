from .account_repository import AccountRepository
from .ledger_transaction_repository import LedgerTransactionRepository
from .seller_repository import SellerRepository
from .order_repository import OrderRepository
from .withdrawal_repository import WithdrawalRepository
from .rating_repository import RatingRepository

__all__ = [
    "AccountRepository",
    "LedgerTransactionRepository",
    "SellerRepository",
    "OrderRepository",
    "WithdrawalRepository",
    "RatingRepository",
]
