from .account_repository import SqlAlchemyAccountRepository
from .ledger_transaction_repository import SqlAlchemyLedgerTransactionRepository
from .seller_repository import SqlAlchemySellerRepository
from .order_repository import SqlAlchemyOrderRepository
from .withdrawal_repository import SqlAlchemyWithdrawalRepository
from .rating_repository import SqlAlchemyRatingRepository

__all__ = [
    "SqlAlchemyAccountRepository",
    "SqlAlchemyLedgerTransactionRepository",
    "SqlAlchemySellerRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyWithdrawalRepository",
    "SqlAlchemyRatingRepository",
]
