"""Ledger Transaction Repository Interface

Transactions are immutable and append-only.
Idempotency is enforced by the unique idempotency_key.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.ledger_transaction import LedgerTransaction


class LedgerTransactionRepository(ABC):

    @abstractmethod
    async def create(self, transaction: LedgerTransaction) -> LedgerTransaction:
        """
        Append a transaction

        Raises:
            IntegrityError: If idempotency_key already exists
        """
        pass

    @abstractmethod
    async def get_by_idempotency_key(self, idempotency_key: str) -> Optional[LedgerTransaction]:
        pass

    @abstractmethod
    async def get_by_account_id(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[LedgerTransaction], int]:
        """
        Paginated history for an account, newest first

        Returns:
            (transactions, total count)
        """
        pass

    @abstractmethod
    async def get_sum_by_account(self, account_id: str) -> Decimal:
        """Sum of signed amounts for an account (0 when none)"""
        pass
