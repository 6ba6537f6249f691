"""Account Repository Interface

Defines the contract for account persistence and atomic balance mutation.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.account import Account


class AccountRepository(ABC):
    """
    Repository interface for Account persistence

    Balances are never written from a value read earlier; apply_delta performs
    the check and the write in a single guarded statement.
    """

    @abstractmethod
    async def get_by_id(self, account_id: str, for_update: bool = False) -> Optional[Account]:
        """
        Retrieve account by ID

        Args:
            account_id: Account identifier
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    async def lock_many(self, account_ids: List[str]) -> List[Account]:
        """
        Lock several accounts in ascending id order

        A single global lock order prevents deadlocks between concurrent
        multi-account operations.

        Returns:
            Locked accounts that exist, in ascending id order
        """
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        pass

    @abstractmethod
    async def set_admin(self, account_id: str, is_admin: bool) -> bool:
        """
        Set the admin flag with a single UPDATE that leaves the balance alone

        Returns:
            False when the account does not exist
        """
        pass

    @abstractmethod
    async def apply_delta(self, account_id: str, delta: Decimal) -> Optional[Decimal]:
        """
        Atomically add a signed delta to the balance

        The update only happens when the resulting balance is >= 0.

        Args:
            account_id: Account identifier
            delta: Signed amount (negative for debits)

        Returns:
            New balance, or None when the account is missing or the
            balance would become negative (nothing written)
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[Account]:
        pass
