"""Withdrawal Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.withdrawal import Withdrawal


class WithdrawalRepository(ABC):

    @abstractmethod
    async def get_by_id(self, withdrawal_id: str, for_update: bool = False) -> Optional[Withdrawal]:
        pass

    @abstractmethod
    async def create(self, withdrawal: Withdrawal) -> Withdrawal:
        pass

    @abstractmethod
    async def update(self, withdrawal: Withdrawal) -> Withdrawal:
        pass
